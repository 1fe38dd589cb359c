import re
from typing import Optional, Sequence

from openmt940.dialects.base import DialectPolicy


class Triodos(DialectPolicy):
    """
    Triodos Bank. The account field reads ``TRIODOSBANK/0123456789`` and
    descriptions use numbered ``>NN`` sub-fields: ``>31`` holds the
    counter-party account, ``>32`` and ``>33`` its name.
    """

    name = "Triodos"

    _MARKER = re.compile(r"^:25:TRIODOSBANK/", re.MULTILINE)
    _ACCOUNT = re.compile(r">31([A-Z0-9]+)")
    _NAME = re.compile(r">3[23]([^>]*)")

    def accept(self, text: str) -> bool:
        return bool(self._MARKER.search(text))

    def account_number(self, value: str) -> str:
        _, _, number = value.strip().rpartition("/")
        return number.lstrip("0")

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        description = self.description_of(lines)
        if not description:
            return None
        match = self._ACCOUNT.search(self.unwrapped(description))
        if match:
            return match.group(1).lstrip("0") or None
        return None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        description = self.description_of(lines)
        if not description:
            return None
        parts = [part.strip() for part in self._NAME.findall(self.unwrapped(description))]
        name = " ".join(part for part in parts if part)
        return name or None
