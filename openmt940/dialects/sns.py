import re
from typing import Optional, Sequence

from openmt940.dialects.base import DialectPolicy


class Sns(DialectPolicy):
    """
    SNS Bank. The description starts with the counter-party account (ten
    digits, or an IBAN) followed by the counter-party name.
    """

    name = "Sns"

    _COUNTER_PARTY = re.compile(r"([A-Z]{2}[0-9]{2}[A-Z]{4}[0-9]{10}|[0-9]{10})(?: +(.*))?")

    def accept(self, text: str) -> bool:
        return "SNSBNL2A" in self.first_line(text)

    def _match(self, lines: Sequence[str]):
        description = self.description_of(lines)
        if description is None:
            return None
        return self._COUNTER_PARTY.match(self.first_line(description))

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        match = self._match(lines)
        if match:
            return match.group(1).lstrip("0") or None
        return None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        match = self._match(lines)
        if match and match.group(2):
            return match.group(2).strip() or None
        return None
