import re
from typing import Optional, Sequence

from openmt940.dialects.base import DialectPolicy


class Ing(DialectPolicy):
    """
    ING. Documents open with an ``0000 01INGBNL2AXXXX00001`` header line.
    SEPA descriptions carry the counter-party as
    ``/CNTP/<account>/<bic>/<name>/<city>/``; older descriptions start with
    the counter-party account number.
    """

    name = "ING"

    _CNTP = re.compile(r"/CNTP/([^/]*)/([^/]*)/([^/]*)/")
    _LEADING_ACCOUNT = re.compile(r"([0-9]{7,10}) +(.*)")

    def accept(self, text: str) -> bool:
        return "INGBNL2A" in self.first_line(text)

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        description = self.description_of(lines)
        if not description:
            return None
        match = self._CNTP.search(self.unwrapped(description))
        if match:
            return match.group(1).strip() or None
        match = self._LEADING_ACCOUNT.match(self.first_line(description))
        if match:
            return match.group(1).lstrip("0") or None
        return None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        description = self.description_of(lines)
        if not description:
            return None
        match = self._CNTP.search(self.unwrapped(description))
        if match:
            return match.group(3).strip() or None
        match = self._LEADING_ACCOUNT.match(self.first_line(description))
        if match:
            return match.group(2).strip() or None
        return None
