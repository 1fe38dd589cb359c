import re
from typing import Optional, Sequence

from openmt940.dialects.base import DialectPolicy


class Knab(DialectPolicy):
    """
    Knab. Reports intermediate closing balances (:62M:) in preference to
    final ones and labels the counter-party with "REK:" and "NAAM:".
    """

    name = "Knab"

    closing_balance_tags = ("62M", "62F")

    _ACCOUNT = re.compile(r"REK: ([a-zA-Z]{2}[0-9]{2}[a-zA-Z0-9]{4}[0-9]{7}(?:[a-zA-Z0-9]?){0,16})")
    _NAME = re.compile(r"NAAM: ([^\r\n]+)")

    def accept(self, text: str) -> bool:
        return "KNABNL" in self.first_line(text)

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        for line in lines:
            match = self._ACCOUNT.search(line)
            if match:
                return match.group(1).lstrip("0P").rstrip() or None
        return None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        for line in lines:
            match = self._NAME.search(line)
            if match:
                return match.group(1).strip() or None
        return None
