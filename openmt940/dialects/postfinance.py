import re
from typing import Optional, Sequence

from openmt940.dialects.base import DialectPolicy


class PostFinance(DialectPolicy):
    """
    Swiss PostFinance. Postal accounts are written ``12-345678-9``; SEPA and
    Swiss transfers label the counter-party IBAN and the sender or recipient.
    """

    name = "PostFinance"

    _ACCOUNT = re.compile(r"(?:KONTO|IBAN):? ?([0-9]{2}-[0-9]{1,6}-[0-9]|[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30})")
    _NAME = re.compile(r"(?:AUFTRAGGEBER|ABSENDER|EMPFAENGER|EMPFÄNGER): ?([^\r\n]+)")

    def accept(self, text: str) -> bool:
        return "POFICHBE" in self.first_line(text)

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        description = self.description_of(lines)
        if not description:
            return None
        match = self._ACCOUNT.search(description)
        return match.group(1) if match else None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        description = self.description_of(lines)
        if not description:
            return None
        match = self._NAME.search(description)
        if match:
            return match.group(1).strip() or None
        return None
