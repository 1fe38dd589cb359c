import re
from typing import Optional, Sequence

from openmt940.dialects.base import DialectPolicy


class Rabobank(DialectPolicy):
    """
    Rabobank. Documents start with a ``:940:`` line and no SWIFT envelope.

    The counter-party account sits in the reference slot of the :61: line,
    right after the transaction type, and the counter-party name on the
    following line of the same field. An all-zero account means there is no
    counter-party. SEPA descriptions may also name the party in a
    ``/BENM//NAME/`` or ``/ORDP//NAME/`` segment.
    """

    name = "Rabobank"

    _STATEMENT_LINE = re.compile(
        r"[0-9]{6}(?:[0-9]{4})?R?[CD][A-Z]?[0-9]+,[0-9]*[A-Z][A-Z0-9]{3}"
        r"([A-Z]{2}[0-9]{2}[A-Z]{4}[0-9]{10}|[0-9]{1,10})"
    )
    _PARTY_NAME = re.compile(r"/(?:BENM|ORDP)//NAME/([^/]*)/")
    _ACCOUNT_FIELD = re.compile(r"(?P<number>.*?[0-9])\s*(?P<currency>[A-Z]{3})?\s*")

    def accept(self, text: str) -> bool:
        return text.startswith(":940:")

    def account_number(self, value: str) -> str:
        match = self._ACCOUNT_FIELD.fullmatch(value.strip())
        if match:
            return match.group("number").lstrip("0")
        return super().account_number(value)

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        match = self._STATEMENT_LINE.match(self.first_line(lines[0]))
        if not match:
            return None
        return match.group(1).lstrip("0") or None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        statement_line = lines[0].splitlines()
        if len(statement_line) > 1 and statement_line[1].strip():
            return statement_line[1].strip()

        description = self.description_of(lines)
        if description:
            match = self._PARTY_NAME.search(self.unwrapped(description))
            if match:
                return match.group(1).strip() or None
        return None
