import re
from typing import Optional, Sequence

from openmt940.dialects.base import CounterParty, DialectPolicy


class AbnAmro(DialectPolicy):
    """
    ABN AMRO. Documents start with the bank's BIC. The counter-party shows up
    in one of three description layouts:

    * domestic: ``12.34.56.789 NAME`` (dotted account number, then the name)
    * giro: ``GIRO   1234567 NAME``
    * SEPA: ``/TRTP/SEPA OVERBOEKING/IBAN/NL..../BIC/..../NAME/..../`` or the
      older free-text ``IBAN: NL....  BIC: ....  NAAM: ....``
    """

    name = "ABN-AMRO"

    _DOMESTIC = re.compile(r"([0-9.]{11,14}) +(.*)")
    _GIRO = re.compile(r"GIRO +([0-9]+)(?: +(.*))?")
    _SEPA_IBAN = re.compile(r"/IBAN/([A-Z0-9]+)/")
    _SEPA_NAME = re.compile(r"/NAME/([^/]*)/")
    _LABEL_IBAN = re.compile(r"IBAN: ?([A-Z]{2}[0-9]{2}[A-Z0-9]+)")
    _LABEL_NAME = re.compile(r"NAAM: (.+?)(?: {2,}|$)")

    def accept(self, text: str) -> bool:
        return text.startswith("ABNANL2A")

    def extract_counter_party(self, lines: Sequence[str]) -> CounterParty:
        description = self.description_of(lines)
        if not description:
            return CounterParty()

        first = self.first_line(description)
        match = self._DOMESTIC.match(first)
        if match:
            return CounterParty(match.group(1).replace(".", ""), match.group(2).strip() or None)

        match = self._GIRO.match(first)
        if match:
            return CounterParty(match.group(1), (match.group(2) or "").strip() or None)

        flat = self.unwrapped(description)
        if "/TRTP/" in flat:
            return CounterParty(
                self._group(self._SEPA_IBAN, flat), self._group(self._SEPA_NAME, flat)
            )

        return CounterParty(
            self._group(self._LABEL_IBAN, flat), self._group(self._LABEL_NAME, flat)
        )

    @staticmethod
    def _group(pattern: re.Pattern, text: str) -> Optional[str]:
        match = pattern.search(text)
        if match:
            return match.group(1).strip() or None
        return None
