import re
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence, Tuple

_FIRST_LINE = re.compile(r"[^\r\n]*")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class CounterParty(NamedTuple):
    number: Optional[str] = None
    name: Optional[str] = None


class DialectPolicy(ABC):
    """
    Bank-specific rules layered on the generic MT940 parser.

    A dialect decides whether it handles a document (``accept``), which
    balance tag variants to read and in which priority order, and how the
    counter-party of a transaction is extracted from its text. Everything
    else (scanning, balance and :61: decoding, statement assembly) is shared.

    Dialects must be stateless: the reader may ask several of them to
    ``accept`` the same document before committing to one.

    Extraction hooks receive ``lines``: the :61: value at index 0 and, when
    the bank sent one, the :86: description at index 1.
    """

    name: str = "MT940"

    # Tag variants in priority order; the first present tag is used.
    opening_balance_tags: Tuple[str, ...] = ("60F", "60M")
    closing_balance_tags: Tuple[str, ...] = ("62F", "62M")

    @abstractmethod
    def accept(self, text: str) -> bool:
        """
        Returns True if this dialect should parse ``text``. Must be cheap and
        free of side effects.
        """

    def account_number(self, value: str) -> str:
        """
        Extracts the account number from the :25: value.
        """
        return value.strip().lstrip("0")

    def description(self, value: Optional[str]) -> Optional[str]:
        """
        Post-processes the :86: description. The default keeps it verbatim.
        """
        return value

    def extract_counter_party(self, lines: Sequence[str]) -> CounterParty:
        """
        Finds the counter-party account number and name of a transaction.
        A missing number or name is a normal outcome, not an error.
        """
        return CounterParty(self.contra_account_number(lines), self.contra_account_name(lines))

    def contra_account_number(self, lines: Sequence[str]) -> Optional[str]:
        return None

    def contra_account_name(self, lines: Sequence[str]) -> Optional[str]:
        return None

    @staticmethod
    def first_line(text: str) -> str:
        """
        The first physical line of ``text``, without its line break.
        """
        return _FIRST_LINE.match(text).group(0)

    @staticmethod
    def description_of(lines: Sequence[str]) -> Optional[str]:
        return lines[1] if len(lines) > 1 else None

    @staticmethod
    def unwrapped(text: str) -> str:
        """
        Joins a fixed-width wrapped field back into one line. Banks that use
        structured /CODE/value/ descriptions wrap them without separators.
        """
        return _LINE_BREAK.sub("", text)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class GenericDialect(DialectPolicy):
    """
    Plain MT940 without bank-specific extraction. Accepts any document that
    carries a statement reference (:20:) and an account (:25:) field.

    Not part of the default registry, since it would accept every document;
    register it last as a fallback.
    """

    name = "Generic"

    _STATEMENT_PATTERN = re.compile(r"^:20:", re.MULTILINE)
    _ACCOUNT_PATTERN = re.compile(r"^:25:", re.MULTILINE)

    def accept(self, text: str) -> bool:
        return bool(self._STATEMENT_PATTERN.search(text) and self._ACCOUNT_PATTERN.search(text))
