import logging
import re
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from openmt940.balance import decode_balance, populate_balance
from openmt940.dialects.base import DialectPolicy
from openmt940.exceptions import ParseError, StructuralError
from openmt940.factory import SKIP, ObjectFactory
from openmt940.models import BalanceInterface, StatementInterface, TransactionInterface
from openmt940.scanner import Field, iter_fields
from openmt940.transaction import decode_transaction, populate_transaction

logger = logging.getLogger(__name__)

# A statement starts at every ":20:" (transaction reference) line.
_BOUNDARY = re.compile(r"(?:\A|(?<=\n)|(?<=\r)):20:")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

ACCOUNT_TAG = "25"
STATEMENT_NUMBER_TAGS = ("28C", "28")
TRANSACTION_TAG = "61"
DESCRIPTION_TAG = "86"


class StatementAssembler:
    """
    Turns one MT940 document into statement objects using a single dialect.

    Any parse error aborts the whole document: no partial result is
    returned. Errors are annotated with the dialect name and the absolute
    line number of the offending field.
    """

    def __init__(
        self,
        dialect: DialectPolicy,
        factory: Optional[ObjectFactory] = None,
        dialect_name: Optional[str] = None,
    ):
        self.dialect = dialect
        self.factory = factory or ObjectFactory()
        self.dialect_name = dialect_name or dialect.name

    def assemble(self, text: str) -> List[StatementInterface]:
        statements = []
        try:
            for line_offset, chunk in self.split_statements(text):
                statement = self._statement(chunk, line_offset)
                if statement is not None:
                    statements.append(statement)
        except ParseError as e:
            if e.dialect is None:
                e.dialect = self.dialect_name
            raise

        logger.debug("Parsed %d statement(s) with dialect %s", len(statements), self.dialect_name)
        return statements

    @staticmethod
    def split_statements(text: str) -> Iterator[Tuple[int, str]]:
        """
        Yields ``(line_offset, chunk)`` for every statement in ``text``. Each
        chunk starts with its :20: line; ``line_offset`` is the number of
        lines that precede it in the document.
        """
        starts = [match.start() for match in _BOUNDARY.finditer(text)]
        line_offset = 0
        previous = 0
        for index, start in enumerate(starts):
            line_offset += len(_LINE_BREAK.findall(text, previous, start))
            previous = start
            end = starts[index + 1] if index + 1 < len(starts) else len(text)
            yield line_offset, text[start:end]

    def _statement(self, chunk: str, line_offset: int) -> Optional[StatementInterface]:
        try:
            fields = list(iter_fields(chunk))
        except StructuralError as e:
            if e.line_number is not None:
                e.line_number += line_offset
            raise

        account_field = self._find(fields, (ACCOUNT_TAG,))
        if account_field is None:
            raise StructuralError(
                "Statement has no account field", tag=ACCOUNT_TAG, line_number=line_offset + 1
            )

        account = self.factory.create_account(self.dialect.account_number(account_field.value))
        if account is SKIP:
            logger.debug("Skipping statement at line %d: account hook skipped", line_offset + 1)
            return None

        number_field = self._find(fields, STATEMENT_NUMBER_TAGS)
        number = number_field.value.strip() if number_field is not None else None

        statement = self.factory.create_statement(account, number)
        if statement is SKIP:
            logger.debug("Skipping statement %s: statement hook skipped", number)
            return None

        statement.opening_balance = self._balance(
            fields,
            self.dialect.opening_balance_tags,
            self.factory.create_opening_balance,
            line_offset,
        )
        statement.closing_balance = self._balance(
            fields,
            self.dialect.closing_balance_tags,
            self.factory.create_closing_balance,
            line_offset,
        )

        for transaction in self._transactions(fields, line_offset):
            statement.add_transaction(transaction)

        return statement

    def _balance(
        self,
        fields: Sequence[Field],
        tags: Sequence[str],
        create: Callable[[], object],
        line_offset: int,
    ) -> Optional[BalanceInterface]:
        # Tags are tried in priority order, not document order.
        for tag in tags:
            field = self._find(fields, (tag,))
            if field is None:
                continue
            decoded = self._decode(decode_balance, field, line_offset, field.value, field.tag)
            balance = create()
            if balance is SKIP:
                return None
            return populate_balance(balance, decoded)
        return None

    def _transactions(
        self, fields: Sequence[Field], line_offset: int
    ) -> Iterator[TransactionInterface]:
        for index, field in enumerate(fields):
            if field.tag != TRANSACTION_TAG:
                continue

            decoded = self._decode(decode_transaction, field, line_offset, field.value)

            transaction = self.factory.create_transaction()
            if transaction is SKIP:
                continue

            lines = [field.value]
            description = None
            if index + 1 < len(fields) and fields[index + 1].tag == DESCRIPTION_TAG:
                description = fields[index + 1].value
                lines.append(description)

            counter_party = self.dialect.extract_counter_party(lines)
            contra_account = None
            if counter_party.number or counter_party.name:
                contra_account = self.factory.create_contra_account(counter_party.number)
                if contra_account is SKIP:
                    contra_account = None
                else:
                    contra_account.name = counter_party.name

            yield populate_transaction(
                transaction, decoded, self.dialect.description(description), contra_account
            )

    @staticmethod
    def _decode(decoder, field: Field, line_offset: int, *args):
        try:
            return decoder(*args)
        except ParseError as e:
            if e.tag is None:
                e.tag = field.tag
            if e.line_number is None:
                e.line_number = line_offset + field.line_number
            raise

    @staticmethod
    def _find(fields: Sequence[Field], tags: Sequence[str]) -> Optional[Field]:
        for tag in tags:
            for field in fields:
                if field.tag == tag:
                    return field
        return None
