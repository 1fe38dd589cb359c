"""
Decoding of the MT940 statement line (:61:).

Grammar of the first line::

    6!n     value date             YYMMDD
    [4!n]   entry (book) date      MMDD
    2a      debit/credit mark      C, D, RC or RD
    [1!a]   funds code
    15d     amount                 comma as decimal separator
    1!a3!c  transaction type       e.g. N014, NTRF
    16x     customer reference
    [//16x] bank reference

Further lines of the field are supplementary details. The description
(:86:) is a separate field and is attached by the assembler.
"""

import datetime
import re
from decimal import Decimal
from typing import NamedTuple, Optional

from openmt940.balance import parse_amount, parse_date
from openmt940.exceptions import FieldDecodeError
from openmt940.models import AccountInterface, TransactionInterface

_TRANSACTION_PATTERN = re.compile(
    r"(?P<value_date>[0-9]{6})"
    r"(?P<book_date>[0-9]{4})?"
    r"(?P<mark>R?[CD])"
    r"(?P<funds_code>[A-Z])?"
    r"(?P<amount>[0-9]+,[0-9]*)"
    r"(?P<type>[A-Z][A-Z0-9]{3})?"
    r"(?P<reference>.*)"
)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Marks whose booking lowers the account balance.
DEBIT_MARKS = ("D", "RC")


class TransactionFields(NamedTuple):
    value_date: datetime.date
    book_date: datetime.date
    debit_credit: str
    amount: Decimal
    funds_code: Optional[str]
    transaction_code: Optional[str]
    customer_reference: Optional[str]
    bank_reference: Optional[str]
    supplementary_details: Optional[str]


def resolve_book_date(value_date: datetime.date, month: int, day: int) -> datetime.date:
    """
    Places an MMDD book date in the year closest to the value date.

    The :61: line only carries month and day for the book date. Trying the
    previous, current and next year and keeping the nearest date handles
    bookings that straddle new year, e.g. value date 2012-12-31 with book
    date 0102 resolves to 2013-01-02.

    Raises:
        FieldDecodeError: If the month/day is not a date in any candidate year.
    """
    candidates = []
    for year in (value_date.year - 1, value_date.year, value_date.year + 1):
        try:
            candidates.append(datetime.date(year, month, day))
        except ValueError:
            continue

    if not candidates:
        text = f"{month:02d}{day:02d}"
        raise FieldDecodeError(f"Invalid book date '{text}'", text, tag="61")

    return min(candidates, key=lambda candidate: abs((candidate - value_date).days))


def decode_transaction(value: str) -> TransactionFields:
    """
    Decodes the value of a :61: field.

    Raises:
        FieldDecodeError: If the first line does not match the grammar or
            carries an invalid date or amount.
    """
    parts = _LINE_BREAK.split(value, maxsplit=1)
    first_line = parts[0].rstrip()
    supplementary = parts[1] if len(parts) > 1 and parts[1].strip() else None

    match = _TRANSACTION_PATTERN.fullmatch(first_line)
    if not match:
        raise FieldDecodeError(
            f"Could not parse transaction line '{first_line}'", value, tag="61"
        )

    value_date = parse_date(match.group("value_date"), tag="61")

    book_date = value_date
    if match.group("book_date"):
        raw = match.group("book_date")
        book_date = resolve_book_date(value_date, int(raw[0:2]), int(raw[2:4]))

    mark = match.group("mark")
    amount = parse_amount(match.group("amount"), tag="61")
    if mark in DEBIT_MARKS:
        amount = -amount

    customer_reference: Optional[str] = match.group("reference")
    bank_reference: Optional[str] = None
    if customer_reference and "//" in customer_reference:
        customer_reference, bank_reference = customer_reference.split("//", 1)
    customer_reference = customer_reference or None
    bank_reference = bank_reference or None

    return TransactionFields(
        value_date=value_date,
        book_date=book_date,
        debit_credit=mark,
        amount=amount,
        funds_code=match.group("funds_code"),
        transaction_code=match.group("type"),
        customer_reference=customer_reference,
        bank_reference=bank_reference,
        supplementary_details=supplementary,
    )


def populate_transaction(
    transaction: TransactionInterface,
    fields: TransactionFields,
    description: Optional[str],
    contra_account: Optional[AccountInterface],
) -> TransactionInterface:
    """
    Copies decoded fields onto a default-constructed transaction object in a
    fixed order: dates, amount, description, counter-party, codes, references.
    """
    transaction.value_date = fields.value_date
    transaction.book_date = fields.book_date
    transaction.debit_credit = fields.debit_credit
    transaction.amount = fields.amount
    transaction.description = description
    transaction.contra_account = contra_account
    transaction.funds_code = fields.funds_code
    transaction.transaction_code = fields.transaction_code
    transaction.customer_reference = fields.customer_reference
    transaction.bank_reference = fields.bank_reference
    transaction.supplementary_details = fields.supplementary_details
    return transaction
