"""
Decoding of the MT940 balance fields (:60F:, :60M:, :62F:, :62M:, :64:, :65:).

Grammar, positional::

    1!a   debit/credit mark   'C' or 'D'
    6!n   date                YYMMDD
    3!a   currency            ISO 4217
    15d   amount              digits, comma as decimal separator

Amounts are kept as Decimal; the sign of a balance is carried by the mark,
never by the amount.
"""

import datetime
import re
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

from openmt940.exceptions import FieldDecodeError
from openmt940.models import BalanceInterface

# Two-digit years below the pivot belong to this century, the rest to the last.
CENTURY_PIVOT = 80

_AMOUNT_PATTERN = re.compile(r"[0-9]+(,[0-9]*)?|,[0-9]+")
_CURRENCY_PATTERN = re.compile(r"[A-Z]{3}")
_DATE_PATTERN = re.compile(r"[0-9]{6}")


class BalanceFields(NamedTuple):
    debit_credit: str
    date: datetime.date
    currency: str
    amount: Decimal


def expand_year(year_short: int) -> int:
    """
    Expands a two-digit SWIFT year: 00-79 -> 2000-2079, 80-99 -> 1980-1999.
    """
    if year_short >= 100:
        return year_short
    if year_short < CENTURY_PIVOT:
        return 2000 + year_short
    return 1900 + year_short


def parse_date(text: str, tag: Optional[str] = None) -> datetime.date:
    """
    Parses a YYMMDD date.

    Raises:
        FieldDecodeError: If the text is not six digits or not a calendar date.
    """
    if not _DATE_PATTERN.fullmatch(text):
        raise FieldDecodeError(f"Invalid date '{text}', expected YYMMDD", text, tag=tag)
    year = expand_year(int(text[0:2]))
    month = int(text[2:4])
    day = int(text[4:6])
    try:
        return datetime.date(year, month, day)
    except ValueError as e:
        raise FieldDecodeError(f"Invalid date '{text}': {e}", text, tag=tag) from e


def parse_amount(text: str, tag: Optional[str] = None) -> Decimal:
    """
    Converts an MT940 amount ("1234,56", "25,", "0,5") into a Decimal.

    Only digits and a single comma are accepted: no sign, no thousands
    separator, no dot.

    Raises:
        FieldDecodeError: If the text is not a valid non-negative amount.
    """
    if not _AMOUNT_PATTERN.fullmatch(text):
        raise FieldDecodeError(f"Invalid amount '{text}'", text, tag=tag)
    try:
        return Decimal(text.replace(",", "."))
    except InvalidOperation as e:
        raise FieldDecodeError(f"Invalid amount '{text}'", text, tag=tag) from e


def decode_balance(value: str, tag: Optional[str] = None) -> BalanceFields:
    """
    Decodes the value of a balance field such as ``C120608EUR1234,56``.

    Trailing whitespace and line breaks are ignored; anything else that does
    not fit the grammar is an error.

    Raises:
        FieldDecodeError: On an unknown mark, invalid date, bad currency or amount.
    """
    text = value.rstrip()
    if len(text) < 11:
        raise FieldDecodeError(f"Balance '{text}' is too short", value, tag=tag)

    mark = text[0]
    if mark not in ("C", "D"):
        raise FieldDecodeError(
            f"Invalid debit/credit mark '{mark}' in balance '{text}'", value, tag=tag
        )

    balance_date = parse_date(text[1:7], tag=tag)

    currency = text[7:10]
    if not _CURRENCY_PATTERN.fullmatch(currency):
        raise FieldDecodeError(f"Invalid currency '{currency}' in balance '{text}'", value, tag=tag)

    amount = parse_amount(text[10:], tag=tag)
    return BalanceFields(mark, balance_date, currency, amount)


def populate_balance(balance: BalanceInterface, fields: BalanceFields) -> BalanceInterface:
    """
    Copies decoded fields onto a default-constructed balance object, one
    attribute at a time, so custom types can validate each value as it is set.
    """
    balance.debit_credit = fields.debit_credit
    balance.date = fields.date
    balance.currency = fields.currency
    balance.amount = fields.amount
    return balance
