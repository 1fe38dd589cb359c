"""
openmt940: A lightweight Python package to parse SWIFT MT940 bank statements
from many banks into usable structured data.
"""

from .dialects import DialectPolicy, GenericDialect, default_dialects
from .exceptions import (
    ConfigurationError,
    FieldDecodeError,
    HookError,
    MT940Error,
    NoSuitableDialectError,
    ParseError,
    StructuralError,
)
from .factory import SKIP
from .models import (
    Account,
    AccountInterface,
    Balance,
    BalanceInterface,
    Statement,
    StatementInterface,
    Transaction,
    TransactionInterface,
)
from .reader import Reader
from .validator import Validator

__all__ = [
    "Reader",
    "SKIP",
    "DialectPolicy",
    "GenericDialect",
    "default_dialects",
    "Account",
    "AccountInterface",
    "Balance",
    "BalanceInterface",
    "Statement",
    "StatementInterface",
    "Transaction",
    "TransactionInterface",
    "Validator",
    "MT940Error",
    "NoSuitableDialectError",
    "ConfigurationError",
    "HookError",
    "ParseError",
    "StructuralError",
    "FieldDecodeError",
]
