"""
Bank dialects.

Adding a bank means writing a DialectPolicy subclass and registering it on a
Reader, or adding it to ``default_dialects()`` below. Order matters: the
reader uses the first dialect whose ``accept`` returns True.
"""

from collections import OrderedDict

from openmt940.dialects.abnamro import AbnAmro
from openmt940.dialects.base import CounterParty, DialectPolicy, GenericDialect
from openmt940.dialects.ing import Ing
from openmt940.dialects.knab import Knab
from openmt940.dialects.postfinance import PostFinance
from openmt940.dialects.rabobank import Rabobank
from openmt940.dialects.sns import Sns
from openmt940.dialects.triodos import Triodos


def default_dialects() -> "OrderedDict[str, DialectPolicy]":
    """
    A fresh registry of every dialect shipped with the package, in
    evaluation order.
    """
    return OrderedDict(
        [
            ("ABN-AMRO", AbnAmro()),
            ("ING", Ing()),
            ("Knab", Knab()),
            ("PostFinance", PostFinance()),
            ("Rabobank", Rabobank()),
            ("Sns", Sns()),
            ("Triodos", Triodos()),
        ]
    )


def builtin_dialects() -> "OrderedDict[str, DialectPolicy]":
    """
    Every dialect the package ships, including the opt-in generic fallback.
    """
    dialects = default_dialects()
    dialects["Generic"] = GenericDialect()
    return dialects


__all__ = [
    "AbnAmro",
    "CounterParty",
    "DialectPolicy",
    "GenericDialect",
    "Ing",
    "Knab",
    "PostFinance",
    "Rabobank",
    "Sns",
    "Triodos",
    "builtin_dialects",
    "default_dialects",
]
