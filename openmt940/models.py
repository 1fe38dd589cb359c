from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import datetime
from decimal import Decimal
from typing import List, Optional


class AccountInterface(ABC):
    """
    Capability of an account value: it has a number and a mutable display name.

    Custom account types either subclass this or are registered with
    ``AccountInterface.register(MyAccount)``.
    """

    number: Optional[str]
    name: Optional[str]


class BalanceInterface(ABC):
    """
    Capability of a balance value. Balances are constructed without arguments
    and then populated attribute by attribute: ``debit_credit``, ``date``,
    ``currency`` and ``amount``.
    """

    debit_credit: Optional[str]
    date: Optional[datetime.date]
    currency: Optional[str]
    amount: Optional[Decimal]


class TransactionInterface(ABC):
    """
    Capability of a transaction value. Transactions are constructed without
    arguments and then populated attribute by attribute.
    """

    value_date: Optional[datetime.date]
    book_date: Optional[datetime.date]
    amount: Optional[Decimal]
    description: Optional[str]
    contra_account: Optional[AccountInterface]


class StatementInterface(ABC):
    """
    Capability of a statement value: constructed from an account and a
    sequence number, then given balances and an append-only transaction list.
    """

    account: Optional[AccountInterface]
    number: Optional[str]
    opening_balance: Optional[BalanceInterface]
    closing_balance: Optional[BalanceInterface]

    @abstractmethod
    def add_transaction(self, transaction: TransactionInterface) -> None:
        """
        Appends a transaction to the statement.
        """


@dataclass
class Account(AccountInterface):
    """
    A bank account as identified in a statement (:25:) or inside a
    transaction description (the counter-party).

    Attributes:
        number (Optional[str]): Account number or IBAN, without leading zeros.
        name (Optional[str]): Display name of the account holder, when known.
    """

    number: Optional[str] = None
    name: Optional[str] = None

    def __str__(self) -> str:
        return self.number or ""


@dataclass
class Balance(BalanceInterface):
    """
    An opening or closing balance (:60F:, :60M:, :62F:, :62M:).

    Attributes:
        debit_credit (Optional[str]): 'C' for a credit balance, 'D' for a debit balance.
        date (Optional[datetime.date]): Balance date.
        currency (Optional[str]): ISO 4217 currency code.
        amount (Optional[Decimal]): Absolute amount; the sign lives in debit_credit.
    """

    debit_credit: Optional[str] = None
    date: Optional[datetime.date] = None
    currency: Optional[str] = None
    amount: Optional[Decimal] = None

    @property
    def signed_amount(self) -> Optional[Decimal]:
        """
        The amount with debit balances made negative.
        """
        if self.amount is None:
            return None
        return -self.amount if self.debit_credit == "D" else self.amount


@dataclass
class Transaction(TransactionInterface):
    """
    A single statement line (:61:) with its information to account owner (:86:).

    Attributes:
        value_date (Optional[datetime.date]): Date the funds are valued.
        book_date (Optional[datetime.date]): Booking date; equals value_date when the bank omits it.
        debit_credit (Optional[str]): 'C', 'D', 'RC' (reversal of credit) or 'RD'.
        amount (Optional[Decimal]): Signed amount, negative for debits.
        funds_code (Optional[str]): Third character of the currency code, if present.
        transaction_code (Optional[str]): Bank transaction type code, e.g. 'N014'.
        customer_reference (Optional[str]): Reference for the account owner.
        bank_reference (Optional[str]): Reference of the account servicing institution.
        supplementary_details (Optional[str]): Continuation text of the :61: field.
        description (Optional[str]): The :86: text, line breaks and padding preserved.
        contra_account (Optional[AccountInterface]): Counter-party, when the dialect finds one.
    """

    value_date: Optional[datetime.date] = None
    book_date: Optional[datetime.date] = None
    debit_credit: Optional[str] = None
    amount: Optional[Decimal] = None
    funds_code: Optional[str] = None
    transaction_code: Optional[str] = None
    customer_reference: Optional[str] = None
    bank_reference: Optional[str] = None
    supplementary_details: Optional[str] = None
    description: Optional[str] = None
    contra_account: Optional[AccountInterface] = None


@dataclass
class Statement(StatementInterface):
    """
    One logical MT940 statement: everything between a :20: tag and the next.

    Attributes:
        account (Optional[AccountInterface]): The account the statement belongs to.
        number (Optional[str]): Statement/sequence number from :28C:, e.g. '160/1'.
        opening_balance (Optional[BalanceInterface]): Balance from :60F: or :60M:.
        closing_balance (Optional[BalanceInterface]): Balance from :62F: or :62M:.
        transactions (List[TransactionInterface]): Transactions in document order.
    """

    account: Optional[AccountInterface] = None
    number: Optional[str] = None
    opening_balance: Optional[BalanceInterface] = None
    closing_balance: Optional[BalanceInterface] = None
    transactions: List[TransactionInterface] = field(default_factory=list)

    def add_transaction(self, transaction: TransactionInterface) -> None:
        self.transactions.append(transaction)


@dataclass
class ValidationReport:
    """
    Result of validating a parsed statement.

    Attributes:
        is_valid (bool): True if no consistency or checksum errors were found.
        errors (List[str]): One message per failed rule.
    """

    is_valid: bool
    errors: List[str]
