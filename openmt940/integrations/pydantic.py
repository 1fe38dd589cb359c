import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from openmt940.models import StatementInterface


class PydanticAccount(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: Optional[str] = None
    name: Optional[str] = None


class PydanticBalance(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    debit_credit: Optional[str] = None
    date: Optional[datetime.date] = None
    currency: Optional[str] = None
    amount: Optional[Decimal] = None


class PydanticTransaction(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    contra_account: Optional[PydanticAccount] = None


class PydanticStatement(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account: Optional[PydanticAccount] = None
    number: Optional[str] = None
    opening_balance: Optional[PydanticBalance] = None
    closing_balance: Optional[PydanticBalance] = None
    transactions: List[PydanticTransaction] = []


def from_statement(statement: StatementInterface) -> PydanticStatement:
    """
    Converts a parsed statement (the default dataclasses or any custom type
    built by a construction hook) into its Pydantic equivalent.
    """
    return PydanticStatement.model_validate(statement)
