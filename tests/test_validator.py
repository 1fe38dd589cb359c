import datetime
from decimal import Decimal

from openmt940.models import Account, Balance, Statement, Transaction
from openmt940.validator import Validator


def make_statement(closing="75.00", account="NL91ABNA0417164300", contra=None):
    day = datetime.date(2012, 6, 8)
    statement = Statement(
        account=Account(account),
        number="1/1",
        opening_balance=Balance("C", day, "EUR", Decimal("100.00")),
        closing_balance=Balance("C", day, "EUR", Decimal(closing)),
    )
    statement.add_transaction(
        Transaction(value_date=day, book_date=day, amount=Decimal("-25.00"), contra_account=contra)
    )
    return statement


def test_consistent_statement():
    report = Validator.validate(make_statement(contra=Account("GB82WEST12345698765432")))
    assert report.is_valid is True
    assert len(report.errors) == 0


def test_balance_mismatch():
    report = Validator.validate(make_statement(closing="80.00"))
    assert report.is_valid is False
    assert len(report.errors) == 1
    assert "Balance mismatch" in report.errors[0]


def test_debit_balances_are_signed():
    statement = make_statement()
    statement.opening_balance = Balance("D", statement.opening_balance.date, "EUR", Decimal("10.00"))
    statement.closing_balance = Balance("D", statement.opening_balance.date, "EUR", Decimal("35.00"))

    assert Validator.validate(statement).is_valid is True


def test_currency_mismatch():
    statement = make_statement()
    statement.closing_balance.currency = "USD"

    report = Validator.validate(statement)
    assert report.is_valid is False
    assert "Currency mismatch" in report.errors[0]


def test_invalid_iban_checksum():
    # Modified the digits to fail modulo 97
    report = Validator.validate(make_statement(account="GB99MIDL40051522334455"))
    assert report.is_valid is False
    assert len(report.errors) == 1
    assert "Invalid IBAN checksum" in report.errors[0]
    assert report.errors[0].startswith("[Account]")


def test_invalid_contra_iban():
    report = Validator.validate(make_statement(contra=Account("NL91ABNA0417164301")))
    assert report.is_valid is False
    assert report.errors[0].startswith("[Transaction 1 Contra Account]")


def test_domestic_account_numbers_are_not_checked():
    report = Validator.validate(make_statement(account="123456789", contra=Account("987654321")))
    assert report.is_valid is True


def test_empty_statement_number():
    statement = make_statement()
    statement.number = "  "
    report = Validator.validate(statement)
    assert report.is_valid is False
    assert "empty string" in report.errors[0]


def test_missing_balances_skip_continuity():
    statement = make_statement()
    statement.closing_balance = None
    assert Validator.validate(statement).is_valid is True
