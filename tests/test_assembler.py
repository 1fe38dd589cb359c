import datetime
from decimal import Decimal

import pytest

from openmt940.assembler import StatementAssembler
from openmt940.dialects import GenericDialect, Knab
from openmt940.exceptions import FieldDecodeError, StructuralError

MOCK_TWO_STATEMENTS = "\r\n".join(
    [
        ":20:STMT1",
        ":25:0001234567",
        ":28C:7/1",
        ":60F:C120601EUR100,00",
        ":61:120601C50,00NTRFREF1",
        ":86:FIRST",
        ":61:120602D20,00NTRFREF2",
        ":61:120603D5,00NTRFREF3",
        ":86:THIRD\r\nSECOND LINE",
        ":62F:C120603EUR125,00",
        ":20:STMT2",
        ":25:0001234567",
        ":28:8",
        ":60M:C120604EUR125,00",
        ":62M:C120604EUR125,00",
        "",
    ]
)

MOCK_KNAB = "\r\n".join(
    [
        "{1:F01KNABNL2HAXXX0000000000}{2:I940KNABNL2HXXXXN3020}{4:",
        ":20:B2G12345",
        ":25:NL91KNAB0123456789",
        ":28C:1",
        ":60F:C120601EUR10,00",
        ":62F:C120601EUR30,00",
        ":62M:C120601EUR20,00",
        "-}",
    ]
)


def test_split_statements_reports_line_offsets():
    chunks = list(StatementAssembler.split_statements("header\r\n:20:A\r\n:25:1\r\n:20:B\r\n"))

    assert [offset for offset, _ in chunks] == [1, 3]
    assert chunks[0][1] == ":20:A\r\n:25:1\r\n"
    assert chunks[1][1] == ":20:B\r\n"


def test_assemble_statements_in_document_order():
    statements = StatementAssembler(GenericDialect()).assemble(MOCK_TWO_STATEMENTS)

    assert len(statements) == 2
    first, second = statements

    assert first.account.number == "1234567"
    assert first.number == "7/1"
    assert first.opening_balance.amount == Decimal("100.00")
    assert first.closing_balance.date == datetime.date(2012, 6, 3)
    assert [tx.amount for tx in first.transactions] == [
        Decimal("50.00"),
        Decimal("-20.00"),
        Decimal("-5.00"),
    ]

    assert second.number == "8"
    assert second.opening_balance.currency == "EUR"
    assert second.transactions == []


def test_description_only_from_directly_following_field():
    first = StatementAssembler(GenericDialect()).assemble(MOCK_TWO_STATEMENTS)[0]

    assert [tx.description for tx in first.transactions] == [
        "FIRST",
        None,
        "THIRD\r\nSECOND LINE",
    ]


def test_generic_dialect_finds_no_counter_party():
    first = StatementAssembler(GenericDialect()).assemble(MOCK_TWO_STATEMENTS)[0]
    assert all(tx.contra_account is None for tx in first.transactions)


def test_closing_balance_tag_priority_follows_dialect():
    generic = StatementAssembler(GenericDialect()).assemble(MOCK_KNAB)[0]
    knab = StatementAssembler(Knab()).assemble(MOCK_KNAB)[0]

    assert generic.closing_balance.amount == Decimal("30.00")
    assert knab.closing_balance.amount == Decimal("20.00")
    assert knab.account.number == "NL91KNAB0123456789"


def test_missing_balances_are_none():
    statement = StatementAssembler(GenericDialect()).assemble(":20:A\r\n:25:1\r\n")[0]

    assert statement.number is None
    assert statement.opening_balance is None
    assert statement.closing_balance is None


def test_missing_account_field_aborts():
    with pytest.raises(StructuralError) as exc_info:
        StatementAssembler(GenericDialect()).assemble(":20:A\r\n:28C:1\r\n")

    assert exc_info.value.tag == "25"
    assert exc_info.value.dialect == "Generic"


def test_decode_error_in_later_statement_aborts_whole_document():
    broken = MOCK_TWO_STATEMENTS.replace(":60M:C120604EUR125,00", ":60M:C120604EUR12.5")

    with pytest.raises(FieldDecodeError) as exc_info:
        StatementAssembler(GenericDialect(), dialect_name="Mine").assemble(broken)

    error = exc_info.value
    assert error.tag == "60M"
    assert error.line_number == 15
    assert error.dialect == "Mine"
    assert "line 15" in str(error)


def test_bad_transaction_line_reports_absolute_line():
    broken = MOCK_TWO_STATEMENTS.replace(":61:120602D20,00NTRFREF2", ":61:garbage")

    with pytest.raises(FieldDecodeError) as exc_info:
        StatementAssembler(GenericDialect()).assemble(broken)

    assert exc_info.value.tag == "61"
    assert exc_info.value.line_number == 7


def test_envelope_lines_between_statements_are_ignored():
    text = ":20:A\r\n:25:1\r\n-}\r\n{1:F01X}{4:\r\n:20:B\r\n:25:2\r\n-}\r\n:20:C\r\n:25:3\r\n"
    statements = StatementAssembler(GenericDialect()).assemble(text)
    assert [s.account.number for s in statements] == ["1", "2", "3"]
