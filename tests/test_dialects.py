import pytest

from openmt940.dialects import (
    AbnAmro,
    CounterParty,
    DialectPolicy,
    GenericDialect,
    Ing,
    Knab,
    PostFinance,
    Rabobank,
    Sns,
    Triodos,
    builtin_dialects,
    default_dialects,
)

MOCK_STATEMENT_LINE = "1206070608D25,00N422NONREF"


def extract(dialect, description, statement_line=MOCK_STATEMENT_LINE):
    return dialect.extract_counter_party([statement_line, description])


def test_default_dialect_order():
    assert list(default_dialects()) == [
        "ABN-AMRO",
        "ING",
        "Knab",
        "PostFinance",
        "Rabobank",
        "Sns",
        "Triodos",
    ]
    assert list(builtin_dialects())[-1] == "Generic"


def test_default_dialects_returns_fresh_registry():
    first = default_dialects()
    first.pop("ING")
    assert "ING" in default_dialects()


def test_base_helpers():
    dialect = GenericDialect()
    assert dialect.account_number(" 0001234 ") == "1234"
    assert dialect.description("kept\r\nverbatim") == "kept\r\nverbatim"
    assert dialect.extract_counter_party([MOCK_STATEMENT_LINE]) == CounterParty()
    assert DialectPolicy.unwrapped("/NAME/PIE\r\nTER/") == "/NAME/PIETER/"
    assert DialectPolicy.first_line("one\rtwo") == "one"


def test_generic_accepts_any_statement():
    assert GenericDialect().accept("junk\r\n:20:A\r\n:25:B\r\n")
    assert not GenericDialect().accept(":20:A\r\n")


# Sns


def test_sns_accept():
    assert Sns().accept("{1:F01SNSBNL2AXXXX0000000000}\r\n:20:A")
    assert not Sns().accept(":20:A\r\nSNSBNL2A")


def test_sns_domestic_counter_party():
    party = extract(Sns(), "0987654321 marechal s\r\n" + " " * 65 + "\r\ndit is een test")
    assert party == CounterParty("987654321", "marechal s")


def test_sns_iban_counter_party():
    party = extract(Sns(), "NL91ABNA0417164300 J JANSEN\r\nREFERENCE")
    assert party == CounterParty("NL91ABNA0417164300", "J JANSEN")


def test_sns_without_description():
    assert Sns().extract_counter_party([MOCK_STATEMENT_LINE]) == CounterParty()


# Knab


def test_knab_accept_and_closing_preference():
    assert Knab().accept("{1:F01KNABNL2HAXXX0000000000}\r\n:20:A")
    assert Knab().closing_balance_tags == ("62M", "62F")


def test_knab_labelled_counter_party():
    party = extract(Knab(), "OVERBOEKING\r\nREK: NL91ABNA0417164300\r\nNAAM: PIETER PUK\r\n")
    assert party == CounterParty("NL91ABNA0417164300", "PIETER PUK")


def test_knab_without_labels():
    assert extract(Knab(), "PIN BETALING") == CounterParty()


# ABN AMRO


def test_abnamro_accept():
    assert AbnAmro().accept("ABNANL2A\r\n940\r\nABNANL2A\r\n:20:ABN AMRO BANK NV")
    assert not AbnAmro().accept(":20:A\r\nABNANL2A")


def test_abnamro_domestic_counter_party():
    party = extract(AbnAmro(), "12.34.56.789 PIETER PUK\r\nBETALINGSKENM. 1234")
    assert party == CounterParty("123456789", "PIETER PUK")


def test_abnamro_giro_counter_party():
    assert extract(AbnAmro(), "GIRO   1234567 PUK") == CounterParty("1234567", "PUK")


def test_abnamro_sepa_counter_party_across_wrapped_lines():
    description = (
        "/TRTP/SEPA OVERBOEKING/IBAN/NL91ABNA04\r\n"
        "17164300/BIC/ABNANL2A/NAME/PIETER PUK/REMI/INVOICE 1/EREF/NOTPROVIDED"
    )
    assert extract(AbnAmro(), description) == CounterParty("NL91ABNA0417164300", "PIETER PUK")


def test_abnamro_labelled_counter_party():
    description = (
        "SEPA OVERBOEKING                 IBAN: NL91ABNA0417164300        "
        "BIC: ABNANL2A                    NAAM: PIETER PUK"
    )
    assert extract(AbnAmro(), description) == CounterParty("NL91ABNA0417164300", "PIETER PUK")


# ING


def test_ing_accept():
    assert Ing().accept("0000 01INGBNL2AXXXX00001\r\n0000 01INGBNL2AXXXX00001\r\n:20:A")


def test_ing_sepa_counter_party():
    description = "/EREF/NOTPROVIDED//CNTP/NL91ABNA0417164300/ABNANL2A/PIETER PUK/AMSTERDAM/"
    assert extract(Ing(), description) == CounterParty("NL91ABNA0417164300", "PIETER PUK")


def test_ing_leading_account_counter_party():
    assert extract(Ing(), "0123456789 PIETER PUK") == CounterParty("123456789", "PIETER PUK")


# PostFinance


def test_postfinance_counter_party():
    assert PostFinance().accept("{1:F01POFICHBEAXXX0000000000}\r\n:20:A")
    description = "GIRO AUS KONTO 12-345678-9\r\nAUFTRAGGEBER: HANS MUSTER"
    assert extract(PostFinance(), description) == CounterParty("12-345678-9", "HANS MUSTER")


# Rabobank


def test_rabobank_accept_and_account_number():
    dialect = Rabobank()
    assert dialect.accept(":940:\r\n:20:940S120608\r\n")
    assert not dialect.accept(":20:940S120608\r\n:940:")
    assert dialect.account_number("0123456789 EUR") == "123456789"
    assert dialect.account_number("NL91RABO0123456789EUR") == "NL91RABO0123456789"


def test_rabobank_counter_party_from_statement_line():
    statement_line = "100105D000000000015,00N0770123456789\r\nPIETER PUK"
    assert extract(Rabobank(), None, statement_line) == CounterParty("123456789", "PIETER PUK")


def test_rabobank_zero_account_means_no_counter_party():
    party = Rabobank().extract_counter_party(["100105D000000000015,00N0770000000000"])
    assert party == CounterParty()


def test_rabobank_sepa_name_from_description():
    statement_line = "100105D000000000015,00N541NL91ABNA0417164300"
    party = extract(Rabobank(), "/EREF//ORDP//NAME/PIETER PUK/ADDR/", statement_line)
    assert party == CounterParty("NL91ABNA0417164300", "PIETER PUK")


# Triodos


def test_triodos_account_and_counter_party():
    dialect = Triodos()
    assert dialect.accept(":20:1\r\n:25:TRIODOSBANK/0390123456\r\n")
    assert dialect.account_number("TRIODOSBANK/0390123456") == "390123456"
    party = extract(dialect, "000>20BETALING>310123456789>32PIETER>33PUK")
    assert party == CounterParty("123456789", "PIETER PUK")


@pytest.mark.parametrize("name", list(default_dialects()))
def test_each_dialect_rejects_plain_text(name):
    assert not default_dialects()[name].accept("hello world")
