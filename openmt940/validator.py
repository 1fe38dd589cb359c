import re
from decimal import Decimal
from typing import List, Optional

from openmt940.models import StatementInterface, ValidationReport


class Validator:
    """
    Consistency checks for parsed statements.

    Parsing only checks that fields match their grammar. The validator checks
    that a statement adds up: balances share a currency, the opening balance
    plus the transactions equals the closing balance, and IBAN-looking
    account numbers carry a valid checksum.
    """

    _iban_clean_pattern = re.compile(r"[^A-Z0-9]")
    _iban_prefix_pattern = re.compile(r"\A[A-Z]{2}[0-9]{2}")
    _iban_format_pattern = re.compile(r"\A[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}\Z")

    @staticmethod
    def _is_likely_iban(number: Optional[str]) -> bool:
        """
        Heuristic: an IBAN starts with a 2-letter country code followed by 2
        check digits. Plain domestic account numbers are all digits.
        """
        if not number:
            return False
        clean = Validator._iban_clean_pattern.sub("", number.upper())
        return bool(Validator._iban_prefix_pattern.match(clean))

    @staticmethod
    def _validate_iban_checksum(iban: str) -> Optional[str]:
        """
        Validates an IBAN using the ISO 13616 Modulo-97 algorithm.
        Returns None if valid, or an error string if invalid.
        """
        if len(iban) > 100:
            return "Invalid IBAN structure: excessively long string rejected."

        formatted = re.sub(r"[ \-\.]", "", iban.strip().upper())
        if not Validator._iban_format_pattern.match(formatted):
            return f"Invalid IBAN format: '{iban.strip()}' does not meet ISO 13616 standards."

        # Move the country code and check digits to the end, then map
        # letters to numbers (A=10 ... Z=35).
        rearranged = formatted[4:] + formatted[:4]
        numeric = "".join(str(ord(char) - 55) if char.isalpha() else char for char in rearranged)

        if int(numeric) % 97 != 1:
            return f"Invalid IBAN checksum: '{formatted}'. Failed Modulo-97 algorithm."
        return None

    @staticmethod
    def _account_error(label: str, account) -> Optional[str]:
        number = getattr(account, "number", None) if account is not None else None
        if number and Validator._is_likely_iban(number):
            iban_err = Validator._validate_iban_checksum(number)
            if iban_err:
                return f"[{label}] {iban_err}"
        return None

    @staticmethod
    def validate(statement: StatementInterface) -> ValidationReport:
        """
        Runs every rule against one statement. Never raises: failed rules are
        collected in the returned report.
        """
        errors: List[str] = []

        if statement.number is not None and str(statement.number).strip() == "":
            errors.append("Statement number is present but is an empty string.")

        account_err = Validator._account_error("Account", statement.account)
        if account_err:
            errors.append(account_err)

        opening = statement.opening_balance
        closing = statement.closing_balance

        if opening is not None and closing is not None:
            if opening.currency != closing.currency:
                errors.append(
                    f"Currency mismatch: opening balance in '{opening.currency}', "
                    f"closing balance in '{closing.currency}'."
                )
            else:
                total = sum(
                    (tx.amount for tx in statement.transactions if tx.amount is not None),
                    Decimal("0"),
                )
                expected = _signed(opening) + total
                actual = _signed(closing)
                if expected != actual:
                    errors.append(
                        f"Balance mismatch: opening {_signed(opening)} plus transactions "
                        f"{total} is {expected}, closing balance is {actual}."
                    )

        for i, tx in enumerate(statement.transactions):
            contra_err = Validator._account_error(f"Transaction {i + 1} Contra Account", tx.contra_account)
            if contra_err:
                errors.append(contra_err)

        return ValidationReport(is_valid=len(errors) == 0, errors=errors)


def _signed(balance) -> Decimal:
    amount = balance.amount or Decimal("0")
    return -amount if balance.debit_credit == "D" else amount
