import argparse
import json
import logging
import sys

from openmt940.dialects import builtin_dialects
from openmt940.exceptions import MT940Error
from openmt940.integrations.pydantic import from_statement
from openmt940.reader import Reader
from openmt940.validator import Validator


def build_reader(args) -> Reader:
    """Builds a Reader for the --dialect flag: one built-in dialect, or all defaults."""
    if not args.dialect:
        return Reader.with_defaults()

    dialects = builtin_dialects()
    if args.dialect not in dialects:
        raise MT940Error(
            f"Unknown dialect '{args.dialect}'. Expected one of: {', '.join(dialects)}"
        )
    return Reader({args.dialect: dialects[args.dialect]})


def read_statements(args):
    # newline="" keeps CRLF line breaks intact inside descriptions.
    with open(args.file, "r", encoding=args.encoding, newline="") as f:
        text = f.read()
    return build_reader(args).parse(text)


def handle_parse(args):
    """Handles the 'parse' subcommand: Outputs the statements as a JSON array."""
    try:
        statements = read_statements(args)
        payload = [from_statement(s).model_dump(mode="json") for s in statements]
        print(json.dumps(payload, indent=2))

    except (MT940Error, OSError, UnicodeDecodeError) as e:
        print(f"Error parsing file: {e}", file=sys.stderr)
        sys.exit(1)


def handle_validate(args):
    """Handles the 'validate' subcommand: Checks balances and account checksums."""
    try:
        statements = read_statements(args)
    except (MT940Error, OSError, UnicodeDecodeError) as e:
        print(f"Error validating file: {e}", file=sys.stderr)
        sys.exit(1)

    failed = False
    for statement in statements:
        report = Validator.validate(statement)
        if not report.is_valid:
            failed = True
            print(f"Statement {statement.number} failed validation:")
            for err in report.errors:
                print(f"  - {err}")

    if failed:
        sys.exit(1)

    print(f"Validation Successful: {len(statements)} statement(s) are consistent.")


def handle_dialects(args):
    """Handles the 'dialects' subcommand: Lists the built-in dialects in evaluation order."""
    for name in builtin_dialects():
        print(name)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="openmt940",
        description="openmt940 CLI - Parse and check SWIFT MT940 bank statements."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Subcommand: parse
    parse_parser = subparsers.add_parser("parse", help="Parse a file and output JSON.")
    parse_parser.add_argument("file", help="Path to the MT940 file.")
    parse_parser.set_defaults(func=handle_parse)

    # Subcommand: validate
    validate_parser = subparsers.add_parser("validate", help="Check balance continuity and IBANs.")
    validate_parser.add_argument("file", help="Path to the file to validate.")
    validate_parser.set_defaults(func=handle_validate)

    for sub in (parse_parser, validate_parser):
        sub.add_argument("--dialect", help="Parse with this built-in dialect only (e.g. Sns, Generic).")
        sub.add_argument("--encoding", default="utf-8", help="Input file encoding (default: utf-8).")

    # Subcommand: dialects
    dialects_parser = subparsers.add_parser("dialects", help="List the built-in dialects.")
    dialects_parser.set_defaults(func=handle_dialects)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
