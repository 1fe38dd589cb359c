"""
Exception hierarchy for openmt940.

    MT940Error
    ├── NoSuitableDialectError   no registered dialect accepted the document
    ├── ConfigurationError       invalid reader registry or construction hook
    │   └── HookError            a callable hook returned an unusable value
    └── ParseError               the document could not be parsed
        ├── StructuralError      missing tag, orphan continuation line
        └── FieldDecodeError     a balance or transaction field is malformed
"""

from typing import Optional


class MT940Error(Exception):
    """
    Base exception. Catch this to handle every failure raised by the package.
    """


class NoSuitableDialectError(MT940Error):
    """
    Raised when none of the registered dialects accepts a document.
    """

    def __init__(self, dialects: Optional[list] = None):
        self.dialects = list(dialects or [])
        message = "No suitable dialect found"
        if self.dialects:
            message += f" (tried: {', '.join(self.dialects)})"
        super().__init__(message)


class ConfigurationError(MT940Error):
    """
    Raised when a Reader is configured with an invalid dialect or hook.
    """


class HookError(ConfigurationError):
    """
    Raised when a callable construction hook returns a value that does not
    implement the interface of its role.
    """

    def __init__(self, role: str, value: object, interface: type):
        self.role = role
        self.value = value
        self.interface = interface
        super().__init__(
            f"{role} hook returned {type(value).__name__}, "
            f"which does not implement {interface.__name__}"
        )


class ParseError(MT940Error):
    """
    Base class for errors raised while parsing a document.

    Attributes:
        reason (str): What went wrong.
        tag (Optional[str]): The MT940 tag of the offending field.
        line_number (Optional[int]): 1-based line number in the parsed text.
        dialect (Optional[str]): Name of the dialect that was parsing.
    """

    def __init__(
        self,
        reason: str,
        tag: Optional[str] = None,
        line_number: Optional[int] = None,
        dialect: Optional[str] = None,
    ):
        self.reason = reason
        self.tag = tag
        self.line_number = line_number
        self.dialect = dialect
        super().__init__(reason)

    def __str__(self) -> str:
        context = []
        if self.dialect:
            context.append(f"dialect {self.dialect}")
        if self.tag:
            context.append(f"tag :{self.tag}:")
        if self.line_number is not None:
            context.append(f"line {self.line_number}")
        if context:
            return f"{self.reason} ({', '.join(context)})"
        return self.reason


class StructuralError(ParseError):
    """
    Raised when the document layout is broken: a continuation line without a
    preceding field, or a statement without a required tag.
    """


class FieldDecodeError(ParseError):
    """
    Raised when a balance or transaction field does not match its grammar.

    Attributes:
        value (str): The raw field value that failed to decode.
    """

    def __init__(
        self,
        reason: str,
        value: str,
        tag: Optional[str] = None,
        line_number: Optional[int] = None,
        dialect: Optional[str] = None,
    ):
        self.value = value
        super().__init__(reason, tag=tag, line_number=line_number, dialect=dialect)
