import re
from typing import Iterator, NamedTuple, Optional, Tuple

from openmt940.exceptions import StructuralError

# ":20:", ":28C:", ":60F:" ... at the very start of a physical line
TAG_PATTERN = re.compile(r":([0-9A-Z]{2,3}):")

# SWIFT envelope: block headers such as "{1:F01...}{2:...}{4:" and the
# block 4 trailer "-}{5:...}"
_ENVELOPE_PATTERN = re.compile(r"\{[0-9A-Z]{1,3}:|-\}")

# A bare "-" ends block 4 only when no field text can follow it.
_BARE_TRAILER_PATTERN = re.compile(r"-\s*\Z")

_LINE_PATTERN = re.compile(r"([^\r\n]*)(\r\n|\r|\n|\Z)")


class TaggedLine(NamedTuple):
    """
    One physical line of a document, classified by its leading tag.

    Attributes:
        tag (Optional[str]): Tag code without colons, None for continuation and envelope lines.
        text (str): Line content after the tag (the whole line when untagged).
        is_continuation (bool): True if the line continues the previous field.
        line_number (int): 1-based position in the scanned text.
        terminator (str): The line break that ended the line ('' on the last line).
    """

    tag: Optional[str]
    text: str
    is_continuation: bool
    line_number: int
    terminator: str = ""

    @property
    def is_envelope(self) -> bool:
        return self.tag is None and not self.is_continuation


class Field(NamedTuple):
    """
    A tagged field with all of its continuation lines folded into ``value``.
    """

    tag: str
    value: str
    line_number: int


def _physical_lines(text: str) -> Iterator[Tuple[str, str]]:
    position = 0
    length = len(text)
    while position < length:
        match = _LINE_PATTERN.match(text, position)
        yield match.group(1), match.group(2)
        position = match.end()


def is_envelope_line(line: str, next_line: Optional[str] = None) -> bool:
    """
    True for SWIFT block header/trailer lines, which never carry field data.

    A line holding only "-" is a trailer when it is the last line
    (``next_line`` is None) or is followed by a tag or a block header.
    Anywhere else it is ordinary field text.
    """
    if _ENVELOPE_PATTERN.match(line):
        return True
    if not _BARE_TRAILER_PATTERN.match(line):
        return False
    return (
        next_line is None
        or bool(TAG_PATTERN.match(next_line))
        or bool(_ENVELOPE_PATTERN.match(next_line))
    )


def iter_lines(text: str) -> Iterator[TaggedLine]:
    """
    Lazily classifies every physical line of ``text``, looking one line
    ahead to tell a block trailer from a "-" inside a field.

    CRLF, CR and LF line breaks are all recognised; the exact break is kept
    on each line so callers can rebuild multi-line values byte for byte.
    """
    lines = _physical_lines(text)
    current = next(lines, None)
    line_number = 0

    while current is not None:
        following = next(lines, None)
        line_number += 1
        content, terminator = current

        match = TAG_PATTERN.match(content)
        if match:
            yield TaggedLine(match.group(1), content[match.end() :], False, line_number, terminator)
        elif is_envelope_line(content, following[0] if following is not None else None):
            yield TaggedLine(None, content, False, line_number, terminator)
        else:
            yield TaggedLine(None, content, True, line_number, terminator)

        current = following


def iter_fields(text: str) -> Iterator[Field]:
    """
    Lazily folds the lines of ``text`` into fields.

    Continuation lines are appended verbatim to the open field, joined by the
    line break that ended the previous line. The break that ends the last
    line of a field is not part of its value. An envelope line closes the
    open field and untagged lines after it are skipped until the next tag.

    Raises:
        StructuralError: If a continuation line appears before any field.
    """
    tag: Optional[str] = None
    parts = []
    field_line = 0
    pending_break = ""
    in_envelope = False

    for line in iter_lines(text):
        if line.is_continuation:
            if tag is not None:
                parts.append(pending_break)
                parts.append(line.text)
                pending_break = line.terminator
                continue
            if in_envelope:
                continue
            raise StructuralError(
                "Continuation line without a preceding field", line_number=line.line_number
            )

        if tag is not None:
            yield Field(tag, "".join(parts), field_line)
            tag = None

        if line.is_envelope:
            in_envelope = True
            continue

        tag = line.tag
        parts = [line.text]
        field_line = line.line_number
        pending_break = line.terminator
        in_envelope = False

    if tag is not None:
        yield Field(tag, "".join(parts), field_line)
