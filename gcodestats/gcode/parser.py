"""G-code line tokenizer and parser.

Turns one raw line of G-code into an immutable :class:`ParsedLine` with
typed fields, and serializes it back to text for regeneration.
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass, replace
from functools import reduce
from numbers import Real
from typing import Iterable, Iterator

import numpy as np

from gcodestats.errors import InvalidLineError
from gcodestats.gcode.codes import Code, MOVE_CODES

COMMENT_CHAR = ";"
CHECKSUM_CHAR = "*"

# Regex patterns
_COMMAND_RE = re.compile(r"(?P<letter>[GMT])(?P<number>\d{1,3})")
_FIELD_RE = re.compile(r"\s*(?P<letter>[SPXYZFEA])(?P<value>-?(?:\d+\.?\d*|\.\d+))")
_UNSIGNED_INT_RE = re.compile(r"\d+")

# A is accepted as a synonym for E (extrusion).
_FIELD_NAMES = {
    "S": "s",
    "P": "p",
    "X": "x",
    "Y": "y",
    "Z": "z",
    "F": "f",
    "E": "e",
    "A": "e",
}


def _fmt_number(value: float) -> str:
    """Format a number in the shortest positional form, to 10 decimal places."""
    s = np.format_float_positional(round(value, 10), trim="-")
    if s == "-0":
        return "0"
    return s


def _valid_multiplier(multiplier: object) -> bool:
    return (
        isinstance(multiplier, Real)
        and not isinstance(multiplier, bool)
        and multiplier > 0
    )


def checksum(text: str) -> int:
    """XOR of every byte in *text*, as used by RepRap line numbering."""
    return reduce(operator.xor, text.encode("ascii", errors="replace"), 0)


@dataclass(frozen=True)
class ParsedLine:
    """A single parsed line of G-code.

    Every optional field is ``None`` when absent, which is distinct from
    an explicit zero.
    """

    raw: str
    command: str | None = None  # e.g. "G1", "M104", "T1"
    x: float | None = None
    y: float | None = None
    z: float | None = None
    e: float | None = None
    f: float | None = None  # feed rate in the line's own units per minute
    s: int | None = None
    p: int | None = None
    string_data: str | None = None
    comment: str | None = None
    tool_number: int | None = None

    # Regeneration overrides, ignored by the analysis.
    x_add: float | None = None
    y_add: float | None = None
    z_add: float | None = None
    speed_multiplier: float | None = None
    extrusion_multiplier: float | None = None
    travel_multiplier: float | None = None

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def command_letter(self) -> str | None:
        return self.command[0] if self.command else None

    @property
    def command_number(self) -> int | None:
        return int(self.command[1:]) if self.command else None

    @property
    def code(self) -> Code | None:
        """The catalogued :class:`Code` for this command, if any."""
        return Code.lookup(self.command)

    @property
    def is_empty(self) -> bool:
        """True for comment-only lines."""
        return self.command is None

    @property
    def is_move(self) -> bool:
        return self.code in MOVE_CODES

    @property
    def is_travel_move(self) -> bool:
        return self.is_move and self.e is None

    @property
    def is_extrusion_move(self) -> bool:
        return self.is_move and self.e is not None and self.e > 0

    def with_overrides(self, **overrides) -> ParsedLine:
        """Return a copy with regeneration overrides (or annotations) applied."""
        return replace(self, **overrides)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_gcode(self, line_number: int | None = None) -> str:
        """Rebuild the command text, applying any multipliers and offsets.

        Parameters
        ----------
        line_number:
            When given, the text is prefixed with ``N<line_number>`` and
            suffixed with ``*<checksum>``.

        Returns
        -------
        The command without its comment; ``""`` for comment-only lines.
        """
        if self.command is None:
            return ""

        parts = [self.command]
        if self.s is not None:
            parts.append(f"S{self.s}")
        if self.p is not None:
            parts.append(f"P{self.p}")
        if self.x is not None:
            parts.append(f"X{_fmt_number(self.x + (self.x_add or 0.0))}")
        if self.y is not None:
            parts.append(f"Y{_fmt_number(self.y + (self.y_add or 0.0))}")
        if self.z is not None:
            parts.append(f"Z{_fmt_number(self.z + (self.z_add or 0.0))}")
        if self.f is not None:
            parts.append(f"F{_fmt_number(self._multiplied_speed())}")
        if self.e is not None:
            parts.append(f"E{_fmt_number(self._multiplied_extrusion())}")
        if self.string_data:
            parts.append(self.string_data)

        text = " ".join(parts)
        if line_number is None:
            return text
        prefixed = f"N{line_number} {text}"
        return f"{prefixed}{CHECKSUM_CHAR}{checksum(prefixed)}"

    def __str__(self) -> str:
        return self.to_gcode()

    def _multiplied_extrusion(self) -> float:
        if _valid_multiplier(self.extrusion_multiplier):
            return self.e * self.extrusion_multiplier
        return self.e

    def _multiplied_speed(self) -> float:
        if self.is_travel_move and _valid_multiplier(self.travel_multiplier):
            return self.f * self.travel_multiplier
        if self.is_extrusion_move and _valid_multiplier(self.speed_multiplier):
            return self.f * self.speed_multiplier
        return self.f


class LineParser:
    """Stateless parser that converts raw G-code lines into ParsedLine objects."""

    def __init__(self, comment_char: str = COMMENT_CHAR) -> None:
        self.comment_char = comment_char

    def parse_line(self, line: str) -> ParsedLine:
        """Parse a single line of G-code.

        Parameters
        ----------
        line:
            Raw G-code line, possibly including a comment and line ending.

        Returns
        -------
        ParsedLine; comment-only and whitespace-only lines have no command.

        Raises
        ------
        InvalidLineError
            If *line* is empty or is neither a command nor a comment.
        """
        if not isinstance(line, str) or line == "":
            raise InvalidLineError(line)

        code_part, sep, comment = line.strip().partition(self.comment_char)
        code_part = code_part.strip()
        comment = comment.strip() if sep else None

        if not code_part:
            # Blank lines count as comments with no text
            return ParsedLine(raw=line, comment=comment if comment is not None else "")

        cmd_match = _COMMAND_RE.match(code_part)
        if cmd_match is None:
            raise InvalidLineError(line)

        fields: dict[str, float | int] = {}
        pos = cmd_match.end()
        while True:
            field_match = _FIELD_RE.match(code_part, pos)
            if field_match is None:
                break
            letter = field_match.group("letter")
            value = field_match.group("value")
            name = _FIELD_NAMES[letter]
            if name in fields:
                break
            if name in ("s", "p"):
                if not _UNSIGNED_INT_RE.fullmatch(value):
                    break
                fields[name] = int(value)
            elif name == "f":
                if value.startswith("-"):
                    break
                fields[name] = float(value)
            else:
                fields[name] = float(value)
            pos = field_match.end()

        string_data = code_part[pos:].strip() or None

        tool_number = None
        if cmd_match.group("letter") == "T":
            tool_number = int(cmd_match.group("number"))

        return ParsedLine(
            raw=line,
            command=cmd_match.group(0),
            string_data=string_data,
            comment=comment,
            tool_number=tool_number,
            **fields,
        )

    def parse_lines(self, lines: Iterable[str]) -> Iterator[ParsedLine]:
        """Parse every line in order, comment-only lines included.

        Raises
        ------
        InvalidLineError
            Carrying the 1-indexed line number of the first bad line.
        """
        for idx, line in enumerate(lines, start=1):
            try:
                yield self.parse_line(line)
            except InvalidLineError as exc:
                raise InvalidLineError(exc.raw, line_number=idx) from None


_DEFAULT_PARSER = LineParser()


def parse_line(line: str) -> ParsedLine:
    """Parse *line* with the default ``;`` comment delimiter."""
    return _DEFAULT_PARSER.parse_line(line)
