"""Exceptions raised while parsing and analysing G-code."""

from __future__ import annotations


class GCodeError(ValueError):
    """Base class for every error raised by gcodestats."""


class InvalidConfigError(GCodeError):
    """An :class:`~gcodestats.config.AnalyzerConfig` value is out of range."""


class InvalidInputError(GCodeError):
    """Document data is neither a sequence of lines nor an existing file."""


class EmptyDocumentError(GCodeError):
    """No command lines were left once comments and blanks were filtered."""


class InvalidLineError(GCodeError):
    """A line matched neither the command grammar nor the comment shape."""

    def __init__(self, raw: str, line_number: int | None = None) -> None:
        self.raw = raw
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Unparseable G-code line{where}: {raw!r}")
