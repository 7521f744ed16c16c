from gcodestats.analysis.document import Document, LayerRange
from gcodestats.config import AnalyzerConfig, DEFAULT_CONFIG
from gcodestats.errors import (
    EmptyDocumentError,
    GCodeError,
    InvalidConfigError,
    InvalidInputError,
    InvalidLineError,
)
from gcodestats.gcode.codes import Code
from gcodestats.gcode.parser import LineParser, ParsedLine, parse_line

__version__ = "0.1.0"

__all__ = [
    "AnalyzerConfig",
    "Code",
    "DEFAULT_CONFIG",
    "Document",
    "EmptyDocumentError",
    "GCodeError",
    "InvalidConfigError",
    "InvalidInputError",
    "InvalidLineError",
    "LayerRange",
    "LineParser",
    "ParsedLine",
    "parse_line",
]
