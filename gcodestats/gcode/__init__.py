from gcodestats.gcode.codes import Code, MOVE_CODES
from gcodestats.gcode.parser import LineParser, ParsedLine, checksum, parse_line

__all__ = ["Code", "MOVE_CODES", "LineParser", "ParsedLine", "checksum", "parse_line"]
