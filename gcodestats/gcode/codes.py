"""Catalog of the G-code command identifiers gcodestats knows about."""

from __future__ import annotations

import re
from enum import Enum


class Code(str, Enum):
    """Named G/M command identifiers, valued by their wire spelling."""

    RAPID_MOVE = "G0"  # move at maximum speed
    CONTROLLED_MOVE = "G1"  # move at the given or previous feed rate (F)
    DWELL = "G4"  # pause for P milliseconds
    HEAD_OFFSET = "G10"  # head offset for multiple extruders
    USE_INCHES = "G20"
    USE_MILLIMETRES = "G21"
    HOME = "G28"
    ABS_POSITIONING = "G90"
    REL_POSITIONING = "G91"
    SET_POSITION = "G92"
    STOP = "M0"  # finish moves then shut down, reset required
    SLEEP = "M1"  # finish moves then shut down, new commands wake it
    ENABLE_MOTORS = "M17"
    DISABLE_MOTORS = "M18"
    LIST_SD = "M20"
    INIT_SD = "M21"
    RELEASE_SD = "M22"
    SELECT_SD_FILE = "M23"
    START_SD_PRINT = "M24"
    PAUSE_SD_PRINT = "M25"
    SET_SD_POSITION = "M26"
    SD_PRINT_STATUS = "M27"
    START_SD_WRITE = "M28"
    STOP_SD_WRITE = "M29"
    POWER_ON = "M80"
    POWER_OFF = "M81"
    ABS_EXT_MODE = "M82"
    REL_EXT_MODE = "M83"
    IDLE_HOLD_OFF = "M84"
    SET_EXT_TEMP_NW = "M104"
    GET_EXT_TEMP = "M105"
    FAN_ON = "M106"
    FAN_OFF = "M107"
    SET_EXT_TEMP_W = "M109"
    SET_LINE_NUM = "M110"
    EMRG_STOP = "M112"
    GET_POSITION = "M114"
    GET_FW_DETAILS = "M115"
    WAIT_FOR_TEMP = "M116"
    SET_BED_TEMP_NW = "M140"
    SET_BED_TEMP_W = "M190"

    @classmethod
    def lookup(cls, command: str | None) -> Code | None:
        """Return the member for *command*, or None if it is not catalogued.

        The number is compared as an integer, so ``G01`` and ``G092``
        resolve to ``G1`` and ``G92``.
        """
        if command is None:
            return None
        match = _SPELLING_RE.fullmatch(command)
        if match is None:
            return None
        return _BY_VALUE.get(f"{match.group(1)}{int(match.group(2))}")


MOVE_CODES = frozenset({Code.RAPID_MOVE, Code.CONTROLLED_MOVE})

_SPELLING_RE = re.compile(r"([GMT])(\d+)")
_BY_VALUE: dict[str, Code] = {code.value: code for code in Code}
