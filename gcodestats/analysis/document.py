"""Whole-document G-code analysis.

A :class:`Document` parses a G-code program and replays it once, in
order, to reconstruct machine state and accumulate statistics about the
job: bounding box, travel per axis, filament per tool, layers and an
estimated duration.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Callable, Iterator

from gcodestats.analysis.kinematics import move_duration
from gcodestats.analysis.state import AXES, ExtrusionState, MachineState
from gcodestats.config import AnalyzerConfig, DEFAULT_CONFIG
from gcodestats.errors import EmptyDocumentError, InvalidInputError
from gcodestats.files import is_gcode_file, read_gcode_lines, write_gcode_lines
from gcodestats.gcode.codes import Code
from gcodestats.gcode.parser import LineParser, ParsedLine
from gcodestats.utils.formatting import seconds_to_words
from gcodestats.utils.math_helpers import span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerRange:
    """Command indices (into ``Document.lines``) spanned by one layer."""

    lower: int
    upper: int | None = None

    def __contains__(self, command_index: int) -> bool:
        upper = self.upper if self.upper is not None else self.lower
        return self.lower <= command_index <= upper


class Document:
    """A parsed and analysed G-code program.

    Parameters
    ----------
    data:
        A sequence of G-code lines, or the path of a G-code file.
    config:
        Analysis options; defaults to :data:`~gcodestats.config.DEFAULT_CONFIG`.
    **overrides:
        Individual :class:`~gcodestats.config.AnalyzerConfig` fields to
        replace in *config*, e.g. ``acceleration=3000``.

    Raises
    ------
    InvalidConfigError
        If the resulting configuration is invalid.
    InvalidInputError
        If *data* is neither a sequence of strings nor an existing file.
    InvalidLineError
        If any line is neither a command nor a comment.
    EmptyDocumentError
        If no command lines remain after comments are filtered out.
    """

    def __init__(
        self,
        data: Sequence[str] | str | os.PathLike,
        config: AnalyzerConfig | None = None,
        **overrides,
    ) -> None:
        config = config if config is not None else DEFAULT_CONFIG
        if overrides:
            config = replace(config, **overrides)
        self._config: AnalyzerConfig = config

        self._raw_data: list[str] = self._load(data)
        self._lines: list[ParsedLine] = []
        self._comments: list[str] = []
        self._collect_lines()
        if not self._lines:
            raise EmptyDocumentError("G-code data contains no commands")

        self._processed = False
        self._state: MachineState | None = None
        self._travel: dict[str, float] = {}
        self._mins: dict[str, float | None] = {}
        self._maxs: dict[str, float | None] = {}
        self._e_travel: float | None = None
        self._filament_used: dict[int, float] = {}
        self._layer_ranges: list[LayerRange] = []
        self._total_duration: float | None = None

        if config.auto_process:
            self.process()

    @classmethod
    def from_file(
        cls, path: str | os.PathLike, config: AnalyzerConfig | None = None, **overrides
    ) -> Document:
        """Load and analyse the G-code file at *path*."""
        return cls(os.fspath(path), config, **overrides)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def _load(data) -> list[str]:
        if isinstance(data, (str, os.PathLike)):
            if not is_gcode_file(data):
                raise InvalidInputError(f"Not an existing G-code file: {data!s}")
            return read_gcode_lines(data)
        if isinstance(data, Sequence) and not isinstance(data, (bytes, bytearray)):
            if not all(isinstance(line, str) for line in data):
                raise InvalidInputError("G-code data must only contain strings")
            return list(data)
        raise InvalidInputError(
            f"G-code data must be a sequence of lines or a file path, got {type(data).__name__}"
        )

    def _collect_lines(self) -> None:
        """Split comment-only lines off and annotate the command lines."""
        cfg = self._config
        parser = LineParser(cfg.comment_char)
        tool = 0
        speed = float(cfg.default_speed)

        for parsed in parser.parse_lines(self._raw_data):
            if parsed.is_empty:
                self._comments.append(parsed.comment)
                continue

            if parsed.tool_number is not None:
                tool = parsed.tool_number
            annotations = {
                "tool_number": tool,
                "x_add": cfg.x_add,
                "y_add": cfg.y_add,
                "z_add": cfg.z_add,
            }
            if parsed.f is not None:
                speed = parsed.f
            elif cfg.add_speed and parsed.is_move:
                annotations["f"] = speed
            self._lines.append(parsed.with_overrides(**annotations))

        logger.debug(
            "Collected %d commands and %d comments", len(self._lines), len(self._comments)
        )

    # ------------------------------------------------------------------
    # Analysis pass
    # ------------------------------------------------------------------

    def process(self) -> None:
        """Replay every command once and compute the document statistics.

        Runs automatically on construction unless ``auto_process`` is off.

        Raises
        ------
        RuntimeError
            If the document has already been processed.
        """
        if self._processed:
            raise RuntimeError("Document has already been processed")

        self._state = MachineState()
        self._travel = {axis: 0.0 for axis in AXES}
        self._mins = {axis: None for axis in AXES}
        self._maxs = {axis: None for axis in AXES}
        self._e_travel = 0.0
        self._filament_used = {}
        self._layer_ranges = [LayerRange(lower=0)]
        self._total_duration = 0.0

        state = self._state
        for index, line in enumerate(self._lines):
            state.command_index = index
            if line.tool_number != state.tool:
                logger.debug("Tool change T%d -> T%d at command %d", state.tool, line.tool_number, index)
                state.tool = line.tool_number
            handler = self._DISPATCH.get(line.code)
            if handler is not None:
                handler(self, line)

        self._layer_ranges[-1] = replace(self._layer_ranges[-1], upper=len(self._lines) - 1)
        self._processed = True

        logger.info(
            "Analysed %d commands: %d layers, %d tools, %.1f s estimated",
            len(self._lines),
            len(self._layer_ranges),
            len(self._filament_used),
            self._total_duration,
        )

    # ------------------------------------------------------------------
    # Command handlers (private)
    # ------------------------------------------------------------------

    def _handle_use_inches(self, line: ParsedLine) -> None:
        self._state.imperial = True

    def _handle_use_millimetres(self, line: ParsedLine) -> None:
        self._state.imperial = False

    def _handle_abs_positioning(self, line: ParsedLine) -> None:
        self._state.relative = False

    def _handle_rel_positioning(self, line: ParsedLine) -> None:
        self._state.relative = True

    def _handle_abs_ext_mode(self, line: ParsedLine) -> None:
        self._state.relative_extrusion = False

    def _handle_rel_ext_mode(self, line: ParsedLine) -> None:
        self._state.relative_extrusion = True

    def _handle_set_position(self, line: ParsedLine) -> None:
        """Handle G92: assign positions as given, no mode interpretation."""
        state = self._state
        for axis in AXES:
            value = state.to_mm(getattr(line, axis))
            if value is not None:
                setattr(state, axis, value)

        if line.e is not None:
            extruder = state.extruder(line.tool_number)
            self._filament_used[line.tool_number] = extruder.reset(state.to_mm(line.e))

    def _handle_home(self, line: ParsedLine) -> None:
        """Handle G28: home the named axes, or all of them."""
        state = self._state
        for axis in _homing_axes(line):
            self._travel[axis] += abs(getattr(state, axis))
            setattr(state, axis, 0.0)

    def _handle_rapid_move(self, line: ParsedLine) -> None:
        self._move(line)

    def _handle_controlled_move(self, line: ParsedLine) -> None:
        start = self._state.position()
        self._count_layers(line)
        self._move(line)
        self._add_move_time(line, start)

    def _handle_dwell(self, line: ParsedLine) -> None:
        if line.p is not None:
            self._total_duration += line.p / 1000.0

    # ------------------------------------------------------------------
    # Move bookkeeping
    # ------------------------------------------------------------------

    def _move(self, line: ParsedLine) -> None:
        state = self._state
        for axis in AXES:
            value = state.to_mm(getattr(line, axis))
            if value is None:
                continue
            current = getattr(state, axis)
            if state.relative:
                self._travel[axis] += abs(value)
                setattr(state, axis, current + value)
            else:
                self._travel[axis] += abs(value - current)
                setattr(state, axis, value)

        self._extrude(line)
        self._set_limits(line)

    def _extrude(self, line: ParsedLine) -> None:
        """Advance the tool's E position and refresh its filament total."""
        state = self._state
        extruder = state.extruder(line.tool_number)
        e = state.to_mm(line.e)

        if e is not None:
            if state.relative_extrusion:
                self._e_travel += abs(e)
                extruder.position += e
            else:
                self._e_travel += abs(e - extruder.position)
                extruder.position = e

        if extruder.state is ExtrusionState.PENDING_OVERWRITE:
            if e is None:
                return
            extruder.state = ExtrusionState.ACCUMULATING
        self._filament_used[line.tool_number] = extruder.total

    def _set_limits(self, line: ParsedLine) -> None:
        state = self._state
        if line.is_extrusion_move:
            if line.x is not None:
                self._include("x", state.x)
            if line.y is not None:
                self._include("y", state.y)
        if line.z is not None:
            self._include("z", state.z)

    def _include(self, axis: str, value: float) -> None:
        low = self._mins[axis]
        high = self._maxs[axis]
        if low is None or value < low:
            self._mins[axis] = value
        if high is None or value > high:
            self._maxs[axis] = value

    def _count_layers(self, line: ParsedLine) -> None:
        state = self._state
        z = state.to_mm(line.z)
        if z is None:
            return
        target = state.z + z if state.relative else z
        if target > state.z:
            index = state.command_index
            self._layer_ranges[-1] = replace(self._layer_ranges[-1], upper=index)
            self._layer_ranges.append(LayerRange(lower=index))
            logger.debug("Layer %d starts at command %d (Z%.3f)", len(self._layer_ranges), index, target)

    def _add_move_time(self, line: ParsedLine, start: tuple[float, float, float]) -> None:
        state = self._state
        last_speed = state.speed
        if line.f is not None:
            state.speed = state.to_mm(line.f) / 60.0
        self._total_duration += move_duration(
            start, state.position(), last_speed, state.speed, self._config.acceleration
        )

    # ------------------------------------------------------------------
    # Dispatch table
    # ------------------------------------------------------------------

    _DISPATCH: dict[Code, Callable[[Document, ParsedLine], None]] = {
        Code.USE_INCHES: _handle_use_inches,
        Code.USE_MILLIMETRES: _handle_use_millimetres,
        Code.ABS_POSITIONING: _handle_abs_positioning,
        Code.REL_POSITIONING: _handle_rel_positioning,
        Code.ABS_EXT_MODE: _handle_abs_ext_mode,
        Code.REL_EXT_MODE: _handle_rel_ext_mode,
        Code.SET_POSITION: _handle_set_position,
        Code.HOME: _handle_home,
        Code.RAPID_MOVE: _handle_rapid_move,
        Code.CONTROLLED_MOVE: _handle_controlled_move,
        Code.DWELL: _handle_dwell,
    }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    @property
    def raw_data(self) -> list[str]:
        return list(self._raw_data)

    @property
    def lines(self) -> list[ParsedLine]:
        return list(self._lines)

    @property
    def comments(self) -> list[str]:
        return list(self._comments)

    @property
    def processed(self) -> bool:
        return self._processed

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[ParsedLine]:
        return iter(self._lines)

    def _stat(self, value):
        return value if self._processed else None

    # --- Bounding box (mm) ---

    @property
    def x_min(self) -> float | None:
        return self._stat(self._mins.get("x"))

    @property
    def x_max(self) -> float | None:
        return self._stat(self._maxs.get("x"))

    @property
    def y_min(self) -> float | None:
        return self._stat(self._mins.get("y"))

    @property
    def y_max(self) -> float | None:
        return self._stat(self._maxs.get("y"))

    @property
    def z_min(self) -> float | None:
        return self._stat(self._mins.get("z"))

    @property
    def z_max(self) -> float | None:
        return self._stat(self._maxs.get("z"))

    @property
    def width(self) -> float | None:
        return self._stat(span(self._mins.get("x"), self._maxs.get("x")))

    @property
    def depth(self) -> float | None:
        return self._stat(span(self._mins.get("y"), self._maxs.get("y")))

    @property
    def height(self) -> float | None:
        return self._stat(span(self._mins.get("z"), self._maxs.get("z")))

    # --- Travel (mm) ---

    @property
    def x_travel(self) -> float | None:
        return self._stat(self._travel.get("x"))

    @property
    def y_travel(self) -> float | None:
        return self._stat(self._travel.get("y"))

    @property
    def z_travel(self) -> float | None:
        return self._stat(self._travel.get("z"))

    @property
    def e_travel(self) -> float | None:
        return self._stat(self._e_travel)

    # --- Material, layers, time ---

    @property
    def filament_used(self) -> dict[int, float] | None:
        """Filament extruded per tool (mm), in order of first use."""
        return self._stat(dict(self._filament_used))

    @property
    def is_multi_material(self) -> bool | None:
        if not self._processed:
            return None
        return len(self._filament_used) > 1

    @property
    def layer_ranges(self) -> list[LayerRange] | None:
        return self._stat(list(self._layer_ranges))

    @property
    def layers(self) -> int | None:
        return self._stat(len(self._layer_ranges))

    @property
    def total_duration(self) -> float | None:
        """Estimated execution time in seconds."""
        return self._stat(self._total_duration)

    def duration_in_words(self) -> str | None:
        if not self._processed:
            return None
        return seconds_to_words(self._total_duration)

    def layer_of(self, command_index: int) -> int | None:
        """Return the 1-based layer number containing *command_index*.

        A command that starts a new layer belongs to both neighbouring
        ranges; the lower layer is reported.  Returns None for indices
        outside ``lines`` or before processing.
        """
        if not self._processed or isinstance(command_index, bool) or not isinstance(command_index, int):
            return None
        if command_index < 0 or command_index >= len(self._lines):
            return None
        for number, layer in enumerate(self._layer_ranges, start=1):
            if command_index in layer:
                return number
        return None

    # --- Regeneration ---

    def to_gcode_lines(self, numbered: bool = False) -> list[str]:
        """Serialize every command line, keeping its comment.

        With *numbered*, lines are prefixed ``N1``, ``N2``, ... and carry
        checksums.
        """
        comment_char = self._config.comment_char
        output: list[str] = []
        for number, line in enumerate(self._lines, start=1):
            text = line.to_gcode(number if numbered else None)
            if line.comment:
                text = f"{text} {comment_char} {line.comment}"
            output.append(text)
        return output

    def write(
        self, path: str | os.PathLike, encoding: str = "us-ascii", numbered: bool = False
    ) -> int:
        """Write the regenerated program to *path*; returns the line count."""
        return write_gcode_lines(path, self.to_gcode_lines(numbered), encoding=encoding)


def _homing_axes(line: ParsedLine) -> tuple[str, ...]:
    """Axes homed by a G28 line; all of them when none are named."""
    bare = set(line.string_data.upper().split()) if line.string_data else set()
    named = tuple(
        axis for axis in AXES if getattr(line, axis) is not None or axis.upper() in bare
    )
    return named or AXES
