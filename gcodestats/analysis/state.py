from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

AXES = ("x", "y", "z")


class ExtrusionState(Enum):
    """How a tool's next move updates its filament total."""

    ACCUMULATING = "accumulating"
    PENDING_OVERWRITE = "pending_overwrite"  # a G92 reset happened


@dataclass
class ToolExtrusion:
    """Extruder bookkeeping for one tool.

    ``position`` is the tool's logical E coordinate; ``committed`` holds
    the filament extruded before the last set-position reset.
    """
    position: float = 0.0
    committed: float = 0.0
    state: ExtrusionState = ExtrusionState.ACCUMULATING

    @property
    def total(self) -> float:
        return self.committed + self.position

    def reset(self, new_position: float | None) -> float:
        """Commit the pre-reset E value and enter the pending-overwrite state."""
        self.committed += self.position
        if new_position is not None:
            self.position = new_position
        self.state = ExtrusionState.PENDING_OVERWRITE
        return self.committed


@dataclass
class MachineState:
    """Mutable machine state replayed by the analysis pass."""
    # Modes
    imperial: bool = False  # G20 / G21
    relative: bool = False  # G91 / G90
    relative_extrusion: bool = False  # M83 / M82

    # Position (mm)
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # Speed of the last controlled move (mm/s)
    speed: float = 0.0

    # Progress
    tool: int = 0
    command_index: int = 0

    # Per-tool extruders, created on first use
    extruders: dict[int, ToolExtrusion] = field(default_factory=dict)

    def extruder(self, tool: int) -> ToolExtrusion:
        if tool not in self.extruders:
            self.extruders[tool] = ToolExtrusion()
        return self.extruders[tool]

    def to_mm(self, value: float | None) -> float | None:
        """Convert *value* from the active units to millimetres."""
        if value is None or not self.imperial:
            return value
        return value * 25.4

    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)
