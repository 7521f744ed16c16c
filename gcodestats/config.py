"""AnalyzerConfig — construction-time options for a Document."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real

from gcodestats.errors import InvalidConfigError


def _positive_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class AnalyzerConfig:
    """Options controlling how a G-code document is loaded and analysed."""

    # --- Kinematics ---
    default_speed: float = 2400.0  # mm/min, injected when add_speed is set
    acceleration: float = 1500.0  # mm/s² (Sprinter firmware default)

    # --- Processing ---
    auto_process: bool = True  # run the analysis pass on construction
    add_speed: bool = False  # carry the last F into moves that omit one

    # --- Regeneration offsets (mm) ---
    x_add: float | None = None
    y_add: float | None = None
    z_add: float | None = None

    # --- Grammar ---
    comment_char: str = ";"

    def __post_init__(self) -> None:
        if not _positive_number(self.default_speed):
            raise InvalidConfigError(
                f"default_speed must be a number greater than 0, got {self.default_speed!r}"
            )
        if not _positive_number(self.acceleration):
            raise InvalidConfigError(
                f"acceleration must be a number greater than 0, got {self.acceleration!r}"
            )
        if not isinstance(self.comment_char, str) or len(self.comment_char) != 1:
            raise InvalidConfigError(
                f"comment_char must be a single character, got {self.comment_char!r}"
            )
        if self.comment_char.isalnum() or self.comment_char.isspace():
            raise InvalidConfigError(
                f"comment_char cannot be alphanumeric or whitespace, got {self.comment_char!r}"
            )


# Singleton default config
DEFAULT_CONFIG = AnalyzerConfig()
