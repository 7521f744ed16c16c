"""Human-readable formatting helpers."""

from __future__ import annotations

_UNITS = ((60, "seconds"), (60, "minutes"), (24, "hours"), (1000, "days"))


def seconds_to_words(seconds: float) -> str:
    """Render a duration as e.g. ``"1 hours 2 minutes 3 seconds"``.

    Units are emitted from largest to smallest; the largest units are
    dropped once the remaining quantity reaches zero.
    """
    parts: list[str] = []
    remaining = seconds
    for count, name in _UNITS:
        if remaining <= 0:
            break
        remaining, n = divmod(remaining, count)
        parts.append(f"{int(n)} {name}")
    return " ".join(reversed(parts))
