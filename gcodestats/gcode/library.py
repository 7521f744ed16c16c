"""Sample G-code programs.

Functions returning ready-to-use G-code, as lists of lines, for common
calibration prints.  Used by the test-suite and by the command-line demo
so the analyser can be exercised without external .gcode files.
"""

from __future__ import annotations

import math


# Extrusion constant: filament cross-section area for 1.75 mm filament
_FILAMENT_RADIUS = 1.75 / 2.0  # 0.875 mm
_FILAMENT_AREA = math.pi * _FILAMENT_RADIUS ** 2  # ~2.405 mm^2


def extrusion_length(
    segment_length: float,
    layer_height: float,
    extrusion_width: float = 0.4,
) -> float:
    """Filament length (mm) needed to lay down one segment.

    Uses volumetric equivalence:
        E = segment_length * layer_height * extrusion_width / filament_area
    """
    volume = segment_length * layer_height * extrusion_width
    return volume / _FILAMENT_AREA


def _preamble(title: str, nozzle_temp: float, bed_temp: float) -> list[str]:
    return [
        f"; {title}",
        f"M104 S{nozzle_temp:.0f} ; set hotend temp",
        f"M140 S{bed_temp:.0f} ; set bed temp",
        f"M109 S{nozzle_temp:.0f} ; wait for hotend",
        f"M190 S{bed_temp:.0f} ; wait for bed",
        "G28 ; home all axes",
        "M82 ; absolute extrusion",
        "G90 ; absolute positioning",
        "G92 E0",
        "M106 S255 ; fan on full",
    ]


def _postamble() -> list[str]:
    return [
        "; End",
        "M104 S0 ; hotend off",
        "M140 S0 ; bed off",
        "M107 ; fan off",
        "G28 X Y ; home X Y",
        "M84 ; disable steppers",
    ]


def calibration_cube_gcode(
    size_mm: float = 20.0,
    layer_height: float = 0.2,
    num_layers: int = 10,
    nozzle_temp: float = 210.0,
    bed_temp: float = 60.0,
    print_speed: float = 60.0,
) -> list[str]:
    """Generate G-code for a hollow calibration cube (perimeters only).

    Parameters
    ----------
    size_mm:
        Side length of the cube in mm.
    layer_height:
        Layer height in mm.
    num_layers:
        Number of layers to print.
    nozzle_temp, bed_temp:
        Temperatures in degrees C.
    print_speed:
        Print speed in mm/s (converted to F in mm/min).

    Returns
    -------
    List of G-code lines.  Every layer raises Z once, so the analyser
    reports ``num_layers + 1`` layer ranges (the preamble is layer 1).
    """
    feedrate = print_speed * 60.0  # mm/s -> mm/min
    travel_feedrate = 120.0 * 60.0
    z_feedrate = 300.0

    # Cube origin offset (centered roughly on bed)
    ox, oy = 100.0, 100.0
    corners = [
        (ox + size_mm, oy),
        (ox + size_mm, oy + size_mm),
        (ox, oy + size_mm),
        (ox, oy),
    ]

    lines = _preamble("Calibration cube", nozzle_temp, bed_temp)
    lines.append(f"; Size: {size_mm} mm, Layers: {num_layers}, Layer height: {layer_height} mm")

    e_total = 0.0  # running extrusion counter
    for layer in range(num_layers):
        z = (layer + 1) * layer_height
        lines.append(f"; Layer {layer}")
        lines.append(f"G1 Z{z:.3f} F{z_feedrate:.0f}")
        lines.append(f"G0 X{ox:.3f} Y{oy:.3f} F{travel_feedrate:.0f}")
        for cx, cy in corners:
            e_total += extrusion_length(size_mm, layer_height)
            lines.append(f"G1 X{cx:.3f} Y{cy:.3f} F{feedrate:.0f} E{e_total:.5f}")

    lines.extend(_postamble())
    return lines


def single_line_gcode(
    length_mm: float = 100.0,
    layer_height: float = 0.2,
    nozzle_temp: float = 210.0,
    bed_temp: float = 60.0,
    print_speed: float = 30.0,
) -> list[str]:
    """Generate G-code for a single straight extruded line along X."""
    feedrate = print_speed * 60.0
    travel_feedrate = 120.0 * 60.0

    start_x, start_y = 50.0, 100.0
    end_x = start_x + length_mm
    e_length = extrusion_length(length_mm, layer_height)

    lines = _preamble("Single line test", nozzle_temp, bed_temp)
    lines += [
        f"G1 Z{layer_height:.3f} F300",
        f"G0 X{start_x:.3f} Y{start_y:.3f} F{travel_feedrate:.0f}",
        f"G1 X{end_x:.3f} Y{start_y:.3f} F{feedrate:.0f} E{e_length:.5f}",
    ]
    lines.extend(_postamble())
    return lines


def dual_tool_gcode(
    length_mm: float = 40.0,
    layer_height: float = 0.2,
    print_speed: float = 30.0,
) -> list[str]:
    """Generate a two-extruder program: one line per tool, E reset after each change."""
    feedrate = print_speed * 60.0
    e_length = extrusion_length(length_mm, layer_height)

    lines = _preamble("Dual tool test", 210.0, 60.0)
    lines.append(f"G1 Z{layer_height:.3f} F300")
    for tool, y in ((0, 50.0), (1, 60.0)):
        lines += [
            f"T{tool} ; select extruder {tool}",
            "G92 E0",
            f"G0 X10.000 Y{y:.3f} F7200",
            f"G1 X{10.0 + length_mm:.3f} Y{y:.3f} F{feedrate:.0f} E{e_length:.5f}",
        ]
    lines.extend(_postamble())
    return lines
