"""Tests for sample programs, file I/O and regeneration."""
import pytest
from gcodestats.analysis.document import Document
from gcodestats.files import is_gcode_file, read_gcode_lines, write_gcode_lines
from gcodestats.gcode.library import (
    calibration_cube_gcode,
    extrusion_length,
    single_line_gcode,
)
from gcodestats.gcode.parser import checksum


class TestGCodeLibrary:
    def test_calibration_cube_statistics(self):
        doc = Document(calibration_cube_gcode(size_mm=20.0, layer_height=0.2, num_layers=5))
        assert doc.layers == 6
        assert doc.x_min == pytest.approx(100.0)
        assert doc.x_max == pytest.approx(120.0)
        assert doc.width == pytest.approx(20.0)
        assert doc.depth == pytest.approx(20.0)
        assert doc.height == pytest.approx(0.8)
        assert doc.filament_used[0] == pytest.approx(20 * extrusion_length(20.0, 0.2), abs=1e-3)
        assert not doc.is_multi_material
        assert doc.total_duration > 0.0

    def test_calibration_cube_layers_contiguous(self):
        ranges = Document(calibration_cube_gcode(num_layers=8)).layer_ranges
        for current, following in zip(ranges, ranges[1:]):
            assert current.upper == following.lower

    def test_calibration_cube_comments(self):
        doc = Document(calibration_cube_gcode(num_layers=4))
        assert len(doc.comments) == 3 + 4
        assert doc.comments[0] == "Calibration cube"

    def test_single_line(self):
        doc = Document(single_line_gcode(length_mm=100.0, layer_height=0.2))
        # Only extrusion endpoints count, so the travel to the start is excluded
        assert doc.x_min == pytest.approx(150.0)
        assert doc.x_max == pytest.approx(150.0)
        assert doc.x_travel == pytest.approx(150.0 + 150.0)
        assert doc.filament_used[0] == pytest.approx(extrusion_length(100.0, 0.2), abs=1e-4)
        assert doc.layers == 2


class TestFiles:
    def test_read_and_analyse_file(self, tmp_path):
        path = tmp_path / "part.gcode"
        path.write_text("; header\nG28\nG1 X10 E1 F600\n")
        doc = Document.from_file(path)
        assert doc.comments == ["header"]
        assert len(doc) == 2
        assert doc.x_max == pytest.approx(10.0)
        assert doc.raw_data == ["; header\n", "G28\n", "G1 X10 E1 F600\n"]

    def test_blank_lines_in_file_are_comments(self, tmp_path):
        path = tmp_path / "sliced.gcode"
        path.write_text("; header\n\nG28\n\n   \nG1 X10 E1 F600\n")
        doc = Document.from_file(path)
        assert doc.comments == ["header", "", ""]
        assert [line.command for line in doc.lines] == ["G28", "G1"]
        assert doc.x_max == pytest.approx(10.0)

    def test_crlf_line_endings(self, tmp_path):
        path = tmp_path / "dos.gcode"
        path.write_bytes(b"G28\r\n\r\nG1 X10 E1 F600\r\n")
        doc = Document.from_file(path)
        assert len(doc) == 2
        assert doc.comments == [""]

    def test_byte_order_mark_dropped(self, tmp_path):
        path = tmp_path / "bom.gcode"
        path.write_bytes(b"\xef\xbb\xbfG28\nG1 X10 E1 F600\n")
        doc = Document.from_file(path)
        assert doc.lines[0].command == "G28"
        assert doc.x_max == pytest.approx(10.0)
        assert read_gcode_lines(path)[0] == "G28\n"

    def test_path_string_input(self, tmp_path):
        path = tmp_path / "part.gcode"
        path.write_text("G1 X5 F600\n")
        assert Document(str(path)).x_travel == pytest.approx(5.0)

    def test_is_gcode_file(self, tmp_path):
        assert not is_gcode_file(tmp_path)
        assert not is_gcode_file("")
        path = tmp_path / "a.gcode"
        path.write_text("G28\n")
        assert is_gcode_file(path)
        assert read_gcode_lines(path) == ["G28\n"]

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_gcode_lines(tmp_path / "missing.gcode")

    def test_write_lines(self, tmp_path):
        path = tmp_path / "out.gcode"
        assert write_gcode_lines(path, ["G28", "M84"]) == 2
        assert path.read_text() == "G28\nM84\n"


class TestRegeneration:
    def test_to_gcode_lines_keeps_comments(self):
        doc = Document(["G28 ; home", "; skipped", "G1 X10 F600"])
        assert doc.to_gcode_lines() == ["G28 ; home", "G1 X10 F600"]

    def test_numbered_lines(self):
        doc = Document(["G28", "G1 X10 F600"])
        first, second = doc.to_gcode_lines(numbered=True)
        assert first == f"N1 G28*{checksum('N1 G28')}"
        assert second.startswith("N2 G1 X10 F600*")

    def test_offsets_apply_to_output_only(self):
        doc = Document(["G1 X10 Y10 Z1"], x_add=5)
        assert doc.to_gcode_lines() == ["G1 X15 Y10 Z1"]
        assert doc.x_travel == pytest.approx(10.0)

    def test_write(self, tmp_path):
        path = tmp_path / "out.gcode"
        doc = Document(["G28 ; home", "G1 X10 F600"])
        assert doc.write(path) == 2
        assert path.read_text(encoding="us-ascii") == "G28 ; home\nG1 X10 F600\n"

    def test_written_file_reanalyses_identically(self, tmp_path):
        path = tmp_path / "cube.gcode"
        original = Document(calibration_cube_gcode(num_layers=3))
        original.write(path)
        again = Document.from_file(path)
        assert again.layers == original.layers
        assert again.width == pytest.approx(original.width)
        assert again.filament_used[0] == pytest.approx(original.filament_used[0])
        assert again.total_duration == pytest.approx(original.total_duration)
