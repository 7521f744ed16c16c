"""Tests for the G-code command catalog."""
from gcodestats.gcode.codes import Code, MOVE_CODES


class TestCodes:
    def test_string_values(self):
        assert Code.CONTROLLED_MOVE.value == "G1"
        assert Code.CONTROLLED_MOVE == "G1"

    def test_lookup(self):
        assert Code.lookup("G92") is Code.SET_POSITION
        assert Code.lookup("M83") is Code.REL_EXT_MODE
        assert Code.lookup("G29") is None
        assert Code.lookup(None) is None

    def test_lookup_zero_padded(self):
        assert Code.lookup("G00") is Code.RAPID_MOVE
        assert Code.lookup("G01") is Code.CONTROLLED_MOVE
        assert Code.lookup("G092") is Code.SET_POSITION
        assert Code.lookup("M082") is Code.ABS_EXT_MODE

    def test_lookup_rejects_other_text(self):
        assert Code.lookup("") is None
        assert Code.lookup("g1") is None
        assert Code.lookup("G1.5") is None

    def test_move_codes(self):
        assert MOVE_CODES == {Code.RAPID_MOVE, Code.CONTROLLED_MOVE}
