"""Tests for human-readable duration formatting."""
from gcodestats.utils.formatting import seconds_to_words


class TestSecondsToWords:
    def test_zero(self):
        assert seconds_to_words(0) == ""

    def test_seconds(self):
        assert seconds_to_words(59) == "59 seconds"

    def test_hours(self):
        assert seconds_to_words(3723) == "1 hours 2 minutes 3 seconds"

    def test_days(self):
        assert seconds_to_words(90061) == "1 days 1 hours 1 minutes 1 seconds"
