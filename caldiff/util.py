"""Utility constants for caldiff.

Time unit constants represent durations in seconds, matching the clock-based
part of a Duration (hours, minutes, seconds).
"""

# Time unit constants (all values in seconds)
SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400

# Unit letters in display order; months and minutes share "m"
UNIT_LETTERS = (
    ("years", "y"),
    ("months", "m"),
    ("days", "d"),
    ("hours", "h"),
    ("minutes", "m"),
    ("seconds", "s"),
)
