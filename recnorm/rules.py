"""
Deterministic normalization rules.

Everything here is fixed for the record layout this tool handles: the column
order, the two time zones, and the rendering widths. Nothing is inferred.
"""

FIELD_NAMES = (
    "timestamp",
    "address",
    "zip",
    "full_name",
    "foo_duration",
    "bar_duration",
    "total_duration",
    "notes",
)
FIELD_COUNT = len(FIELD_NAMES)

SOURCE_TZ = "US/Pacific"  # wall clock of the incoming Timestamp column
TARGET_TZ = "US/Eastern"

ZIP_WIDTH = 5
ZIP_PAD = "0"

REPLACEMENT_CHAR = "\ufffd"
INPUT_ENCODING = "utf-8"
OUTPUT_ENCODING = "utf-8"
NORMALIZED_DELIMITER = ","
LINE_TERMINATOR = "\n"
