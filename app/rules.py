"""
Deterministic cleaning rules.

Tables here are data, not logic: extend them without touching the algorithms.
"""

DELIMITER = ","
LINE_TERMINATOR = "\n"
OUTPUT_ENCODING = "utf-8"

CLEANED_FILENAME_PREFIX = "cleaned_"
DEFAULT_CLEANED_FILENAME = "cleaned_csv.csv"

# Suffixes that are real TLDs even though they look like truncated typos.
ALLOWED_TLDS = frozenset({
    ".co", ".io", ".org", ".net", ".edu", ".gov", ".mil", ".int",
    ".uk", ".us", ".ca", ".au", ".in", ".de", ".fr", ".jp", ".cn",
})

TLD_TYPO_CORRECTIONS = {
    ".con": ".com",
    ".cmo": ".com",
    ".comn": ".com",
    ".comm": ".com",
    ".coom": ".com",
    ".ocm": ".com",
    ".vom": ".com",
    ".xom": ".com",
    ".com,": ".com",
    ".or": ".org",
    ".ogr": ".org",
    ".orgg": ".org",
    ".rog": ".org",
    ".org,": ".org",
    ".ne": ".net",
    ".nte": ".net",
    ".nett": ".net",
    ".net,": ".net",
}

# Column-role heuristics, checked in order; first match wins.
EMAIL_COLUMN_MARKERS = ("email",)
PHONE_COLUMN_MARKERS = ("phone", "mobile", "contact")

PHONE_FORMATTING_CHARS = " -()+."
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15
