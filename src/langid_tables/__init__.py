"""Generate RTL and likely-subtags lookup tables from CLDR JSON data."""

__version__ = "0.1.0"
