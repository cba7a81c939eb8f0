"""move-numeric-files - Move numbered files up so that no two share a number."""

__version__ = "0.1.0"
