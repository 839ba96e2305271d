"""PinMatch: fingerprint similarity, duplicate grouping and fuzzy place search."""

__version__ = "0.1.0"
