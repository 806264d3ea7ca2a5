"""Photo normalisation and delivery client for the furniture judge."""

__version__ = "0.1.0"
