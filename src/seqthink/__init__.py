"""seqthink - tool-aware sequential thinking service."""

__version__ = "0.1.0"
