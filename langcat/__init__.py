"""langcat - client for a catalog of programming languages."""

__version__ = "0.1.0"
