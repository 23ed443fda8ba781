"""partguard - permission resolution and column security for Part-DB."""

__version__ = "0.1.0"
