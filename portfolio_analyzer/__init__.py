"""Score public GitHub profiles as developer portfolios."""

__version__ = "0.1.0"
