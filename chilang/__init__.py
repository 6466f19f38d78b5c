"""Parser, expression tree and simulator for the chilang language, plus a tiny integer VM."""

__version__ = "0.1.0"