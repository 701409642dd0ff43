"""Keep localizable strings in sync with a Tanker translation project."""

__version__ = "0.1.0"
