"""String extraction and .strings file handling modules."""

from .genstrings import GenstringsExtractor
from .strings_parser import StringsParser
from .strings_writer import StringsWriter

__all__ = ["GenstringsExtractor", "StringsParser", "StringsWriter"]
