"""Parser for Apple .strings files as produced by genstrings."""

import codecs
import re
from pathlib import Path

from ..models.strings_table import StringsEntry, StringsTable

TOKEN_PATTERN = re.compile(
    r"/\*(?P<block>.*?)\*/"
    r"|//(?P<line>[^\n]*)"
    r'|"(?P<key>(?:[^"\\]|\\.)*)"\s*=\s*"(?P<value>(?:[^"\\]|\\.)*)"\s*;',
    re.DOTALL,
)

ESCAPE_PATTERN = re.compile(r'\\(U[0-9a-fA-F]{4}|u[0-9a-fA-F]{4}|.)', re.DOTALL)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "'": "'", "\\": "\\"}


def decode_strings(data: bytes) -> str:
    """Decode raw .strings bytes (UTF-16 with BOM, UTF-8, or bare UTF-16LE)."""
    if data.startswith(codecs.BOM_UTF16_LE) or data.startswith(codecs.BOM_UTF16_BE):
        return data.decode("utf-16")
    if data.startswith(codecs.BOM_UTF8):
        return data.decode("utf-8-sig")
    # genstrings -littleEndian without a BOM: ASCII first char, then a NUL
    if len(data) % 2 == 0 and data[1:2] == b"\x00":
        return data.decode("utf-16-le")
    return data.decode("utf-8")


def unescape(text: str) -> str:
    """Resolve backslash escapes used in .strings literals."""

    def replace(match: re.Match) -> str:
        escape = match.group(1)
        if len(escape) == 5:
            return chr(int(escape[1:], 16))
        return _ESCAPES.get(escape, escape)

    return ESCAPE_PATTERN.sub(replace, text)


class StringsParser:
    """Parser for .strings files."""

    def parse(self, file_path: str, language: str) -> StringsTable:
        """
        Parse a .strings file.

        Args:
            file_path: Path to the .strings file
            language: Language the table is written in

        Returns:
            StringsTable named after the file
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        content = decode_strings(path.read_bytes())
        return self.parse_string(content, language, name=path.name)

    def parse_string(self, content: str, language: str, name: str = "Localizable.strings") -> StringsTable:
        """Parse .strings content from a string."""
        table = StringsTable(name=name, language=language)
        comments = []

        for match in TOKEN_PATTERN.finditer(content):
            if match.group("block") is not None:
                comments.append(match.group("block").strip())
            elif match.group("line") is not None:
                comments.append(match.group("line").strip())
            else:
                key = unescape(match.group("key"))
                table.entries[key] = StringsEntry(
                    key=key,
                    value=unescape(match.group("value")),
                    comment="\n".join(comments) if comments else None,
                )
                comments = []

        return table
