"""Data models for Apple .strings tables."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class StringsEntry:
    """A single "key" = "value"; line with its preceding comment."""

    key: str
    value: str
    comment: Optional[str] = None


@dataclass
class StringsTable:
    """Represents one .strings file for one language."""

    name: str  # file name, e.g. Localizable.strings
    language: str
    entries: Dict[str, StringsEntry] = field(default_factory=dict)

    def pairs(self) -> Dict[str, str]:
        """Key -> text for every entry."""
        return {key: entry.value for key, entry in self.entries.items()}

    def contexts(self) -> Dict[str, Optional[str]]:
        """Key -> comment for every entry."""
        return {key: entry.comment for key, entry in self.entries.items()}
