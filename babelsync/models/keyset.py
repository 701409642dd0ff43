"""Data models for keysets, keys and their per-language values."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional

from ..errors import MalformedValueError


@dataclass(frozen=True)
class LocalizationValue:
    """A translated text for one language with its review status."""

    language: str
    text: str
    status: Optional[str] = None  # new, approved, ...

    @classmethod
    def from_wire(cls, language: str, text: str, status: Optional[str] = None) -> "LocalizationValue":
        """Build a value received from the service; empty text is rejected."""
        if not text:
            raise MalformedValueError(f"Empty text for language {language!r}")
        return cls(language=language, text=text, status=status)


@dataclass
class LocalizationKey:
    """A translatable key with a context note and one value per language."""

    id: str
    context: Optional[str] = None
    values: Dict[str, LocalizationValue] = field(default_factory=dict)

    def append(self, value: LocalizationValue) -> None:
        """Set the value for ``value.language``, replacing any previous one."""
        self.values[value.language] = value

    def merge_values(self, other: Mapping[str, LocalizationValue]) -> None:
        """
        Overwrite the values for every language present in ``other``.

        Languages missing from ``other`` keep their current value.
        """
        for language, value in other.items():
            self.values[language] = value

    def value_for(self, language: str) -> Optional[LocalizationValue]:
        return self.values.get(language)

    def text_for(self, language: str) -> Optional[str]:
        value = self.values.get(language)
        return value.text if value else None

    @property
    def languages(self) -> List[str]:
        return list(self.values.keys())


@dataclass
class Keyset:
    """A named string table: key id -> LocalizationKey."""

    name: str
    keys: Dict[str, LocalizationKey] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key_id: object) -> bool:
        return key_id in self.keys

    def __iter__(self) -> Iterator[LocalizationKey]:
        return iter(self.keys.values())

    @property
    def languages(self) -> List[str]:
        """All languages that have at least one value, in first-seen order."""
        seen: Dict[str, None] = {}
        for key in self.keys.values():
            for language in key.values:
                seen.setdefault(language, None)
        return list(seen)

    def merge_key(self, key: LocalizationKey) -> None:
        """
        Merge a key into this keyset.

        An unknown key is inserted as is. For a known key only the values
        are merged; the existing context is kept.
        """
        existing = self.keys.get(key.id)
        if existing is None:
            self.keys[key.id] = key
        else:
            existing.merge_values(key.values)

    def merge_from(
        self,
        pairs: Mapping[str, str],
        language: str,
        contexts: Optional[Mapping[str, Optional[str]]] = None,
        status: Optional[str] = "new",
    ) -> None:
        """
        Merge extracted key/text pairs for a single language.

        Args:
            pairs: Map of key id -> text
            language: Language the texts are written in
            contexts: Optional map of key id -> context, used for new keys only
            status: Status given to the merged values
        """
        contexts = contexts or {}
        for key_id, text in pairs.items():
            key = LocalizationKey(id=key_id, context=contexts.get(key_id))
            key.append(LocalizationValue(language=language, text=text, status=status))
            self.merge_key(key)
