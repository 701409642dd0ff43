"""Data models for keyset synchronization."""

from .keyset import LocalizationValue, LocalizationKey, Keyset
from .strings_table import StringsEntry, StringsTable

__all__ = [
    "LocalizationValue",
    "LocalizationKey",
    "Keyset",
    "StringsEntry",
    "StringsTable",
]
