"""Configuration management for keyset synchronization."""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv


def _split_languages(value: str) -> List[str]:
    return [lang.strip() for lang in value.split(",") if lang.strip()]


@dataclass
class Config:
    """Project configuration."""

    # Tanker service
    endpoint: str = field(default_factory=lambda: os.getenv("TANKER_ENDPOINT", ""))
    token: str = field(default_factory=lambda: os.getenv("TANKER_TOKEN", ""))
    project_id: str = field(default_factory=lambda: os.getenv("TANKER_PROJECT_ID", ""))
    timeout: float = field(
        default_factory=lambda: float(os.getenv("TANKER_TIMEOUT", "30"))
    )

    # Languages
    development_language: str = field(
        default_factory=lambda: os.getenv("DEVELOPMENT_LANGUAGE", "en")
    )
    localization_languages: List[str] = field(
        default_factory=lambda: _split_languages(os.getenv("LOCALIZATION_LANGUAGES", ""))
    )

    # Extraction
    resources_folder: str = field(
        default_factory=lambda: os.getenv("RESOURCES_FOLDER", "Resources")
    )
    genstrings_path: str = field(
        default_factory=lambda: os.getenv("GENSTRINGS_PATH", "genstrings")
    )

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Config":
        """Load a .env file (if any) and build a config from the environment."""
        load_dotenv(dotenv_path)
        return cls()

    @property
    def all_languages(self) -> List[str]:
        """Development language first, then the localization languages."""
        languages = [self.development_language] + list(self.localization_languages)
        return list(dict.fromkeys(languages))

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if not self.endpoint:
            errors.append("TANKER_ENDPOINT is not set")
        if not self.token:
            errors.append("TANKER_TOKEN is not set")
        if not self.project_id:
            errors.append("TANKER_PROJECT_ID is not set")
        return errors
