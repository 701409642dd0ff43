"""Extraction of localizable strings from source files with genstrings."""

import logging
import posixpath
import subprocess
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List

from ..config import Config
from ..errors import ExtractionFailedError
from ..models.keyset import Keyset
from ..models.strings_table import StringsTable
from .strings_parser import StringsParser

logger = logging.getLogger(__name__)


class GenstringsExtractor:
    """Runs genstrings on source files and collects the results into keysets."""

    def __init__(self, genstrings_path: str = "genstrings", resources_folder: str = "Resources"):
        self.genstrings_path = genstrings_path
        self.resources_folder = resources_folder
        self.parser = StringsParser()

    @classmethod
    def from_config(cls, config: Config) -> "GenstringsExtractor":
        return cls(genstrings_path=config.genstrings_path, resources_folder=config.resources_folder)

    def keyset_name(self, table: StringsTable) -> str:
        """Keyset name for a table, e.g. Resources/Localizable.strings."""
        return posixpath.join(self.resources_folder, Path(table.name).name)

    def extract_file(self, source_file: str, language: str) -> List[StringsTable]:
        """
        Run genstrings on a single source file.

        Args:
            source_file: Path to the source file
            language: Language of the string literals in the source

        Returns:
            One StringsTable per .strings file genstrings produced

        Raises:
            ExtractionFailedError: If genstrings cannot be run, exits non-zero
                or produces a table that cannot be decoded
        """
        with tempfile.TemporaryDirectory(prefix="babelsync-") as output_dir:
            command = [self.genstrings_path, "-littleEndian", "-o", output_dir, source_file]
            logger.debug("Running %s", " ".join(command))
            try:
                result = subprocess.run(command, capture_output=True, text=True, check=False)
            except OSError as e:
                raise ExtractionFailedError(source_file, output=str(e)) from e

            if result.returncode != 0:
                raise ExtractionFailedError(source_file, result.returncode, result.stderr)

            tables = []
            for path in sorted(Path(output_dir).glob("*.strings")):
                try:
                    tables.append(self.parser.parse(str(path), language))
                except (UnicodeDecodeError, OSError) as e:
                    raise ExtractionFailedError(source_file, output=str(e), table=path.name) from e
            return tables

    def run(self, files: Iterable[str], language: str) -> Dict[str, Keyset]:
        """
        Extract strings from all files and merge them into keysets.

        Args:
            files: Source files to scan, processed in order
            language: Development language of the sources

        Returns:
            Map of keyset name -> Keyset
        """
        keysets: Dict[str, Keyset] = {}
        for source_file in files:
            for table in self.extract_file(source_file, language):
                name = self.keyset_name(table)
                keyset = keysets.setdefault(name, Keyset(name=name))
                keyset.merge_from(table.pairs(), table.language, contexts=table.contexts())
                logger.info("Extracted %d strings from %s into %s", len(table.entries), source_file, name)
        return keysets
