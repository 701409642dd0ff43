"""Tests for genstrings extraction with a mocked subprocess."""

import codecs
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from babelsync.config import Config
from babelsync.errors import ExtractionFailedError
from babelsync.extraction import GenstringsExtractor

OUTPUTS = {
    "Main.m": {
        "Localizable.strings": '/* greeting */\n"Hello" = "Hello";\n',
    },
    "Other.m": {
        "Localizable.strings": '/* other */\n"Hello" = "Hello again";\n"Bye" = "Bye";\n',
        "Errors.strings": '"Oops" = "Oops";\n',
    },
}


class FakeGenstrings:
    """Writes canned UTF-16 .strings files into the -o directory."""

    def __init__(self, returncode=0, stderr="", raw_outputs=None):
        self.returncode = returncode
        self.raw_outputs = raw_outputs
        self.stderr = stderr
        self.output_dirs = []

    def __call__(self, command, **kwargs):
        output_dir = Path(command[3])
        self.output_dirs.append(output_dir)
        if self.raw_outputs is not None:
            for name, data in self.raw_outputs.items():
                (output_dir / name).write_bytes(data)
        elif self.returncode == 0:
            for name, content in OUTPUTS[Path(command[4]).name].items():
                (output_dir / name).write_bytes(codecs.BOM_UTF16_LE + content.encode("utf-16-le"))
        return subprocess.CompletedProcess(command, self.returncode, "", self.stderr)


@pytest.fixture
def extractor():
    return GenstringsExtractor(genstrings_path="/usr/bin/genstrings", resources_folder="Resources")


def test_extract_file_runs_genstrings(extractor):
    fake = FakeGenstrings()
    with patch("babelsync.extraction.genstrings.subprocess.run", side_effect=fake) as run:
        tables = extractor.extract_file("src/Other.m", "en")

    command = run.call_args.args[0]
    assert command[:3] == ["/usr/bin/genstrings", "-littleEndian", "-o"]
    assert command[4] == "src/Other.m"
    assert [t.name for t in tables] == ["Errors.strings", "Localizable.strings"]
    assert all(t.language == "en" for t in tables)
    assert not fake.output_dirs[0].exists()


def test_run_merges_tables_into_keysets(extractor):
    with patch("babelsync.extraction.genstrings.subprocess.run", side_effect=FakeGenstrings()):
        keysets = extractor.run(["src/Main.m", "src/Other.m"], "en")

    assert set(keysets) == {"Resources/Localizable.strings", "Resources/Errors.strings"}

    localizable = keysets["Resources/Localizable.strings"]
    assert localizable.name == "Resources/Localizable.strings"
    assert set(localizable.keys) == {"Hello", "Bye"}
    hello = localizable.keys["Hello"]
    assert hello.context == "greeting"
    assert hello.text_for("en") == "Hello again"
    assert hello.values["en"].status == "new"


def test_non_zero_exit_raises_and_cleans_up(extractor):
    fake = FakeGenstrings(returncode=1, stderr="bad input\n")
    with patch("babelsync.extraction.genstrings.subprocess.run", side_effect=fake):
        with pytest.raises(ExtractionFailedError) as exc_info:
            extractor.run(["src/Main.m"], "en")

    assert exc_info.value.path == "src/Main.m"
    assert exc_info.value.returncode == 1
    assert "bad input" in str(exc_info.value)
    assert not fake.output_dirs[0].exists()


@pytest.mark.parametrize("data", [b'"k" = "\xff";', b'"k" = "\xff\xfe\x00v";\x00'])
def test_undecodable_table_raises_and_cleans_up(extractor, data):
    fake = FakeGenstrings(raw_outputs={"Localizable.strings": data})
    with patch("babelsync.extraction.genstrings.subprocess.run", side_effect=fake):
        with pytest.raises(ExtractionFailedError) as exc_info:
            extractor.run(["src/Main.m"], "en")

    assert exc_info.value.path == "src/Main.m"
    assert exc_info.value.table == "Localizable.strings"
    assert "Localizable.strings" in str(exc_info.value)
    assert "src/Main.m" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
    assert not fake.output_dirs[0].exists()


def test_missing_tool_raises_extraction_failed(extractor):
    with patch(
        "babelsync.extraction.genstrings.subprocess.run",
        side_effect=FileNotFoundError("genstrings"),
    ):
        with pytest.raises(ExtractionFailedError) as exc_info:
            extractor.extract_file("src/Main.m", "en")

    assert exc_info.value.returncode is None
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_from_config():
    config = Config(genstrings_path="/opt/genstrings", resources_folder="App/Resources")

    extractor = GenstringsExtractor.from_config(config)

    assert extractor.genstrings_path == "/opt/genstrings"
    assert extractor.resources_folder == "App/Resources"
