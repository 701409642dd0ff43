"""Tests for the .strings parser and writer."""

import codecs

import pytest

from babelsync.extraction import StringsParser, StringsWriter
from babelsync.extraction.strings_parser import decode_strings, unescape
from babelsync.models import Keyset, LocalizationKey, LocalizationValue

GENSTRINGS_OUTPUT = '''/* Greeting on the main screen */
"Hello" = "Hello";

/* No comment provided by engineer. */
"Quote \\"%@\\"" = "Quote \\"%@\\"";

// line comment
"Multi" = "first
second";

"NoComment" = "Tab\\there\\nnewline";
'''


@pytest.fixture
def parser():
    return StringsParser()


def test_parse_entries_and_comments(parser):
    table = parser.parse_string(GENSTRINGS_OUTPUT, "en")

    assert list(table.entries) == ["Hello", 'Quote "%@"', "Multi", "NoComment"]
    assert table.entries["Hello"].comment == "Greeting on the main screen"
    assert table.entries['Quote "%@"'].value == 'Quote "%@"'
    assert table.entries["Multi"].comment == "line comment"
    assert table.entries["Multi"].value == "first\nsecond"
    assert table.entries["NoComment"].comment is None
    assert table.entries["NoComment"].value == "Tab\there\nnewline"


def test_pairs_and_contexts(parser):
    table = parser.parse_string('/* c */\n"a" = "A";\n"b" = "B";\n', "en")

    assert table.pairs() == {"a": "A", "b": "B"}
    assert table.contexts() == {"a": "c", "b": None}


def test_parse_utf16_file(parser, tmp_path):
    path = tmp_path / "Localizable.strings"
    path.write_bytes(codecs.BOM_UTF16_LE + '"Hi" = "Привет";\n'.encode("utf-16-le"))

    table = parser.parse(str(path), "ru")

    assert table.name == "Localizable.strings"
    assert table.language == "ru"
    assert table.pairs() == {"Hi": "Привет"}


def test_parse_missing_file(parser, tmp_path):
    with pytest.raises(FileNotFoundError):
        parser.parse(str(tmp_path / "missing.strings"), "en")


def test_decode_variants():
    text = '"a" = "b";'
    assert decode_strings(text.encode("utf-8")) == text
    assert decode_strings(codecs.BOM_UTF8 + text.encode("utf-8")) == text
    assert decode_strings(text.encode("utf-16-le")) == text
    assert decode_strings(codecs.BOM_UTF16_BE + text.encode("utf-16-be")) == text


def test_unescape_unicode():
    assert unescape("caf\\U00e9") == "café"


def test_writer_output_for_language():
    keyset = Keyset("Resources/Localizable.strings")
    hello = LocalizationKey("Hello", "greeting")
    hello.append(LocalizationValue("en", "Hello"))
    hello.append(LocalizationValue("fr", 'Dis "bonjour"\n'))
    keyset.merge_key(hello)
    only_en = LocalizationKey("Bye")
    only_en.append(LocalizationValue("en", "Bye"))
    keyset.merge_key(only_en)

    content = StringsWriter().to_string(keyset, "fr")

    assert content == '/* greeting */\n"Hello" = "Dis \\"bonjour\\"\\n";\n'


def test_writer_output_parses_back(parser, tmp_path):
    keyset = Keyset("ks")
    keyset.merge_from({"b": "B\tb", "a": 'A "a"'}, "en", contexts={"a": "first"})

    path = tmp_path / "en.lproj" / "Localizable.strings"
    StringsWriter().write(keyset, "en", str(path))

    table = parser.parse(str(path), "en")
    assert list(table.entries) == ["a", "b"]
    assert table.pairs() == {"a": 'A "a"', "b": "B\tb"}
    assert table.contexts() == {"a": "first", "b": None}


def test_carriage_return_round_trips(parser, tmp_path):
    keyset = Keyset("ks")
    keyset.merge_from({"crlf": "line one\r\nline two"}, "en")

    content = StringsWriter().to_string(keyset, "en")
    assert content == '"crlf" = "line one\\r\\nline two";\n'

    path = tmp_path / "Localizable.strings"
    StringsWriter().write(keyset, "en", str(path))
    assert parser.parse(str(path), "en").pairs() == {"crlf": "line one\r\nline two"}


def test_decode_rejects_bytes_that_are_not_utf16():
    with pytest.raises(UnicodeDecodeError):
        decode_strings(b'"k" = "\xff\xfe\x00v";\x00')
