"""Writer for Apple .strings files."""

from pathlib import Path

from ..models.keyset import Keyset


def escape(text: str) -> str:
    """Escape a string for a .strings literal."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


class StringsWriter:
    """Writes the values of one language of a keyset as a .strings file."""

    def write(self, keyset: Keyset, language: str, output_path: str) -> None:
        """
        Write a keyset to disk.

        Args:
            keyset: The keyset to write
            language: Language whose values are written
            output_path: Path to write the file to
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_string(keyset, language))

    def to_string(self, keyset: Keyset, language: str) -> str:
        """
        Convert a keyset to .strings content.

        Keys without a value for ``language`` are left out.
        """
        lines = []
        # Sort keys for consistent output
        for key_id in sorted(keyset.keys):
            key = keyset.keys[key_id]
            text = key.text_for(language)
            if text is None:
                continue
            if key.context:
                lines.append(f"/* {key.context} */")
            lines.append(f'"{escape(key.id)}" = "{escape(text)}";')
            lines.append("")

        return "\n".join(lines)
