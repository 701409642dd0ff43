"""Writer for the Tanker keyset XML format."""

from typing import Iterable, Optional

from lxml import etree

from ..models.keyset import Keyset, LocalizationKey


class TankerXmlWriter:
    """Serializes keysets into Tanker upload documents."""

    def to_string(
        self,
        project_id: str,
        keysets: Iterable[Keyset],
        language: Optional[str] = None,
    ) -> bytes:
        """
        Build a complete upload document.

        Args:
            project_id: Tanker project the keysets belong to
            keysets: Keysets to include
            language: Only emit values for this language when given

        Returns:
            UTF-8 encoded XML with declaration
        """
        root = etree.Element("tanker")
        project = etree.SubElement(root, "project", id=project_id)
        for keyset in keysets:
            project.append(self.keyset_element(keyset, language))

        return etree.tostring(root, xml_declaration=True, encoding="UTF-8")

    def keyset_to_string(self, keyset: Keyset, language: Optional[str] = None) -> bytes:
        """Serialize a single <keyset> element without the project wrapper."""
        return etree.tostring(self.keyset_element(keyset, language), encoding="UTF-8")

    def keyset_element(self, keyset: Keyset, language: Optional[str] = None) -> etree._Element:
        """Convert a Keyset to a <keyset> element."""
        element = etree.Element("keyset", id=keyset.name)
        for key in keyset.keys.values():
            element.append(self._key_element(key, language))
        return element

    def _key_element(self, key: LocalizationKey, language: Optional[str]) -> etree._Element:
        element = etree.Element("key", id=key.id, is_plural="False")
        context = etree.SubElement(element, "context")
        if key.context is not None:
            context.text = key.context

        for value in key.values.values():
            if language and value.language != language:
                continue
            value_element = etree.SubElement(element, "value", language=value.language)
            if value.status is not None:
                value_element.set("status", value.status)
            value_element.text = value.text

        return element
