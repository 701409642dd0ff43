"""Parser for Tanker XML responses."""

from typing import List, Optional, Union

from lxml import etree

from ..errors import MalformedValueError
from ..models.keyset import Keyset, LocalizationKey, LocalizationValue


class TankerXmlParser:
    """Parser for Tanker export and error documents."""

    def __init__(self):
        self._xml_parser = etree.XMLParser(resolve_entities=False, no_network=True)

    def parse_string(self, content: Union[str, bytes]) -> etree._Element:
        """
        Parse an XML document.

        Args:
            content: Raw response body

        Returns:
            The root element

        Raises:
            lxml.etree.XMLSyntaxError: If the content is not well-formed XML
        """
        if isinstance(content, str):
            content = content.encode("utf-8")
        return etree.fromstring(content, self._xml_parser)

    def keyset_ids(self, doc: etree._Element) -> List[str]:
        """Ids of all <keyset> elements in document order."""
        return [node.get("id") for node in doc.iter("keyset")]

    def find_keyset_nodes(self, doc: etree._Element, name: str) -> List[etree._Element]:
        """All <keyset> elements whose id attribute equals ``name``."""
        return doc.xpath("//keyset[@id=$name]", name=name)

    def error_message(self, doc: etree._Element) -> Optional[str]:
        """Text of the first <error> inside a <result>, if any."""
        nodes = doc.xpath("//result//error")
        if not nodes:
            return None
        return "".join(nodes[0].itertext())

    def parse_keyset(self, node: etree._Element) -> Keyset:
        """Build a Keyset from a <keyset> element."""
        keyset = Keyset(name=node.get("id"))
        for key_node in node.iter("key"):
            keyset.merge_key(self.parse_key(key_node))
        return keyset

    def parse_key(self, node: etree._Element) -> LocalizationKey:
        """Build a LocalizationKey from a <key> element, skipping empty values."""
        context_node = node.find("context")
        context = None
        if context_node is not None:
            context = "".join(context_node.itertext())

        key = LocalizationKey(id=node.get("id"), context=context)
        for value_node in node.iter("value"):
            value = self.parse_value(value_node)
            if value is not None:
                key.append(value)
        return key

    def parse_value(self, node: etree._Element) -> Optional[LocalizationValue]:
        """Build a LocalizationValue, or None when the node has no text."""
        try:
            return LocalizationValue.from_wire(
                language=node.get("language"),
                text="".join(node.itertext()),
                status=node.get("status"),
            )
        except MalformedValueError:
            return None
