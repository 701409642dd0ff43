"""Tanker translation service client and XML codec."""

from .client import TankerClient, MULTIPART_BOUNDARY
from .xml_parser import TankerXmlParser
from .xml_writer import TankerXmlWriter

__all__ = ["TankerClient", "TankerXmlParser", "TankerXmlWriter", "MULTIPART_BOUNDARY"]
