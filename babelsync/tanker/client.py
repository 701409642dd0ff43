"""HTTP client for the Tanker translation service."""

import logging
from typing import Dict, List, Optional, Sequence, Union

import requests
from lxml import etree
from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from ..config import Config
from ..errors import MalformedResponseError, ServiceError
from ..models.keyset import Keyset
from .xml_parser import TankerXmlParser
from .xml_writer import TankerXmlWriter

logger = logging.getLogger(__name__)

MULTIPART_BOUNDARY = "114YANDEXTANKERCLIENTBNDR"


class TankerClient:
    """Client for the Tanker keyset API."""

    def __init__(
        self,
        endpoint: str,
        token: str,
        project_id: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30.0,
    ):
        """
        Initialize the Tanker client.

        Args:
            endpoint: Base URL of the service, e.g. "https://tanker.example.com"
            token: Credential sent in the AUTHORIZATION header of every request
            project_id: Tanker project to operate on
            session: Optional requests session (a new one is created otherwise)
            timeout: Per-request timeout in seconds, None to wait forever
        """
        self.endpoint = endpoint.rstrip("/")
        self.token = token
        self.project_id = project_id
        self.session = session or requests.Session()
        self.timeout = timeout
        self.parser = TankerXmlParser()
        self.writer = TankerXmlWriter()

    @classmethod
    def from_config(cls, config: Config, session: Optional[requests.Session] = None) -> "TankerClient":
        return cls(
            endpoint=config.endpoint,
            token=config.token,
            project_id=config.project_id,
            session=session,
            timeout=config.timeout,
        )

    def list_keysets(self) -> List[str]:
        """Return the ids of all keysets in the project."""
        doc = self._get("/keysets/", {"project-id": self.project_id})
        if doc is None:
            return []
        return self.parser.keyset_ids(doc)

    def create_keyset(self, name: str) -> None:
        """Create an empty keyset."""
        self._post("/keysets/create/", {"project-id": self.project_id, "keyset-id": name})

    def replace_keyset(self, keyset: Keyset, language: Optional[str] = None) -> None:
        """
        Replace the remote keyset with the local one.

        Args:
            keyset: Keyset to upload
            language: Only upload (and replace) values for this language
        """
        document = self.writer.to_string(self.project_id, [keyset], language)
        payload: Dict[str, Union[str, bytes]] = {
            "file": document,
            "project-id": self.project_id,
            "keyset-id": keyset.name,
            "format": "xml",
        }
        if language:
            payload["language"] = language
        self._post("/keysets/replace/", payload, files=("file",))

    def export_project(
        self,
        keyset_name: Optional[str] = None,
        languages: Optional[Union[str, Sequence[str]]] = None,
        status: Optional[str] = None,
        safe: bool = False,
    ) -> Optional[etree._Element]:
        """
        Export the project (or one keyset) as XML.

        Args:
            keyset_name: Restrict the export to this keyset
            languages: A language code or a list of codes
            status: Only export values with this status
            safe: Ask the service to fall back to safe values

        Returns:
            Root element of the exported document
        """
        params = {"project-id": self.project_id}
        if keyset_name:
            params["keyset-id"] = keyset_name
        if languages:
            if not isinstance(languages, str):
                languages = ",".join(languages)
            params["language"] = languages
        if status:
            params["status"] = str(status)
        if safe:
            params["safe"] = "true"
        return self._get("/projects/export/xml/", params)

    def load_keyset(
        self,
        keyset_name: str,
        languages: Optional[Union[str, Sequence[str]]] = None,
        status: Optional[str] = None,
        safe: bool = False,
    ) -> Keyset:
        """
        Download a keyset.

        Returns an empty keyset with the requested name when the service
        does not know it.
        """
        doc = self.export_project(keyset_name, languages, status, safe)
        if doc is not None:
            for node in self.parser.find_keyset_nodes(doc, keyset_name):
                keyset = self.parser.parse_keyset(node)
                if keyset.name == keyset_name:
                    return keyset
        logger.debug("Keyset %s not found in export, using an empty one", keyset_name)
        return Keyset(name=keyset_name)

    def drop_keyset(self, keyset_name: str) -> None:
        """Delete a keyset from the project."""
        self._delete(f"/admin/project/{self.project_id}/keyset/", {"keyset": keyset_name})

    def _url(self, path: str) -> str:
        return f"{self.endpoint}{path}"

    def _headers(self) -> Dict[str, str]:
        return {"AUTHORIZATION": self.token}

    def _multipart(self, payload: Dict[str, Union[str, bytes]], files: Sequence[str] = ()):
        """Encode a payload as multipart/form-data with the fixed boundary."""
        fields = []
        for name, value in payload.items():
            if name in files:
                field = RequestField(name=name, data=value, filename=f"{name}.xml")
                field.make_multipart(content_type="application/octet-stream")
                field.headers["Content-Transfer-Encoding"] = "binary"
            else:
                field = RequestField(name=name, data=value)
                field.make_multipart()
            fields.append(field)
        return encode_multipart_formdata(fields, boundary=MULTIPART_BOUNDARY)

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Optional[etree._Element]:
        return self._request("GET", path, params=params)

    def _delete(self, path: str, params: Optional[Dict[str, str]] = None) -> Optional[etree._Element]:
        return self._request("DELETE", path, params=params)

    def _post(
        self,
        path: str,
        payload: Dict[str, Union[str, bytes]],
        files: Sequence[str] = (),
    ) -> Optional[etree._Element]:
        body, content_type = self._multipart(payload, files)
        return self._request("POST", path, data=body, content_type=content_type)

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> Optional[etree._Element]:
        url = self._url(path)
        headers = self._headers()
        if content_type:
            headers["Content-Type"] = content_type

        logger.debug("%s %s params=%s", method, url, params)
        response = self.session.request(
            method,
            url,
            params=params,
            data=data,
            headers=headers,
            timeout=self.timeout,
        )
        return self._handle_response(method, path, response)

    def _handle_response(
        self,
        method: str,
        path: str,
        response: requests.Response,
    ) -> Optional[etree._Element]:
        """Parse a successful body, or raise ServiceError for anything else."""
        if 200 <= response.status_code < 400:
            if not response.content.strip():
                return None
            return self.parser.parse_string(response.content)

        logger.warning("%s %s failed with HTTP %s", method, path, response.status_code)
        try:
            doc = self.parser.parse_string(response.content)
        except (etree.XMLSyntaxError, ValueError):
            raise MalformedResponseError(
                response.content, method=method, path=path, status_code=response.status_code
            )

        message = self.parser.error_message(doc)
        if message is None:
            raise MalformedResponseError(
                response.content, method=method, path=path, status_code=response.status_code
            )
        raise ServiceError(message, method=method, path=path, status_code=response.status_code)
