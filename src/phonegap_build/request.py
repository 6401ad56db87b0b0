"""Turn logical API operations into transport-ready requests."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

from .auth import Credentials
from .config import DEFAULT_ENDPOINT, METHODS, USER_AGENT
from .exceptions import (
    BuildError,
    FileNotFoundError,
    MissingCredentialsError,
    UnsupportedMethodError,
)
from .params import FileRef, split_params

# The service takes all structured parameters as one JSON blob in this field
DATA_FIELD = "data"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


@dataclass(frozen=True)
class Operation:
    """A logical API call: where, how, and with which parameters."""

    path: str | Sequence[Any]
    method: str = "GET"
    params: Mapping[str, Any] = field(default_factory=dict)

    @property
    def uri(self) -> str:
        if isinstance(self.path, str):
            return self.path.lstrip("/")
        return "/".join(quote(str(segment), safe="") for segment in self.path).lstrip("/")


@dataclass(frozen=True, slots=True)
class FilePart:
    """File content ready to be sent as a multipart part."""

    filename: str
    content: bytes
    content_type: str

    def as_httpx(self) -> tuple[str, bytes, str]:
        return self.filename, self.content, self.content_type


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully resolved request.

    Attributes:
        url: Endpoint, path and, in token mode, the ``auth_token`` query.
        method: Uppercase HTTP verb.
        headers: Request headers.
        auth: ``(username, password)`` for HTTP Basic auth, else None.
        files: File parts keyed by parameter name.
        fields: Empty, or ``{"data": <json>}`` holding all other parameters.
    """

    url: str
    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    auth: tuple[str, str] | None = None
    files: Mapping[str, FilePart] = field(default_factory=dict)
    fields: Mapping[str, str] = field(default_factory=dict)

    @property
    def has_body(self) -> bool:
        return bool(self.files or self.fields)


def encode_fields(fields: Mapping[str, Any]) -> str:
    """Serialize non-file parameters the way the service expects them."""
    try:
        return json.dumps(fields, separators=(",", ":"))
    except TypeError as e:
        raise BuildError(f"Parameters are not JSON serializable: {e}") from e


def read_file(name: str, ref: FileRef) -> FilePart:
    """Load a file parameter's content.

    Raises:
        FileNotFoundError: If the path is not a readable file.
    """
    path = ref.resolved_path
    try:
        with open(path, "rb") as fh:
            content = fh.read()
    except OSError as e:
        raise FileNotFoundError(name, ref.path) from e
    return FilePart(
        filename=ref.upload_name,
        content=content,
        content_type=ref.upload_content_type,
    )


class RequestBuilder:
    """Build ``RequestDescriptor`` objects for one service endpoint."""

    def __init__(
        self, endpoint: str = DEFAULT_ENDPOINT, user_agent: str = USER_AGENT
    ) -> None:
        self.endpoint = endpoint.rstrip("/") + "/"
        self.user_agent = user_agent

    def build(self, operation: Operation, credentials: Credentials) -> RequestDescriptor:
        """Resolve an operation into a request.

        Args:
            operation: The logical call.
            credentials: Authentication to apply.

        Returns:
            The transport-ready request.

        Raises:
            UnsupportedMethodError: If the verb is not supported.
            MissingCredentialsError: If the credentials cannot authenticate.
            FileNotFoundError: If a file parameter cannot be read.
            BuildError: If the remaining parameters cannot be JSON encoded.
        """
        method = operation.method.upper()
        if method not in METHODS:
            raise UnsupportedMethodError(operation.method)

        if not credentials.is_complete:
            raise MissingCredentialsError()

        url = self.endpoint + operation.uri
        auth: tuple[str, str] | None = None
        if credentials.token:
            url += "?" + urlencode({"auth_token": credentials.token})
        else:
            auth = (credentials.username, credentials.password)

        file_refs, plain = split_params(operation.params)
        files = {name: read_file(name, ref) for name, ref in file_refs.items()}
        fields = {DATA_FIELD: encode_fields(plain)} if plain else {}

        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        if files or fields:
            headers["Content-Type"] = MULTIPART_CONTENT_TYPE

        return RequestDescriptor(
            url=url,
            method=method,
            headers=headers,
            auth=auth,
            files=files,
            fields=fields,
        )
