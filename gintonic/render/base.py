"""Renderer interface, the writer protocol and the simple renderers."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, BinaryIO, Mapping, MutableMapping, Protocol, Sequence
from urllib.parse import urlsplit

from ..path import clean_path

PLAIN_CONTENT_TYPE = "text/plain; charset=utf-8"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

_HTML_ESCAPE = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&#34;", "'": "&#39;"}
)


class Writer(Protocol):
    """What a renderer writes to: response headers, a status and a body."""

    headers: MutableMapping[str, str]

    def write(self, data: bytes) -> int: ...

    def write_header(self, code: int) -> None: ...


def write_content_type(writer: Writer, value: str) -> None:
    """Set the Content-Type header unless the response already has one."""
    if "Content-Type" not in writer.headers:
        writer.headers["Content-Type"] = value


def write_string(writer: Writer, format: str, data: Sequence[Any]) -> None:
    """Write ``format`` as plain text, %-formatted with ``data`` when given."""
    write_content_type(writer, PLAIN_CONTENT_TYPE)
    text = format % tuple(data) if data else format
    writer.write(text.encode("utf-8"))


def _canonical_header_key(key: str) -> str:
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


class Render(ABC):
    """A response body that knows how to write itself and its content type."""

    @abstractmethod
    def render(self, writer: Writer) -> None:
        """Write the content type and the body to ``writer``."""

    @abstractmethod
    def write_content_type(self, writer: Writer) -> None:
        """Write only the content type header to ``writer``."""


@dataclass
class Data(Render):
    """Raw bytes sent with a custom content type."""

    content_type: str
    data: bytes = b""

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        writer.write(bytes(self.data))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, self.content_type)


@dataclass
class String(Render):
    """Plain text built from a %-format and its arguments."""

    format: str
    data: Sequence[Any] = ()

    def render(self, writer: Writer) -> None:
        write_string(writer, self.format, self.data)

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, PLAIN_CONTENT_TYPE)


def _resolve_location(location: str, request_path: str) -> str:
    parts = urlsplit(location)
    if parts.scheme or parts.netloc:
        return location
    old_path = request_path or "/"
    if not location.startswith("/"):
        location = old_path[: old_path.rfind("/") + 1] + location
    url, sep, query = location.partition("?")
    trailing = url.endswith("/")
    cleaned = clean_path(url)
    if not trailing and cleaned != "/" and cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    return cleaned + sep + query


def _hex_escape_non_ascii(url: str) -> str:
    return "".join(
        f"%{byte:02x}" if byte >= 0x80 else chr(byte) for byte in url.encode("utf-8")
    )


@dataclass
class Redirect(Render):
    """A redirect to ``location`` answering a request of ``method`` on ``request_path``."""

    code: int
    location: str
    method: str = "GET"
    request_path: str = "/"

    def render(self, writer: Writer) -> None:
        if (self.code < 300 or self.code > 308) and self.code != 201:
            raise ValueError(f"Cannot redirect with status code {self.code}")

        url = _resolve_location(self.location, self.request_path)
        had_content_type = "Content-Type" in writer.headers
        writer.headers["Location"] = _hex_escape_non_ascii(url)
        if not had_content_type and self.method in ("GET", "HEAD"):
            writer.headers["Content-Type"] = HTML_CONTENT_TYPE
        writer.write_header(self.code)

        if not had_content_type and self.method == "GET":
            phrase = HTTPStatus(self.code).phrase
            body = f'<a href="{url.translate(_HTML_ESCAPE)}">{phrase}</a>.\n\n'
            writer.write(body.encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        """A redirect sets no content type of its own."""


@dataclass
class Reader(Render):
    """A body streamed from a binary file-like object, with extra headers."""

    reader: BinaryIO
    content_type: str = ""
    content_length: int = -1
    headers: Mapping[str, str] | None = None

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        headers = dict(self.headers or {})
        if self.content_length >= 0:
            headers["Content-Length"] = str(self.content_length)
        for key, value in headers.items():
            key = _canonical_header_key(key)
            if not writer.headers.get(key):
                writer.headers[key] = value
        shutil.copyfileobj(self.reader, writer)

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, self.content_type)