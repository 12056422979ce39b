"""Small helpers shared across the framework."""

from __future__ import annotations

import logging
import os
import posixpath
import xml.etree.ElementTree as ET
from typing import Any, Sequence

_log = logging.getLogger(__name__)


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def _append_xml(parent: ET.Element, key: str, value: Any) -> None:
    if not key:
        raise ValueError("xml: start tag with no name")
    if value is None:
        return
    if isinstance(value, H):
        parent.append(value.marshal_xml())
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _append_xml(parent, key, item)
        return
    ET.SubElement(parent, key).text = _xml_text(value)


class H(dict):
    """A plain string-keyed mapping used for ad-hoc response bodies."""

    def marshal_xml(self) -> ET.Element:
        """Return a ``<map>`` element with one child element per key."""
        root = ET.Element("map")
        for key, value in self.items():
            _append_xml(root, key, value)
        return root


def filter_flags(content: str) -> str:
    """Return ``content`` up to the first space or semicolon."""
    for i, ch in enumerate(content):
        if ch in " ;":
            return content[:i]
    return content


def choose_data(custom: Any, wildcard: Any) -> Any:
    """Return ``custom`` if set, otherwise ``wildcard``; one of them must be set."""
    if custom is not None:
        return custom
    if wildcard is not None:
        return wildcard
    raise ValueError("negotiation config is invalid")


def parse_accept(accept_header: str) -> list[str]:
    """Split an Accept header into media types, dropping parameters."""
    out = []
    for part in accept_header.split(","):
        i = part.find(";")
        if i > 0:
            part = part[:i]
        part = part.strip()
        if part:
            out.append(part)
    return out


def last_char(s: str) -> str:
    """Return the last character of ``s``, which must not be empty."""
    if not s:
        raise ValueError("The length of the string can't be 0")
    return s[-1]


def name_of_function(f: Any) -> str:
    """Return the fully qualified name of a callable."""
    module = getattr(f, "__module__", None) or ""
    qualname = getattr(f, "__qualname__", None) or type(f).__qualname__
    return f"{module}.{qualname}" if module else qualname


def _join(*elems: str) -> str:
    parts = [e for e in elems if e]
    if not parts:
        return ""
    cleaned = posixpath.normpath("/".join(parts))
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join_paths(absolute_path: str, relative_path: str) -> str:
    """Join two URL paths, keeping a trailing slash of ``relative_path``."""
    if relative_path == "":
        return absolute_path
    final_path = _join(absolute_path, relative_path)
    if last_char(relative_path) == "/" and last_char(final_path) != "/":
        return final_path + "/"
    return final_path


def resolve_address(addr: Sequence[str]) -> str:
    """Return the listen address: the one given, $PORT, or ':8080'."""
    if len(addr) == 0:
        port = os.environ.get("PORT", "")
        if port:
            _log.debug('Environment variable PORT="%s"', port)
            return ":" + port
        _log.debug("Environment variable PORT is undefined. Using port :8080 by default")
        return ":8080"
    if len(addr) == 1:
        return addr[0]
    raise ValueError("too many parameters")


def is_ascii(s: str) -> bool:
    """True if every character of ``s`` is ASCII."""
    return s.isascii()