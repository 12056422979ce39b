"""JSON family renderers."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any

from .base import Render, Writer, write_content_type

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
JSONP_CONTENT_TYPE = "application/javascript; charset=utf-8"
JSON_ASCII_CONTENT_TYPE = "application/json"

_LINE_ESCAPES = {"\u2028": "\\u2028", "\u2029": "\\u2029"}
_HTML_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}
_ESCAPE_ALL = str.maketrans({**_LINE_ESCAPES, **_HTML_ESCAPES})
_ESCAPE_LINES = str.maketrans(_LINE_ESCAPES)

_JS_SPECIAL = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "=": "\\u003D",
}


def _default(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"json: unsupported type: {type(obj).__name__}")


def _marshal(obj: Any, *, indent: int | None = None, escape_html: bool = True) -> str:
    text = json.dumps(
        obj,
        ensure_ascii=False,
        sort_keys=True,
        allow_nan=False,
        default=_default,
        indent=indent,
        separators=(",", ": ") if indent is not None else (",", ":"),
    )
    return text.translate(_ESCAPE_ALL if escape_html else _ESCAPE_LINES)


def js_escape_string(s: str) -> str:
    """Escape ``s`` so it is safe inside a JavaScript string or identifier."""
    out = []
    for ch in s:
        if ch in _JS_SPECIAL:
            out.append(_JS_SPECIAL[ch])
        elif ch < " ":
            out.append(f"\\u{ord(ch):04X}")
        elif ord(ch) < 0x80 or ch.isprintable():
            out.append(ch)
        else:
            out.append(f"\\u{ord(ch):04X}")
    return "".join(out)


def write_json(writer: Writer, obj: Any) -> None:
    """Write the JSON content type and ``obj`` encoded as compact JSON."""
    write_content_type(writer, JSON_CONTENT_TYPE)
    writer.write(_marshal(obj).encode("utf-8"))


@dataclass
class JSON(Render):
    """Compact JSON with HTML characters escaped."""

    data: Any

    def render(self, writer: Writer) -> None:
        write_json(writer, self.data)

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)


@dataclass
class IndentedJSON(Render):
    """JSON indented by four spaces."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        writer.write(_marshal(self.data, indent=4).encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)


@dataclass
class SecureJSON(Render):
    """JSON whose top-level arrays are preceded by ``prefix``."""

    prefix: str
    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        text = _marshal(self.data)
        if text.startswith("[") and text.endswith("]"):
            text = self.prefix + text
        writer.write(text.encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)


@dataclass
class JsonpJSON(Render):
    """JSON wrapped in a call to ``callback``; plain JSON if no callback."""

    callback: str
    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        text = _marshal(self.data)
        if self.callback:
            text = f"{js_escape_string(self.callback)}({text});"
        writer.write(text.encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, JSONP_CONTENT_TYPE)


@dataclass
class AsciiJSON(Render):
    """JSON with every non-ASCII character written as a \\u escape."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        text = "".join(
            ch if ord(ch) < 128 else f"\\u{ord(ch):04x}" for ch in _marshal(self.data)
        )
        writer.write(text.encode("ascii"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, JSON_ASCII_CONTENT_TYPE)


@dataclass
class PureJSON(Render):
    """JSON with HTML characters left as they are, followed by a newline."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        writer.write((_marshal(self.data, escape_html=False) + "\n").encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, JSON_CONTENT_TYPE)