"""XML, YAML, TOML, MessagePack and protocol buffer renderers."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import msgpack
import tomli_w
import yaml

from .base import Render, Writer, write_content_type

XML_CONTENT_TYPE = "application/xml; charset=utf-8"
YAML_CONTENT_TYPE = "application/x-yaml; charset=utf-8"
TOML_CONTENT_TYPE = "application/toml; charset=utf-8"
MSGPACK_CONTENT_TYPE = "application/msgpack; charset=utf-8"
PROTOBUF_CONTENT_TYPE = "application/x-protobuf"


def _to_xml(data: Any) -> str:
    marshal = getattr(data, "marshal_xml", None)
    if marshal is not None:
        data = marshal()
        if isinstance(data, str):
            return data
    if isinstance(data, ET.Element):
        return ET.tostring(data, encoding="unicode")
    raise TypeError(f"xml: unsupported type: {type(data).__name__}")


@dataclass
class XML(Render):
    """An XML element, or an object whose ``marshal_xml()`` yields one."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        writer.write(_to_xml(self.data).encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, XML_CONTENT_TYPE)


@dataclass
class YAML(Render):
    """Data dumped as a YAML document."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        text = yaml.safe_dump(
            self.data,
            allow_unicode=True,
            sort_keys=True,
            default_flow_style=False,
            indent=4,
        )
        if text.endswith("\n...\n"):
            text = text[:-4]
        writer.write(text.encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, YAML_CONTENT_TYPE)


@dataclass
class TOML(Render):
    """A mapping dumped as a TOML document."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        if not isinstance(self.data, Mapping):
            raise TypeError(
                f"toml: cannot marshal {type(self.data).__name__} as a document"
            )
        writer.write(tomli_w.dumps(self.data).encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, TOML_CONTENT_TYPE)


def write_msgpack(writer: Writer, obj: Any) -> None:
    """Write the MessagePack content type and ``obj`` packed as MessagePack."""
    write_content_type(writer, MSGPACK_CONTENT_TYPE)
    writer.write(msgpack.packb(obj, use_bin_type=True))


@dataclass
class MsgPack(Render):
    """Data packed as MessagePack."""

    data: Any

    def render(self, writer: Writer) -> None:
        write_msgpack(writer, self.data)

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, MSGPACK_CONTENT_TYPE)


@dataclass
class ProtoBuf(Render):
    """A protocol buffer message, serialised with its ``SerializeToString``."""

    data: Any

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        serialize = getattr(self.data, "SerializeToString", None)
        if serialize is None:
            raise TypeError(
                f"protobuf: {type(self.data).__name__} is not a protocol buffer message"
            )
        writer.write(serialize())

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, PROTOBUF_CONTENT_TYPE)