"""Response body renderers for JSON, XML, YAML, TOML, MessagePack, protobuf, HTML, text, data, streams and redirects."""