# gintonic

Building blocks for HTTP services:

- **Paths**: `gintonic.path.clean_path` returns the canonical form of a URL path.
- **Rendering**: `gintonic.render` writes response bodies. It supports JSON in several forms (compact, indented, secure, JSONP, ASCII-only and pure), XML, YAML, TOML, MessagePack, protocol buffers, Jinja2 HTML templates, plain text, raw bytes, streams and redirects.
- **Response writing**: `gintonic.response_writer.ResponseWriter` keeps track of the status code and of the number of body bytes written.
- **Run mode**: `gintonic.mode` holds a global mode, which is `debug`, `release` or `test`.
- **Logging**: `gintonic.logger` formats access-log lines, with ANSI colours if you want them.
- **Recovery**: `gintonic.recovery` produces readable descriptions of the call stack.
- **Utilities**: `gintonic.utils` parses Accept headers, joins URL paths, resolves listen addresses and provides the `H` mapping, which can be turned into XML.

## Installation

```
pip install gintonic
```

To install the test dependencies too:

```
pip install "gintonic[test]"
```

## Paths

`clean_path` handles path segments as follows:

- Repeated slashes are collapsed into one.
- `.` segments are dropped.
- Each `..` segment removes the segment before it. The path never goes above the root.
- A trailing slash is kept.

```python
from gintonic.path import clean_path

clean_path("/abc/def/../ghi//jkl/.")   # "/abc/ghi/jkl/"
clean_path("")                         # "/"
```

## Rendering

A renderer writes to any object that has these three members:

- a mutable `headers` mapping
- `write(data: bytes) -> int`
- `write_header(code: int)`

```python
class Recorder:
    def __init__(self):
        self.headers = {}
        self.code = 200
        self.body = bytearray()

    def write(self, data):
        self.body += data
        return len(data)

    def write_header(self, code):
        self.code = code
```

Each renderer has two methods:

- `write_content_type(writer)` sets `Content-Type`, but only if the header is not already present.
- `render(writer)` writes the content type and then the body.

```python
import io
from gintonic.render.base import Data, String, Reader, Redirect
from gintonic.render.jsonrender import JSON, SecureJSON, JsonpJSON, AsciiJSON, PureJSON
from gintonic.render.formats import XML, YAML, TOML, MsgPack, ProtoBuf

w = Recorder()
JSON({"foo": "bar", "html": "<b>"}).render(w)
# body: {"foo":"bar","html":"\u003cb\u003e"}

SecureJSON("while(1);", [1, 2]).render(Recorder())   # while(1);[1,2]
JsonpJSON("x", {"foo": "bar"}).render(Recorder())     # x({"foo":"bar"});
String("hola %s %d", ["manu", 2]).render(Recorder())  # hola manu 2
Data("image/png", b"raw bytes").render(Recorder())
Reader(io.BytesIO(b"stream"), content_type="text/plain", content_length=6).render(Recorder())
Redirect(301, "/new/location", request_path="/old").render(Recorder())
```

JSON output sorts its keys. Plain `JSON` escapes `<`, `>` and `&`. `PureJSON` leaves those characters as they are and ends the output with a newline. `AsciiJSON` writes every non-ASCII character as a `\uXXXX` escape.

Some renderers expect particular input:

- `XML` takes an `xml.etree.ElementTree.Element`, or any object with a `marshal_xml()` method, such as `gintonic.utils.H`.
- `TOML` needs a mapping.
- `ProtoBuf` needs a message that has `SerializeToString()`.

`Redirect` raises `ValueError` for any status code outside 300–308, except 201.

HTML templates use Jinja2:

```python
import jinja2
from gintonic.render.html import HTMLProduction, HTMLDebug, Delims

template = jinja2.Template("Hello {{ name }}")
HTMLProduction(template).instance("", {"name": "world"}).render(Recorder())

debug = HTMLDebug(glob="templates/*.tmpl", delims=Delims("{[{", "}]}"))
debug.instance("hello.tmpl", {"name": "world"}).render(Recorder())
```

`HTMLDebug` reads its templates from disk again each time `instance` is called.

## Response writer

```python
from gintonic.response_writer import ResponseWriter

rw = ResponseWriter(Recorder())
rw.write_header(201)
rw.written          # False
rw.write(b"hola")   # 4; status 201 is sent first
rw.size             # 4
```

Once the header has been written, the status can no longer change. A later `write_header` call logs a warning and does nothing.

## Mode and logging

```python
from datetime import datetime, timedelta
from gintonic.mode import set_mode, mode, RELEASE_MODE
from gintonic.logger import LogFormatterParams, default_log_formatter, force_console_color

set_mode(RELEASE_MODE)
mode()   # "release"

params = LogFormatterParams(
    timestamp=datetime(2018, 12, 7, 9, 11, 42),
    status_code=200,
    latency=timedelta(seconds=5),
    client_ip="20.20.20.20",
    method="GET",
    path="/",
)
default_log_formatter(params)
# '[GIN] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'
```

At import time the mode is read from the `GIN_MODE` environment variable. If that variable is empty, the mode is `test` while pytest is running and `debug` otherwise. `set_mode` raises `ValueError` for any unknown value.

To set the console colour mode, call `disable_console_color()`, `force_console_color()` or `set_console_color_mode(ColorMode.AUTO)`.

## What the package does not do

The package has no route tree and does no request matching. It has no case-insensitive route lookup, no router engine and no request context. It has no HTTP server and no command-line program. The logging and recovery helpers format text for you, but they are not wired into any middleware chain.