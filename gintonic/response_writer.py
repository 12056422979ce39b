"""Response writer that tracks the status code and the size of the body."""

from __future__ import annotations

import logging
from typing import Any, MutableMapping

NO_WRITTEN = -1
DEFAULT_STATUS = 200

_log = logging.getLogger(__name__)


class ResponseWriter:
    """Wraps an underlying writer and records the status and bytes written.

    The status is only sent to the underlying writer when the header is
    flushed, so it can be changed until the body is first written.
    ``size`` is -1 until the header has been written.
    """

    def __init__(self, writer: Any = None) -> None:
        self.reset(writer)

    def reset(self, writer: Any) -> None:
        """Start over on ``writer`` with no header written and status 200."""
        self.writer = writer
        self.size = NO_WRITTEN
        self.status = DEFAULT_STATUS

    @property
    def headers(self) -> MutableMapping[str, str]:
        """The response headers of the underlying writer."""
        return self.writer.headers

    @property
    def written(self) -> bool:
        """True once the header has been written."""
        return self.size != NO_WRITTEN

    def write_header(self, code: int) -> None:
        """Record ``code`` as the status; ignored once the header is written."""
        if code > 0 and self.status != code:
            if self.written:
                _log.warning(
                    "[WARNING] Headers were already written. "
                    "Wanted to override status code %d with %d",
                    self.status,
                    code,
                )
                return
            self.status = code

    def write_header_now(self) -> None:
        """Send the status to the underlying writer if not done yet."""
        if not self.written:
            self.size = 0
            self.writer.write_header(self.status)

    def write(self, data: bytes) -> int:
        """Write ``data`` to the body and return the number of bytes written."""
        self.write_header_now()
        n = self.writer.write(data)
        self.size += n
        return n

    def write_string(self, s: str) -> int:
        """Write ``s`` as UTF-8 and return the number of bytes written."""
        return self.write(s.encode("utf-8"))

    def hijack(self) -> Any:
        """Hand the connection over to the caller via the underlying writer."""
        if self.size < 0:
            self.size = 0
        hijack = getattr(self.writer, "hijack", None)
        if hijack is None:
            raise TypeError("the underlying writer does not support hijacking")
        return hijack()

    def flush(self) -> None:
        """Write the header if needed and flush the underlying writer."""
        self.write_header_now()
        flush = getattr(self.writer, "flush", None)
        if flush is None:
            raise TypeError("the underlying writer does not support flushing")
        flush()