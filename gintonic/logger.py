"""Access log formatting and console colour settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any


class ColorMode(Enum):
    AUTO = 0
    DISABLE = 1
    FORCE = 2


GREEN = "\033[97;42m"
WHITE = "\033[90;47m"
YELLOW = "\033[90;43m"
RED = "\033[97;41m"
BLUE = "\033[97;44m"
MAGENTA = "\033[97;45m"
CYAN = "\033[97;46m"
RESET = "\033[0m"

_METHOD_COLORS = {
    "GET": BLUE,
    "POST": CYAN,
    "PUT": YELLOW,
    "DELETE": RED,
    "PATCH": GREEN,
    "HEAD": MAGENTA,
    "OPTIONS": WHITE,
}

_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


@dataclass
class _ConsoleSettings:
    color_mode: ColorMode = ColorMode.AUTO


_settings = _ConsoleSettings()


def console_color_mode() -> ColorMode:
    """Return the current console colour mode."""
    return _settings.color_mode


def set_console_color_mode(mode: ColorMode) -> None:
    """Set the console colour mode; raises ValueError for an unknown mode."""
    _settings.color_mode = ColorMode(mode)


def disable_console_color() -> None:
    """Never colour log output."""
    set_console_color_mode(ColorMode.DISABLE)


def force_console_color() -> None:
    """Always colour log output."""
    set_console_color_mode(ColorMode.FORCE)


@dataclass
class LogFormatterParams:
    """Everything a log formatter is handed about one request."""

    timestamp: datetime = field(default_factory=datetime.now)
    status_code: int = 0
    latency: timedelta = timedelta(0)
    client_ip: str = ""
    method: str = ""
    path: str = ""
    error_message: str = ""
    is_term: bool = False
    body_size: int = 0
    keys: dict[str, Any] | None = None
    request: Any = None

    def status_code_color(self) -> str:
        """ANSI colour for the status code."""
        code = self.status_code
        if 200 <= code < 300:
            return GREEN
        if 300 <= code < 400:
            return WHITE
        if 400 <= code < 500:
            return YELLOW
        return RED

    def method_color(self) -> str:
        """ANSI colour for the request method."""
        return _METHOD_COLORS.get(self.method, RESET)

    def reset_color(self) -> str:
        """ANSI sequence that resets all attributes."""
        return RESET

    def is_output_color(self) -> bool:
        """Whether colours should be written to the log."""
        mode = _settings.color_mode
        return mode is ColorMode.FORCE or (mode is ColorMode.AUTO and self.is_term)


def _fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(latency: timedelta) -> str:
    """Format a duration compactly, e.g. '5s', '1.5ms' or '2743h29m3s'."""
    ns = (latency.days * 86400 + latency.seconds) * 1_000_000_000 + latency.microseconds * 1000
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < 1_000:
        body = f"{u}ns"
    elif u < 1_000_000:
        body = _fraction(u, 3) + "µs"
    elif u < 1_000_000_000:
        body = _fraction(u, 6) + "ms"
    else:
        hours, rem = divmod(u, 3600 * 10**9)
        minutes, rem = divmod(rem, 60 * 10**9)
        seconds = _fraction(rem, 9) + "s"
        if hours:
            body = f"{hours}h{minutes}m{seconds}"
        elif minutes:
            body = f"{minutes}m{seconds}"
        else:
            body = seconds
    return sign + body


def _quote(s: str) -> str:
    out = []
    for ch in s:
        if ch in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) <= 0xFFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    return '"' + "".join(out) + '"'


def default_log_formatter(params: LogFormatterParams) -> str:
    """Format one access log line."""
    status_color = method_color = reset_color = ""
    if params.is_output_color():
        status_color = params.status_code_color()
        method_color = params.method_color()
        reset_color = params.reset_color()

    latency = params.latency
    if latency > timedelta(minutes=1):
        latency = timedelta(days=latency.days, seconds=latency.seconds)

    timestamp = params.timestamp.strftime("%Y/%m/%d - %H:%M:%S")
    return (
        f"[GIN] {timestamp} |{status_color} {params.status_code:3d} {reset_color}|"
        f" {format_duration(latency):>13} | {params.client_ip:>15} |"
        f"{method_color} {params.method:<7} {reset_color} {_quote(params.path)}\n"
        f"{params.error_message}"
    )