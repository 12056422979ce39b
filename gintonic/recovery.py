"""Helpers that describe the call stack for recovered failures."""

from __future__ import annotations

import inspect
import linecache
from datetime import datetime
from types import FrameType
from typing import Sequence

DUNNO = "???"


def source(lines: Sequence[str], n: int) -> str:
    """Return the whitespace-trimmed line ``n`` (1-based), or '???'."""
    n -= 1
    if n < 0 or n >= len(lines):
        return DUNNO
    return lines[n].strip()


def function_name(name: str) -> str:
    """Strip the package path from a qualified function name.

    ``runtime/debug.*T·ptrmethod`` becomes ``*T.ptrmethod``.
    """
    if not name:
        return DUNNO
    last_slash = name.rfind("/")
    if last_slash >= 0:
        name = name[last_slash + 1:]
    period = name.find(".")
    if period >= 0:
        name = name[period + 1:]
    return name.replace("·", ".")


def _qualified_name(frame: FrameType) -> str:
    code = frame.f_code
    module = inspect.getmodulename(code.co_filename) or ""
    qualname = getattr(code, "co_qualname", code.co_name)
    return module + "." + qualname


def stack(skip: int) -> str:
    """Describe the call stack, innermost first, skipping ``skip`` frames.

    Frame 0 is this function itself. Each frame gives ``file:line`` and, when
    the source can be read, a tab-indented ``function: source line``.
    """
    out: list[str] = []
    frame = inspect.currentframe()
    for _ in range(skip):
        if frame is None:
            break
        frame = frame.f_back
    while frame is not None:
        filename = frame.f_code.co_filename
        lineno = frame.f_lineno
        out.append(f"{filename}:{lineno}\n")
        lines = linecache.getlines(filename)
        if lines:
            out.append(f"\t{function_name(_qualified_name(frame))}: {source(lines, lineno)}\n")
        frame = frame.f_back
    return "".join(out)


def time_format(t: datetime) -> str:
    """Format ``t`` the way log lines show time."""
    return t.strftime("%Y/%m/%d - %H:%M:%S")