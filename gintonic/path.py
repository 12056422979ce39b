"""Canonical URL path cleaning."""

from __future__ import annotations


def clean_path(p: str) -> str:
    """Return the canonical URL path for ``p``.

    Multiple slashes collapse into one, ``.`` elements are dropped, ``..``
    elements remove the element before them (never climbing above the root),
    and a trailing slash is kept when the input had one or ended in ``.``.
    An empty result becomes ``"/"``.
    """
    if not p:
        return "/"

    segments = p.split("/")
    trailing = len(p) > 1 and p.endswith("/")
    if segments[-1] == ".":
        trailing = True

    stack: list[str] = []
    for segment in segments:
        if segment in ("", "."):
            continue
        if segment == "..":
            if stack:
                stack.pop()
            continue
        stack.append(segment)

    if not stack:
        return "/"
    result = "/" + "/".join(stack)
    if trailing:
        result += "/"
    return result