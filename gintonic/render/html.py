"""HTML template renderers backed by Jinja2."""

from __future__ import annotations

import glob as globmod
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence

import jinja2

from .base import HTML_CONTENT_TYPE, Render, Writer, write_content_type


@dataclass
class Delims:
    """Left and right variable delimiters; empty means ``{{`` and ``}}``."""

    left: str = ""
    right: str = ""


def _context(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}


@dataclass
class HTML(Render):
    """A template (or template environment), a template name and its data.

    Mapping data becomes the template context; any other value is exposed
    as ``data``. An empty name executes ``template`` itself.
    """

    template: jinja2.Template | jinja2.Environment
    name: str = ""
    data: Any = None

    def _select(self) -> jinja2.Template:
        if isinstance(self.template, jinja2.Environment):
            if not self.name:
                raise ValueError("template: no root template to execute")
            return self.template.get_template(self.name)
        if not self.name or self.template.name == self.name:
            return self.template
        return self.template.environment.get_template(self.name)

    def render(self, writer: Writer) -> None:
        self.write_content_type(writer)
        output = self._select().render(_context(self.data))
        writer.write(output.encode("utf-8"))

    def write_content_type(self, writer: Writer) -> None:
        write_content_type(writer, HTML_CONTENT_TYPE)


@dataclass
class HTMLProduction:
    """Renders from templates loaded once."""

    template: jinja2.Template | jinja2.Environment
    delims: Delims = field(default_factory=Delims)

    def instance(self, name: str, data: Any) -> HTML:
        """Return an HTML renderer for template ``name`` with ``data``."""
        return HTML(template=self.template, name=name, data=data)


@dataclass
class HTMLDebug:
    """Reloads its templates from ``files`` or ``glob`` on every instance."""

    files: Sequence[str] = ()
    glob: str = ""
    delims: Delims = field(default_factory=Delims)
    func_map: Mapping[str, Callable[..., Any]] | None = None

    def _paths(self) -> list[str]:
        if self.files:
            return list(self.files)
        if self.glob:
            paths = sorted(globmod.glob(self.glob))
            if not paths:
                raise ValueError(f"html/template: pattern matches no files: {self.glob!r}")
            return paths
        raise ValueError("the HTML debug render was created without files or glob pattern")

    def _load_template(self) -> jinja2.Environment:
        sources = {
            Path(path).name: Path(path).read_text(encoding="utf-8")
            for path in self._paths()
        }
        env = jinja2.Environment(
            loader=jinja2.DictLoader(sources),
            autoescape=True,
            variable_start_string=self.delims.left or "{{",
            variable_end_string=self.delims.right or "}}",
        )
        env.globals.update(self.func_map or {})
        return env

    def instance(self, name: str, data: Any) -> HTML:
        """Return an HTML renderer for template ``name`` with freshly loaded templates."""
        return HTML(template=self._load_template(), name=name, data=data)