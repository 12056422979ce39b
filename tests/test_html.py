import jinja2
import pytest

from gintonic.render.html import HTML, Delims, HTMLDebug, HTMLProduction


class _Recorder:
    def __init__(self):
        self.headers = {}
        self.body = bytearray()
        self.status = 200

    def write(self, data):
        self.body += data
        return len(data)

    def write_header(self, code):
        self.status = code

    @property
    def text(self):
        return self.body.decode("utf-8")


@pytest.fixture
def template_dir(tmp_path):
    (tmp_path / "hello.tmpl").write_text("<h1>Hello {[{ name }]}</h1>", encoding="utf-8")
    (tmp_path / "other.html").write_text("other", encoding="utf-8")
    return tmp_path


def test_render_html_template():
    env = jinja2.Environment(
        loader=jinja2.DictLoader({"t": "Hello {{ name }}"}), autoescape=True
    )
    instance = HTMLProduction(template=env).instance("t", {"name": "alexandernyquist"})
    w = _Recorder()
    instance.render(w)
    assert w.text == "Hello alexandernyquist"
    assert w.headers["Content-Type"] == "text/html; charset=utf-8"


def test_render_html_template_empty_name():
    template = jinja2.Template("Hello {{ name }}")
    instance = HTMLProduction(template=template).instance("", {"name": "alexandernyquist"})
    w = _Recorder()
    instance.render(w)
    assert w.text == "Hello alexandernyquist"
    assert w.headers["Content-Type"] == "text/html; charset=utf-8"


def test_render_html_escapes_data():
    env = jinja2.Environment(
        loader=jinja2.DictLoader({"t": "{{ name }}"}), autoescape=True
    )
    w = _Recorder()
    HTML(template=env, name="t", data={"name": "<b>"}).render(w)
    assert w.text == "&lt;b&gt;"


def test_render_html_non_mapping_data():
    w = _Recorder()
    HTML(template=jinja2.Template("[{{ data }}]"), data=42).render(w)
    assert w.text == "[42]"


def test_render_html_environment_without_name():
    env = jinja2.Environment(loader=jinja2.DictLoader({"t": "x"}))
    with pytest.raises(ValueError):
        HTML(template=env, name="").render(_Recorder())


def test_render_html_debug_files(template_dir):
    html_render = HTMLDebug(
        files=[str(template_dir / "hello.tmpl")],
        delims=Delims(left="{[{", right="}]}"),
    )
    w = _Recorder()
    html_render.instance("hello.tmpl", {"name": "thinkerou"}).render(w)
    assert w.text == "<h1>Hello thinkerou</h1>"
    assert w.headers["Content-Type"] == "text/html; charset=utf-8"


def test_render_html_debug_glob(template_dir):
    html_render = HTMLDebug(
        glob=str(template_dir / "hello*"),
        delims=Delims(left="{[{", right="}]}"),
    )
    w = _Recorder()
    html_render.instance("hello.tmpl", {"name": "thinkerou"}).render(w)
    assert w.text == "<h1>Hello thinkerou</h1>"


def test_render_html_debug_reloads(template_dir):
    html_render = HTMLDebug(files=[str(template_dir / "other.html")])
    first = _Recorder()
    html_render.instance("other.html", None).render(first)
    (template_dir / "other.html").write_text("changed", encoding="utf-8")
    second = _Recorder()
    html_render.instance("other.html", None).render(second)
    assert first.text == "other"
    assert second.text == "changed"


def test_render_html_debug_func_map(tmp_path):
    (tmp_path / "f.html").write_text("{{ shout(name) }}", encoding="utf-8")
    html_render = HTMLDebug(
        files=[str(tmp_path / "f.html")], func_map={"shout": lambda s: s.upper()}
    )
    w = _Recorder()
    html_render.instance("f.html", {"name": "gin"}).render(w)
    assert w.text == "GIN"


def test_render_html_debug_panics():
    html_render = HTMLDebug(delims=Delims("{{", "}}"))
    with pytest.raises(ValueError, match="without files or glob pattern"):
        html_render.instance("", None)


def test_render_html_debug_glob_no_match(tmp_path):
    html_render = HTMLDebug(glob=str(tmp_path / "nothing*"))
    with pytest.raises(ValueError, match="matches no files"):
        html_render.instance("x", None)