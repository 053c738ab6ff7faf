"""Capability module tests: the registry and the reference modules."""

import pytest

from azalea.errors import ModuleError
from azalea.modules import (
    FileModule,
    NetModule,
    PlayModule,
    ServeModule,
    VMModule,
    ViewModule,
    builtin_modules,
    render_html,
)
from azalea.runtime import VOID, CapabilityModule, ModuleRegistry, Value, ValueKind


class EchoModule(CapabilityModule):
    name = "echo"

    def invoke(self, method, args):
        return Value.text(f"{method}:{len(args)}")


def text(value):
    return Value.text(value)


def test_registry_register_and_lookup() -> None:
    registry = ModuleRegistry()
    module = EchoModule()
    registry.register(module)
    registry.register(module, name="alias")
    assert "echo" in registry
    assert registry.get("alias") is module
    assert registry.names() == ["echo", "alias"]
    registry.unregister("alias")
    assert len(registry) == 1


def test_registry_rejects_nameless_module() -> None:
    module = EchoModule()
    module.name = ""
    with pytest.raises(ValueError):
        ModuleRegistry().register(module)


def test_capability_module_is_abstract() -> None:
    with pytest.raises(TypeError):
        CapabilityModule()


def test_builtin_modules_are_fresh_instances() -> None:
    first, second = builtin_modules(), builtin_modules()
    assert sorted(first) == ["file", "net", "play", "serve", "view", "vm"]
    assert first["serve"] is not second["serve"]


def test_net_module() -> None:
    net = NetModule()
    assert net.invoke("get", [text("http://x")]) == text("GET http://x")
    assert net.invoke("post", [text("http://x"), text("{}")]) == text("POST http://x")
    assert net.invoke("post", [text("http://x")]) is VOID
    assert net.invoke("patch", []) is VOID


def test_file_module_round_trip(tmp_path) -> None:
    files = FileModule(root=tmp_path)
    assert files.invoke("write", [text("notes.txt"), text("hello")]) == Value.boolean(True)
    assert (tmp_path / "notes.txt").read_text(encoding="utf-8") == "hello"
    assert files.invoke("read", [text("notes.txt")]) == text("hello")


def test_file_module_failures_yield_false(tmp_path) -> None:
    files = FileModule(root=tmp_path)
    assert files.invoke("read", [text("missing.txt")]) == Value.boolean(False)
    assert files.invoke("write", [text("no/such/dir/out.txt"), text("x")]) == Value.boolean(False)
    assert files.invoke("write", [text("only-path.txt")]) == Value.boolean(False)
    assert files.invoke("delete", [text("notes.txt")]) == Value.boolean(False)


def test_vm_and_play_modules() -> None:
    assert VMModule().invoke("make", []) == text("VM created")
    assert VMModule().invoke("boot", []) is VOID
    assert PlayModule().invoke("sprite", []) == text("Play: sprite")
    assert PlayModule().invoke("jump", []) is VOID


def test_serve_module_records_routes() -> None:
    serve = ServeModule()
    assert serve.invoke("on", [Value.number(8080)]) == text("Server on port 8080")
    assert serve.invoke("route", [text("/"), text("home")]) == text("Route GET /")
    assert serve.invoke("del", [text("/item"), text("drop")]) == text("Route DELETE /item")
    assert serve.invoke("files", [text("public")]) == text("Serving static files from public")
    assert serve.invoke("send", [text("{}")]) == text("JSON response")
    assert serve.invoke("post", [text("/only-path")]) is VOID
    assert serve.port == 8080
    assert serve.routes == [("GET", "/"), ("DELETE", "/item")]
    assert serve.static_dirs == ["public"]


def test_serve_module_rejects_non_finite_port() -> None:
    with pytest.raises(ModuleError):
        ServeModule().invoke("start", [Value.number(float("inf"))])


def test_view_components() -> None:
    view = ViewModule()

    button = view.invoke("button", [text("Go"), text("href"), text("/go")])
    assert button.kind is ValueKind.MAP
    assert button.data == {"tag": text("button"), "text": text("Go"), "href": text("/go")}

    box = view.invoke("box", [text("id"), text("main"), text("dangling")])
    assert box.data == {"tag": text("box"), "id": text("main")}

    assert view.invoke("label", [text("Name")]).data["content"] == text("Name")
    assert view.invoke("img", [text("cat.png")]).data["src"] == text("cat.png")
    assert view.invoke("text", []) is VOID
    assert view.invoke("style", [text("color"), text("red")]) == Value.map_of({"color": text("red")})
    assert view.invoke("unknown", []) is VOID
    assert view.invoke(None, []) is VOID


def test_view_element_names_take_content_then_properties() -> None:
    header = ViewModule().invoke("header", [text("Welcome"), text("class"), text("top")])
    assert header.data == {"tag": text("header"), "content": text("Welcome"), "class": text("top")}


def test_render_html() -> None:
    view = ViewModule()
    button = view.invoke("button", [text("Go <now>"), text("href"), text("/go")])
    assert view.invoke("show", [button]) == text('<button href="/go">Go &lt;now&gt;</button>')

    items = Value.list_of([text("a"), text("b")])
    listing = view.invoke("ul", [items])
    assert render_html(listing) == "<ul><li>a</li><li>b</li></ul>"

    image = view.invoke("image", [text("cat.png")])
    assert render_html(image) == '<img src="cat.png">'

    big = view.invoke("big", [text("Title")])
    assert render_html(Value.list_of([big, text("&")])) == "<h1>Title</h1>&amp;"


def test_render_page_document() -> None:
    page = ViewModule().invoke("page", [text("Hi"), text("title"), text("Home")])
    rendered = render_html(page)
    assert rendered.startswith("<!DOCTYPE html><html><head>")
    assert "<title>Home</title>" in rendered
    assert rendered.endswith("<body>Hi</body></html>")
