"""In-memory document provider used by the core tests."""

from __future__ import annotations

from typing import Callable, Iterable

from fontharvest.errors import UnsupportedSelectorError


class FakeDeclaration:
    """Declaration block parsed from ``"name: value [!important]; ..."``."""

    def __init__(self, text: str = "") -> None:
        self._values: dict[str, tuple[str, bool]] = {}
        for part in text.split(";"):
            if ":" not in part:
                continue
            name, value = part.split(":", 1)
            name = name.strip().lower()
            value = value.strip()
            important = value.endswith("!important")
            if important:
                value = value[: -len("!important")].strip()
            old = self._values.get(name)
            if old is not None and old[1] and not important:
                continue
            self._values.pop(name, None)
            self._values[name] = (value, important)

    @property
    def property_names(self) -> list[str]:
        return list(self._values)

    def get_property_value(self, name: str) -> str:
        entry = self._values.get(name)
        return entry[0] if entry else ""

    def is_important(self, name: str) -> bool:
        entry = self._values.get(name)
        return bool(entry and entry[1])


class FakeFontFaceRule:
    def __init__(self, declarations: str, base_url: str = "https://example.com/css/site.css") -> None:
        self.style = FakeDeclaration(declarations)
        self.base_url = base_url


class FakeStyleRule:
    def __init__(self, selector_text: str, declarations: str) -> None:
        self.selector_text = selector_text
        self.style = FakeDeclaration(declarations)


class FakeNode:
    def __init__(
        self,
        tag_name: str,
        *children: FakeNode,
        text: str = "",
        attrs: dict[str, str] | None = None,
    ) -> None:
        self.tag_name = tag_name
        self.children = list(children)
        self.text = text
        self.attrs = dict(attrs or {})

    def __repr__(self) -> str:
        return f"FakeNode({self.tag_name!r})"

    @property
    def text_content(self) -> str:
        return self.text + "".join(child.text_content for child in self.children)

    def get_attribute(self, name: str) -> str | None:
        return self.attrs.get(name)

    @property
    def inline_style(self) -> FakeDeclaration | None:
        style = self.attrs.get("style")
        return FakeDeclaration(style) if style else None

    def walk(self) -> Iterable[FakeNode]:
        yield self
        for child in self.children:
            yield from child.walk()


def _simple_matcher(selector: str) -> Callable[[FakeNode], bool] | None:
    if selector == "*":
        return lambda node: True
    if selector.startswith("."):
        name = selector[1:]
        return lambda node: name in (node.get_attribute("class") or "").split()
    if selector.startswith("#"):
        name = selector[1:]
        return lambda node: node.get_attribute("id") == name
    if selector.replace("-", "").isalnum():
        return lambda node: node.tag_name == selector.lower()
    return None


class FakeDocument:
    """Document whose queries understand ``*``, tags, ``.class`` and ``#id``.

    Any other selector must be listed in *queries* or it is rejected.
    """

    def __init__(
        self,
        root: FakeNode,
        rules: list[object] | None = None,
        queries: dict[str, list[FakeNode]] | None = None,
        url: str = "https://example.com/index.html",
    ) -> None:
        self.root = root
        self._rules = list(rules or [])
        self._queries = dict(queries or {})
        self.url = url
        self.selected: list[str] = []

    def rules(self) -> list[object]:
        return list(self._rules)

    def select(self, selector: str) -> list[FakeNode]:
        self.selected.append(selector)
        if selector in self._queries:
            return list(self._queries[selector])
        matcher = _simple_matcher(selector)
        if matcher is None:
            raise UnsupportedSelectorError(selector)
        return [node for node in self.root.walk() if matcher(node)]
