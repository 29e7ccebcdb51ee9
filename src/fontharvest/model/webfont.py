"""WebFont model: one ``@font-face`` rule plus accumulated usage data."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FontFile:
    """A single ``src`` entry of a font face."""

    url: str
    format: str | None = None

    @property
    def is_data_uri(self) -> bool:
        return self.url.lower().startswith("data:")

    def __str__(self) -> str:
        return self.url

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "format": self.format}


def web_font_id(family: str, files: list[FontFile]) -> str:
    """Stable id of a font face: md5 of family and comma-joined file URLs."""
    key = family + ",".join(f.url for f in files)
    return hashlib.md5(key.encode("utf-8")).hexdigest()


@dataclass
class WebFont:
    """Descriptor of a downloadable font and the characters it must cover."""

    id: str
    family: str
    files: list[FontFile]
    stretch: str = ""
    style: str = ""
    weight: str = ""
    chars: set[str] = field(default_factory=set)
    selectors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.family:
            raise ValueError("WebFont family must be a non-empty string")
        if not self.files:
            raise ValueError("WebFont must declare at least one file")

    @classmethod
    def create(
        cls,
        family: str,
        files: list[FontFile],
        *,
        stretch: str = "",
        style: str = "",
        weight: str = "",
    ) -> WebFont:
        """Build a WebFont whose id is derived from *family* and *files*."""
        return cls(
            id=web_font_id(family, files),
            family=family,
            files=list(files),
            stretch=stretch,
            style=style,
            weight=weight,
        )

    @property
    def is_inline(self) -> bool:
        """True when every file is embedded as a data URI."""
        return all(f.is_data_uri for f in self.files)

    def add_chars(self, text: str) -> None:
        self.chars.update(text)

    def add_selector(self, selector: str) -> None:
        if selector not in self.selectors:
            self.selectors.append(selector)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "family": self.family,
            "files": [f.to_dict() for f in self.files],
            "stretch": self.stretch,
            "style": self.style,
            "weight": self.weight,
            "chars": "".join(sorted(self.chars)),
            "selectors": list(self.selectors),
        }
