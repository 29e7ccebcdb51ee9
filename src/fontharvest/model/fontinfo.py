"""Font info model: FontInfo, PseudoNode and StyledNode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class FontInfo:
    """A font-family/font-style/font-weight triple.

    ``family`` holds normalized names: generic keywords bare, every other
    name wrapped in double quotes. Empty values mean "not declared".
    """

    family: tuple[str, ...] = ()
    style: str = ""
    weight: str = ""

    EMPTY: ClassVar[FontInfo]

    def __bool__(self) -> bool:
        return bool(self.family or self.style or self.weight)

    def merged_over(self, older: FontInfo) -> FontInfo:
        """Return this info layered over *older*.

        A non-empty family replaces the older one; style and weight replace
        the older values only when truthy.
        """
        return FontInfo(
            family=self.family if self.family else older.family,
            style=self.style or older.style,
            weight=self.weight or older.weight,
        )

    def with_defaults(self, defaults: FontInfo) -> FontInfo:
        """Fill every empty field from *defaults*."""
        return self.merged_over(defaults)

    def has_family(self, family: str) -> bool:
        """Return True if the unquoted *family* name is listed."""
        return f'"{family}"' in self.family

    def family_index(self, family: str) -> int:
        """Position of the unquoted *family* in the family list, or -1."""
        try:
            return self.family.index(f'"{family}"')
        except ValueError:
            return -1


FontInfo.EMPTY = FontInfo()


@dataclass(frozen=True)
class PseudoNode:
    """A synthetic ``::before`` / ``::after`` child with literal text."""

    tag_name: str
    info: FontInfo
    text: str = ""
    children: tuple[()] = ()

    @property
    def text_content(self) -> str:
        return self.text

    def get_attribute(self, name: str) -> str | None:
        return None


@dataclass
class StyledNode:
    """Explicit font state attached to one document node."""

    info: FontInfo | None = None
    pseudo: dict[str, PseudoNode] = field(default_factory=dict)

    def merge(self, info: FontInfo) -> None:
        self.info = info if self.info is None else info.merged_over(self.info)
