"""
Color palette.

Colors are identified by their index; the RGB triple is a display-only
derivation of the index.
"""

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Color:
    """A palette color. Only `index` takes part in equality and hashing."""

    index: int
    r: int = field(compare=False)
    g: int = field(compare=False)
    b: int = field(compare=False)

    @classmethod
    def from_index(cls, index: int) -> "Color":
        return cls(index, (index * 97) % 256, (index * 57) % 256, (index * 37) % 256)

    @property
    def hex(self) -> str:
        """Hex string (#RRGGBB) for external renderers."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


class ColorPalette:
    """Ordered, extensible sequence of colors indexed 0..N-1."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"Palette size must be non-negative, got {size}")
        self._colors: list[Color] = [Color.from_index(i) for i in range(size)]

    @classmethod
    def for_graph(cls, graph) -> "ColorPalette":
        """Palette of max_degree + 1 colors, enough for a proper coloring."""
        return cls(graph.max_degree() + 1)

    def add_color(self) -> Color:
        color = Color.from_index(len(self._colors))
        self._colors.append(color)
        return color

    def copy(self) -> "ColorPalette":
        clone = ColorPalette(0)
        clone._colors = list(self._colors)
        return clone

    def __getitem__(self, index: int) -> Color:
        return self._colors[index]

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self._colors)

    def __repr__(self) -> str:
        return f"ColorPalette(size={len(self._colors)})"
