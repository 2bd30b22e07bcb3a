"""RenderConfig: geometry and styling constants for drawing a snapshot tree.

RenderConfig is a frozen (immutable) dataclass shared by the renderer, the
hit-tester and the interaction controller.  The renderer and the hit-tester
must agree on ``row_offset`` and ``node_radius`` or clicks land on the wrong
node, so both always read them from the same instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = ["DEFAULT_CONFIG", "RenderConfig"]


def _default_node_colors() -> Mapping[str, str]:
    return MappingProxyType({"HTML": "#000", "HEAD": "#F00", "BODY": "#0F0"})


def _default_labelled_tags() -> frozenset[str]:
    return frozenset({"HTML", "HEAD", "BODY"})


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable configuration for rendering and interaction.

    Attributes:
        row_offset: Vertical offset added to ``depth * row_height`` for every
            node centre.
        node_radius: Marker radius.  Also the half-width of the hit-test box.
        label_offset: Labels are drawn at ``(x + label_offset, y - label_offset)``.
        node_colors: Tag name -> marker fill.  Keys are upper-case tag names.
        default_node_color: Fill used for tags not in ``node_colors``.
        labelled_tags: Tags whose name is always drawn beside the marker.
        text_color: Colour for labels and the back-arrow glyph.
        connector_color: Stroke colour for parent/child and sibling connectors.
        background_color: Surface background fill.
        highlight_color: Background applied to the hovered live node.
        back_region: Side of the top-left square that acts as "back".
        hover_delay: Pointer-move debounce window, in seconds.
    """

    row_offset: float = 20.0
    node_radius: float = 5.0
    label_offset: float = 5.0
    node_colors: Mapping[str, str] = field(default_factory=_default_node_colors)
    default_node_color: str = "#2F73D8"
    labelled_tags: frozenset[str] = field(default_factory=_default_labelled_tags)
    text_color: str = "#000"
    connector_color: str = "#ccc"
    background_color: str = "#fff"
    highlight_color: str = "rgba(255, 255,0, 0.4)"
    back_region: float = 20.0
    hover_delay: float = 0.010

    def __post_init__(self) -> None:
        if self.node_radius <= 0.0:
            msg = f"node_radius must be > 0, got {self.node_radius}"
            raise ValueError(msg)
        if self.row_offset < 0.0:
            msg = f"row_offset must be >= 0, got {self.row_offset}"
            raise ValueError(msg)
        if self.back_region < 0.0:
            msg = f"back_region must be >= 0, got {self.back_region}"
            raise ValueError(msg)
        if self.hover_delay < 0.0:
            msg = f"hover_delay must be >= 0, got {self.hover_delay}"
            raise ValueError(msg)
        # Normalise user-supplied mappings to read-only, upper-case keyed copies.
        colors = {tag.upper(): color for tag, color in self.node_colors.items()}
        object.__setattr__(self, "node_colors", MappingProxyType(colors))
        object.__setattr__(
            self,
            "labelled_tags",
            frozenset(tag.upper() for tag in self.labelled_tags),
        )

    def color_for(self, tag_name: str | None) -> str:
        """Return the marker fill for ``tag_name`` (case-insensitive)."""
        if tag_name is None:
            return self.default_node_color
        return self.node_colors.get(tag_name.upper(), self.default_node_color)

    def is_labelled(self, tag_name: str | None) -> bool:
        return tag_name is not None and tag_name.upper() in self.labelled_tags


DEFAULT_CONFIG = RenderConfig()
