"""Render subpackage: snapshot drawing and concrete surfaces.

- TreeRenderer / render: issue drawing primitives for a snapshot tree
- RecordingSurface: records primitives (headless use, tests)
- SvgSurface: writes primitives out as SVG
"""

from dom_canvas.render.renderer import TreeRenderer, render
from dom_canvas.render.surfaces import DrawCall, RecordingSurface, SvgSurface

__all__ = ["DrawCall", "RecordingSurface", "SvgSurface", "TreeRenderer", "render"]
