"""dom-canvas - snapshot a live document tree and draw it as a layered node diagram."""

from __future__ import annotations

from dom_canvas.api import render_html, render_svg, snapshot
from dom_canvas.bridge import MutationBridge
from dom_canvas.config import RenderConfig
from dom_canvas.controller import InteractionController
from dom_canvas.document import Document, Element, parse_html
from dom_canvas.fetch import DocumentFetcher, RemoteDocumentLoader
from dom_canvas.hit_test import locate
from dom_canvas.render import RecordingSurface, SvgSurface, TreeRenderer, render
from dom_canvas.tree import DocumentIndex, SnapshotNode, TagCategory, TreeBuilder

__version__: str = "0.1.0"
__all__: list[str] = [
    "Document",
    "DocumentFetcher",
    "DocumentIndex",
    "Element",
    "InteractionController",
    "MutationBridge",
    "RecordingSurface",
    "RemoteDocumentLoader",
    "RenderConfig",
    "SnapshotNode",
    "SvgSurface",
    "TagCategory",
    "TreeBuilder",
    "TreeRenderer",
    "locate",
    "parse_html",
    "render",
    "render_html",
    "render_svg",
    "snapshot",
]
