"""
Rendering Context

Responsibilities:
- Renders composed CV sections into one self-contained HTML document
- Manages the HTML template system (scholarcv/contexts/rendering/templates/)
- Resolves referenced assets (profile photo) to embeddable bytes

Owns: HTML markup, inline styling, page frame, asset embedding
Never: Decides which sections appear or where they go
"""

from scholarcv.contexts.rendering.assets import AssetRef, AssetResolver, LocalAssetResolver, ResolvedAsset
from scholarcv.contexts.rendering.exceptions import TemplateRenderError
from scholarcv.contexts.rendering.pipeline import render_cv
from scholarcv.contexts.rendering.registries import TemplateRegistry
from scholarcv.contexts.rendering.renderer import (
    FONT_LINKS,
    PAGE_MARGINS_MM,
    PAGE_SIZE,
    HeaderData,
    RenderedOutput,
    RenderOptions,
    render_document,
)

__all__ = [
    "AssetRef",
    "AssetResolver",
    "FONT_LINKS",
    "HeaderData",
    "LocalAssetResolver",
    "PAGE_MARGINS_MM",
    "PAGE_SIZE",
    "RenderOptions",
    "RenderedOutput",
    "ResolvedAsset",
    "TemplateRegistry",
    "TemplateRenderError",
    "render_cv",
    "render_document",
]
