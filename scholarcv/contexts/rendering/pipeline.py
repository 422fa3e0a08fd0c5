"""
Render pipeline: CV document in, HTML document out.

Wires the registries, the theme configuration merger, the composer and the
renderer together. Explicit theme/layout/custom theme arguments win over the
references stored on the CV.
"""

import time
from typing import Any, Optional

from scholarcv.contexts.composing import CVDocument, compose_sections
from scholarcv.contexts.rendering.assets import AssetResolver, LocalAssetResolver
from scholarcv.contexts.rendering.logger import log_render_result, log_render_start
from scholarcv.contexts.rendering.renderer import HeaderData, RenderedOutput, RenderOptions, render_document
from scholarcv.contexts.theming import decode_theme_data, get_layout_by_id, get_theme_by_id, make_style_resolver


def render_cv(
    cv: CVDocument,
    theme_id: Optional[str] = None,
    layout_id: Optional[str] = None,
    custom_theme: Any = None,
    asset_resolver: Optional[AssetResolver] = None,
    embed_assets: bool = True,
) -> RenderedOutput:
    """
    Render a CV with its effective theme and layout.

    Args:
        cv: Hydrated CV document
        theme_id: Theme id; defaults to the CV's theme, then the catalog default
        layout_id: Layout id; defaults to the CV's layout, then the catalog default
        custom_theme: CustomTheme, mapping or JSON string; defaults to the CV's custom theme
        asset_resolver: Photo resolver; defaults to a LocalAssetResolver
        embed_assets: Inline the photo (True) or link it under assets/ (False)

    Returns:
        RenderedOutput

    Example:
        >>> output = render_cv(cv, theme_id="modern-blue", layout_id="classic-single")
        >>> output.markup.startswith("<!DOCTYPE html>")
        True
    """
    start = time.time()
    theme = get_theme_by_id(theme_id or cv.theme_id)
    layout = get_layout_by_id(layout_id or cv.layout_id)
    custom = decode_theme_data(custom_theme) if custom_theme is not None else cv.custom_theme
    log_render_start(cv.id, theme.id, layout.id, custom.id if custom else None)

    columns = compose_sections(cv, layout)
    options = RenderOptions(
        title=cv.title or cv.full_name or "CV",
        column_ratios=tuple(layout.column_ratios),
        spacing=layout.spacing,
        section_dividers=layout.section_dividers,
        page_break_behavior=layout.page_break_behavior,
        header_style=layout.header_style,
        header_column=layout.header_placement.column if layout.header_placement else None,
        citation_style=cv.citation_style,
        show_numbering=cv.show_numbering,
    )
    output = render_document(
        columns,
        make_style_resolver(theme, custom),
        HeaderData.from_cv(cv),
        asset_resolver=asset_resolver if asset_resolver is not None else LocalAssetResolver(),
        embed_assets=embed_assets,
        options=options,
    )

    log_render_result(cv.id, output, time.time() - start)
    return output
