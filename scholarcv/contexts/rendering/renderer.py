"""
CV Renderer

Turns composed section columns into one self-contained HTML document.

Rendering is a pure function of its inputs: the same columns, style resolver,
header and asset bytes always give byte-identical markup. The renderer
never looks up themes or layouts itself. It receives:

- columns: List[List[SectionInstance]] from compose_sections()
- style_resolver: section_id -> EffectiveStyle (None gives the document style)
- header: HeaderData (name, headline, photo reference, contact entries)
- asset_resolver: fetches the photo bytes; failures mean "no photo"

Styling is emitted inline per element so the markup survives being opened
from a zip archive or printed by a headless browser without external CSS.
"""

import html
import time
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

import markdown
from markupsafe import Markup

from scholarcv.contexts.composing import (
    ContactEntry,
    SectionInstance,
    build_contact_entries,
    format_citation,
    format_date,
    format_date_range,
    format_publication_number,
    transform_heading,
)
from scholarcv.contexts.rendering.assets import AssetRef, AssetResolver
from scholarcv.contexts.rendering.logger import _log_debug
from scholarcv.contexts.rendering.registries import TemplateRegistry
from scholarcv.contexts.theming import EffectiveStyle, SectionType, StyleResolver, spacing_to_scale
from scholarcv.utils.text_processing import ensure_protocol

PAGE_SIZE = "A4"
PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
PAGE_MARGINS_MM = {"top": 22, "right": 18, "bottom": 22, "left": 18}

FONT_LINKS = (
    "https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap",
    "https://fonts.googleapis.com/css2?family=Source+Serif+Pro:wght@400;600;700&display=swap",
)

# Photo width (px) per size token, and height multiplier per aspect token
PHOTO_SIZES = {"small": 48, "medium": 64, "large": 80, "xlarge": 100, "xxlarge": 120}
PHOTO_ASPECTS = {"square": 1.0, "portrait": 1.33, "landscape": 0.75}
PHOTO_RADIUS = {"circle": "50%", "rounded": "16px", "square": "6px"}
PHOTO_SHADOW = "0 10px 24px rgba(15, 23, 42, 0.18)"

SECTION_ICONS = {
    SectionType.SUMMARY: "☰",
    SectionType.EXPERIENCE: "⚒",
    SectionType.EDUCATION: "✎",
    SectionType.SKILLS: "★",
    SectionType.PUBLICATIONS: "❡",
    SectionType.PROJECTS: "◆",
    SectionType.CERTIFICATIONS: "✓",
    SectionType.AWARDS: "✦",
    SectionType.LANGUAGES: "✆",
    SectionType.REFERENCES: "☺",
    SectionType.CUSTOM_SECTIONS: "▸",
}

SECTION_TEMPLATES = {
    SectionType.SUMMARY: "sections/summary.html.jinja",
    SectionType.EXPERIENCE: "sections/experience.html.jinja",
    SectionType.EDUCATION: "sections/education.html.jinja",
    SectionType.SKILLS: "sections/skills.html.jinja",
    SectionType.PUBLICATIONS: "sections/publications.html.jinja",
    SectionType.PROJECTS: "sections/projects.html.jinja",
    SectionType.CERTIFICATIONS: "sections/certifications.html.jinja",
    SectionType.AWARDS: "sections/awards.html.jinja",
    SectionType.LANGUAGES: "sections/languages.html.jinja",
    SectionType.REFERENCES: "sections/references.html.jinja",
    SectionType.CUSTOM_SECTIONS: "sections/custom.html.jinja",
}

GENERAL_SKILL_CATEGORY = "General"


@dataclass(frozen=True)
class HeaderData:
    """
    Identity block shown at the top of the CV.

    Attributes:
        full_name: Display name ("Your Name" when blank)
        headline: One-line headline (Markdown)
        photo: Stored photo reference, resolved through the asset resolver
        cards: Contact entries rendered as cards (at most four)
        chips: Remaining contact entries rendered as chips
    """

    full_name: str = ""
    headline: Optional[str] = None
    photo: Optional[str] = None
    cards: Tuple[ContactEntry, ...] = ()
    chips: Tuple[ContactEntry, ...] = ()

    @classmethod
    def from_cv(cls, cv) -> "HeaderData":
        cards, chips = build_contact_entries(cv)
        return cls(
            full_name=cv.full_name or "",
            headline=cv.headline,
            photo=cv.profile_image,
            cards=tuple(cards),
            chips=tuple(chips),
        )


@dataclass(frozen=True)
class RenderOptions:
    """
    Layout geometry and CV presentation flags for one render.

    Attributes:
        title: Document <title>
        column_ratios: Relative column widths (one per composed column)
        spacing: Layout spacing token (tight, normal, relaxed)
        section_dividers: Layout allows rules between sections
        page_break_behavior: auto | section | avoid
        header_style: Layout header style (compact, expanded, centered, sidebar)
        header_column: Column hosting the header when header_style is "sidebar"
        citation_style: Citation style for structured publications
        show_numbering: Prefix section headings with 01, 02, ...
    """

    title: str = "CV"
    column_ratios: Tuple[float, ...] = (1,)
    spacing: str = "normal"
    section_dividers: bool = True
    page_break_behavior: str = "auto"
    header_style: str = "expanded"
    header_column: Optional[int] = None
    citation_style: str = "APA"
    show_numbering: bool = False


@dataclass(frozen=True)
class RenderedOutput:
    """Self-contained markup plus any assets it links to by relative path."""

    markup: str
    assets: Tuple[AssetRef, ...] = field(default_factory=tuple)


def render_markdown(text: Optional[str]) -> Markup:
    """
    Render user-authored Markdown to HTML.

    Raw HTML in the input is escaped first, so only Markdown syntax produces tags.
    """
    if not text or not text.strip():
        return Markup("")
    return Markup(markdown.markdown(html.escape(text), extensions=["sane_lists", "nl2br"]))


def render_bullets(items: Sequence[str]) -> Markup:
    return render_markdown("\n".join(f"- {item}" for item in items if item))


def css(**properties: Any) -> str:
    """
    Build an inline style attribute value, skipping None values.

    Example:
        >>> css(font_size="10px", color=None, line_height=1.5)
        'font-size: 10px; line-height: 1.5'
    """
    return "; ".join(
        f"{name.replace('_', '-')}: {value}" for name, value in properties.items() if value is not None
    )


def group_skills(skills: Sequence[Any]) -> List[Tuple[str, List[Any]]]:
    """Group skills by category in order of first appearance."""
    groups: Dict[str, List[Any]] = {}
    for skill in skills:
        groups.setdefault(skill.category or GENERAL_SKILL_CATEGORY, []).append(skill)
    return list(groups.items())


def publication_labels(publications: Sequence[Any]) -> List[str]:
    """
    Number publications; grouped as [J1]/[C1] when they mix journal and conference papers.
    """
    types = [pub.publication_type for pub in publications]
    grouped = bool(types) and all(t in ("journal", "conference") for t in types) and len(set(types)) > 1
    counters: Dict[Optional[str], int] = {}
    labels = []
    for pub in publications:
        key = pub.publication_type if grouped else None
        index = counters.get(key, 0)
        counters[key] = index + 1
        labels.append(format_publication_number(index, pub.publication_type, grouped=grouped))
    return labels


def _section_styles(style: EffectiveStyle, options: RenderOptions) -> Dict[str, str]:
    colors, typo, theme_style = style.colors, style.typography, style.style

    section_box = {
        "bordered": css(border_left=f"3px solid {colors.primary}", padding_left="10px"),
        "filled": css(background=colors.surface, padding=f"{style.layout.section_padding}px", border_radius=f"{style.layout.border_radius}px"),
        "outlined": css(border=f"{theme_style.border_width}px solid {colors.border}", padding=f"{style.layout.section_padding}px", border_radius=f"{style.layout.border_radius}px"),
    }.get(theme_style.section_style, "")

    divider = None
    if theme_style.section_dividers and options.section_dividers:
        divider = f"{max(theme_style.border_width, 1)}px {theme_style.divider_style} {colors.border}"

    heading_extra = {
        "bold": css(font_weight=700),
        "underline": css(font_weight=600, text_decoration="underline", text_underline_offset="4px"),
        "background": css(font_weight=600, background=colors.primary_light, padding="2px 8px", border_radius=f"{style.layout.border_radius}px"),
    }.get(theme_style.heading_style, css(font_weight=600))

    skill_chip = {
        "pill": css(background=colors.primary_light, color=colors.primary, border_radius="999px", padding="2px 10px"),
        "tag": css(border=f"1px solid {colors.primary}", color=colors.primary, border_radius="4px", padding="1px 8px"),
        "badge": css(background=colors.primary, color="#ffffff", border_radius="6px", padding="2px 8px"),
    }.get(theme_style.skill_style, css(color=colors.text_primary, padding="0 4px"))

    return {
        "section": css(
            padding_bottom=f"{style.layout.spacing / 2:g}px" if divider else None,
            border_bottom=divider,
            break_inside="avoid" if options.page_break_behavior in ("section", "avoid") else None,
        ),
        "box": section_box,
        "heading": "; ".join(
            part
            for part in (
                css(
                    margin=0,
                    font_family=typo.heading_font,
                    font_size=f"{typo.section_title_size}px",
                    letter_spacing=typo.letter_spacing,
                    color=colors.primary,
                ),
                heading_extra,
            )
            if part
        ),
        "number": css(color=colors.secondary, font_size=f"{typo.small_size}px", font_weight=600),
        "entry": css(break_inside="avoid" if options.page_break_behavior == "avoid" else None, margin_bottom=f"{style.layout.spacing:g}px"),
        "entry_title": css(margin=0, color=colors.text_primary, font_family=typo.heading_font, font_size=f"{typo.entry_title_size}px", font_weight=600),
        "subtitle": css(color=colors.secondary, font_family=typo.body_font, font_size=f"{typo.body_size}px", font_weight=500),
        "meta": css(color=colors.text_secondary, font_family=typo.body_font, font_size=f"{typo.small_size}px", white_space="nowrap"),
        "body": css(color=colors.text_secondary, font_family=typo.body_font, font_size=f"{typo.body_size}px", line_height=typo.line_height),
        "link": css(color=colors.secondary, text_decoration="underline"),
        "skill": skill_chip,
    }


def _photo_view(style: EffectiveStyle, header: HeaderData, asset_resolver, embed_assets: bool, assets: List[AssetRef]):
    if not header.photo or not style.photo.show or style.header.photo_position == "none":
        return None
    if asset_resolver is None:
        _log_debug("No asset resolver, skipping photo")
        return None
    try:
        resolved = asset_resolver.resolve(header.photo)
    except Exception as e:
        _log_debug(f"Photo resolver failed, skipping photo: {e}")
        return None
    if resolved is None:
        return None

    shape = style.style.profile_image_shape
    width = PHOTO_SIZES.get(style.photo.size, PHOTO_SIZES["medium"])
    height = width if shape == "circle" else round(width * PHOTO_ASPECTS.get(style.photo.aspect, 1.0))

    if embed_assets:
        src = resolved.data_uri()
    else:
        ref = AssetRef.from_resolved(resolved)
        assets.append(ref)
        src = ref.path

    return {
        "src": src,
        "alt": header.full_name or "Profile photo",
        "frame": css(
            width=f"{width}px",
            height=f"{height}px",
            min_width=f"{width}px",
            flex_shrink=0,
            overflow="hidden",
            border_radius=PHOTO_RADIUS.get(shape, PHOTO_RADIUS["square"]),
            border=f"{style.photo.border_width:g}px solid {style.photo.border_color}",
            box_shadow=PHOTO_SHADOW if style.photo.shadow else "none",
        ),
        "image": css(
            width="100%",
            height="100%",
            object_fit="cover",
            object_position="center center",
            filter="grayscale(100%)" if style.photo.grayscale else "none",
        ),
    }


def _header_view(style: EffectiveStyle, header: HeaderData, options: RenderOptions, photo) -> Dict[str, Any]:
    colors, typo = style.colors, style.typography
    header_style = style.style.header_style

    background = {
        "solid": colors.primary_light,
        "gradient": f"linear-gradient(135deg, {colors.secondary}, {colors.primary})",
        "minimal": "transparent",
    }.get(header_style, colors.surface)

    position = style.header.photo_position
    layout = style.header.layout
    centered = (
        layout == "centered"
        or position in ("top", "center")
        or options.header_style == "centered"
        or style.header.alignment == "center"
    )
    stacked = centered or options.header_style == "sidebar"
    direction = "column" if stacked else ("row-reverse" if position == "right" else "row")
    text_align = "center" if centered else ("right" if style.header.alignment == "right" else "left")

    padding = style.layout.header_padding
    if options.header_style == "compact" or layout == "minimal":
        padding = max(padding - 6, 8)

    cards = list(header.cards)
    chips = list(header.chips)
    if options.header_style == "compact":
        cards, chips = [], cards + chips

    return {
        "name": header.full_name or "Your Name",
        "headline": render_markdown(header.headline) if header.headline else None,
        "photo": photo,
        "cards": cards,
        "chips": chips,
        "split": layout == "split" and not stacked,
        "icons": style.style.use_icons,
        "styles": {
            "header": css(
                background=background,
                border_bottom=f"1px solid {colors.border}" if header_style != "outlined" else None,
                border=f"{style.style.border_width:g}px solid {colors.primary}" if header_style == "outlined" else None,
                border_radius=f"{style.layout.border_radius:g}px" if header_style == "outlined" else None,
                padding=f"{padding:g}px",
                padding_bottom=f"{max(padding - 4, 12):g}px",
                margin_bottom=f"{spacing_to_scale(options.spacing)}px",
            ),
            "identity": css(
                display="flex",
                flex_direction=direction,
                align_items="center",
                gap="16px",
                text_align=text_align,
            ),
            "name": css(
                margin=0,
                font_family=typo.heading_font,
                font_size=f"{typo.name_size}px",
                letter_spacing=typo.letter_spacing,
                color="#ffffff" if header_style == "gradient" else colors.primary,
                font_weight=600,
            ),
            "headline": css(
                font_family=typo.body_font,
                font_size=f"{max(typo.body_size, 11)}px",
                color=colors.text_primary if header_style != "gradient" else "#ffffff",
                font_weight=500,
            ),
            "card": css(
                display="flex",
                align_items="center",
                gap="10px",
                border=f"1px solid {colors.border}",
                border_radius=f"{style.layout.border_radius:g}px",
                background=colors.surface,
                color=colors.text_primary,
                padding="6px 10px",
                text_decoration="none",
            ),
            "card_icon": css(
                display="inline-flex",
                align_items="center",
                justify_content="center",
                width="24px",
                height="24px",
                border_radius="6px",
                background=colors.primary_light,
                color=colors.primary,
            ),
            "card_label": css(font_size="9px", text_transform="uppercase", letter_spacing="0.5px", color=colors.text_secondary, font_family=typo.body_font),
            "card_value": css(font_size=f"{typo.body_size}px", font_weight=500, white_space="pre-line", color=colors.text_primary, font_family=typo.body_font),
            "chip": css(
                display="inline-flex",
                align_items="center",
                gap="6px",
                border=f"1px solid {colors.border}",
                border_radius="999px",
                padding="3px 10px",
                font_size=f"{typo.small_size}px",
                color=colors.text_secondary,
                text_decoration="none",
            ),
        },
    }


def _section_view(
    instance: SectionInstance, number: int, style: EffectiveStyle, options: RenderOptions, column_fraction: float
) -> Dict[str, Any]:
    width = min(1.0, instance.size / column_fraction) if column_fraction else 1.0
    view = {
        "id": instance.section_id,
        "type": instance.section_type.value,
        "template": SECTION_TEMPLATES[instance.section_type],
        "title": transform_heading(instance.title, style.typography.heading_transform),
        "number": f"{number:02d}" if options.show_numbering else None,
        "icon": SECTION_ICONS[instance.section_type] if style.style.use_icons else None,
        "entries": instance.entries,
        "text": instance.text,
        "width": f"{width * 100:.2f}%",
        "date_format": style.style.date_format,
        "skill_pills": style.style.skill_pills,
        "styles": _section_styles(style, options),
    }
    if instance.section_type is SectionType.PUBLICATIONS:
        view["labels"] = publication_labels(instance.entries)
        view["citations"] = [
            pub.citation or format_citation(pub, options.citation_style) for pub in instance.entries
        ]
    if instance.section_type is SectionType.SKILLS:
        view["groups"] = group_skills(instance.entries)
    return view


def _column_fractions(ratios: Sequence[float], count: int) -> List[float]:
    if len(ratios) != count or not sum(ratios):
        ratios = [1] * count
    total = float(sum(ratios))
    return [ratio / total for ratio in ratios]


_TEMPLATE_GLOBALS = {
    "markdown": render_markdown,
    "bullets": render_bullets,
    "format_date": format_date,
    "format_date_range": format_date_range,
    "ensure_protocol": ensure_protocol,
}


@lru_cache(maxsize=None)
def get_template_registry() -> TemplateRegistry:
    """Process-wide template registry with the rendering helpers installed as globals."""
    registry = TemplateRegistry()
    registry.env.globals.update(_TEMPLATE_GLOBALS)
    return registry


def render_document(
    columns: Sequence[Sequence[SectionInstance]],
    style_resolver: StyleResolver,
    header: HeaderData,
    asset_resolver: Optional[AssetResolver] = None,
    embed_assets: bool = True,
    title: Optional[str] = None,
    options: Optional[RenderOptions] = None,
) -> RenderedOutput:
    """
    Render composed columns into a self-contained HTML document.

    Args:
        columns: One list of SectionInstance per layout column
        style_resolver: section_id -> EffectiveStyle
        header: Identity block data
        asset_resolver: Resolves the photo reference; None renders without photo
        embed_assets: Inline the photo as a data URI (True) or link it as
                      assets/<filename> and return its bytes in .assets (False)
        title: Document title (overrides options.title)
        options: Layout geometry and presentation flags

    Returns:
        RenderedOutput with markup and linked assets

    Raises:
        TemplateRenderError: If a template fails to render
    """
    start = time.time()
    options = options or RenderOptions()
    document_style = style_resolver(None)
    assets: List[AssetRef] = []

    photo = _photo_view(document_style, header, asset_resolver, embed_assets, assets)
    header_view = _header_view(document_style, header, options, photo)

    fractions = _column_fractions(options.column_ratios, len(columns))
    column_views = []
    number = 0
    for index, column in enumerate(columns):
        sections = []
        for instance in column:
            number += 1
            style = style_resolver(instance.section_id)
            sections.append(_section_view(instance, number, style, options, fractions[index]))
        column_views.append({"sections": sections, "fraction": fractions[index]})

    header_column = options.header_column if options.header_style == "sidebar" and len(columns) > 1 else None

    colors, typo = document_style.colors, document_style.typography
    markup = get_template_registry().render(
        "document.html.jinja",
        title=title or options.title,
        font_links=FONT_LINKS,
        page_size=PAGE_SIZE,
        page_width_mm=PAGE_WIDTH_MM,
        page_height_mm=PAGE_HEIGHT_MM,
        margins=PAGE_MARGINS_MM,
        content_width_mm=PAGE_WIDTH_MM - PAGE_MARGINS_MM["left"] - PAGE_MARGINS_MM["right"],
        header=header_view,
        header_column=header_column,
        columns=column_views,
        grid=css(
            display="grid",
            grid_template_columns=" ".join(f"{fraction:.4f}fr" for fraction in fractions),
            column_gap=f"{spacing_to_scale(options.spacing)}px",
            align_items="start",
        ),
        column_style=css(display="flex", flex_direction="column", gap=f"{spacing_to_scale(options.spacing)}px", min_width=0),
        body_style=css(
            margin=0,
            background=colors.background,
            color=colors.text_primary,
            font_family=typo.body_font,
            font_size=f"{typo.body_size}px",
            line_height=typo.line_height,
        ),
    )

    output = RenderedOutput(markup=markup, assets=tuple(assets))
    _log_debug(f"Rendered {number} section(s) in {len(columns)} column(s) ({time.time() - start:.3f}s)")
    return output
