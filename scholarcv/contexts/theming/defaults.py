"""
Default values for scholarcv themes and layouts.

Provides the compiled-in "Default Professional" values used by:
- theme_registry.py (complete every catalog entry before freezing it)
- layout_registry.py (fallback layout id)
- validation.py (field types and allowed values for custom theme patches)
- theme.py (the six style group names)

Catalog entries in themes.yaml only spell out what differs from these.
"""

from typing import Any, Dict

DEFAULT_THEME_ID = "default"
DEFAULT_LAYOUT_ID = "classic-single"

DEFAULT_COLORS = {
    "primary": "#2563eb",
    "primary_light": "#eff6ff",
    "primary_dark": "#1e40af",
    "secondary": "#64748b",
    "accent": "#10b981",
    "text_primary": "#1f2937",
    "text_secondary": "#6b7280",
    "background": "#ffffff",
    "surface": "#f9fafb",
    "border": "#e5e7eb",
}

# Sizes in px
DEFAULT_TYPOGRAPHY = {
    "name_size": 22,
    "section_title_size": 13,
    "entry_title_size": 12,
    "body_size": 10,
    "small_size": 9,
    "heading_font": "Inter, system-ui, sans-serif",
    "body_font": "Inter, system-ui, sans-serif",
    "line_height": 1.5,
    "heading_transform": "uppercase",
    "letter_spacing": "0.5px",
}

DEFAULT_LAYOUT = {
    "header_padding": 16,
    "section_padding": 16,
    "spacing": 12,
    "border_radius": 8,
}

DEFAULT_STYLE = {
    "header_style": "solid",
    "section_style": "minimal",
    "skill_style": "pill",
    "profile_image_shape": "circle",
    "border_width": 1,
    "section_dividers": True,
    "divider_style": "solid",
    "skill_pills": True,
    "use_icons": True,
    "heading_style": "bold",
    "date_format": "short",
}

DEFAULT_PHOTO = {
    "show": True,
    "size": "medium",
    "aspect": "square",
    "border_width": 2,
    "border_color": "#ffffff",
    "shadow": False,
    "grayscale": False,
}

DEFAULT_HEADER = {
    "layout": "modern",
    "photo_position": "left",
    "alignment": "left",
}

# Field groups in merge order; every group is merged independently
STYLE_GROUPS = ("colors", "typography", "layout", "style", "photo", "header")

# Allowed values for enum-like fields; anything else is dropped from patches
ENUM_FIELDS = {
    ("typography", "heading_transform"): {"none", "uppercase", "lowercase", "capitalize", "first-capital"},
    ("style", "header_style"): {"solid", "gradient", "outlined", "minimal"},
    ("style", "section_style"): {"bordered", "filled", "outlined", "minimal"},
    ("style", "skill_style"): {"pill", "tag", "badge", "simple"},
    ("style", "profile_image_shape"): {"circle", "rounded", "square"},
    ("style", "divider_style"): {"solid", "dashed", "dotted", "double"},
    ("style", "heading_style"): {"bold", "underline", "background"},
    ("style", "date_format"): {"short", "long", "numeric"},
    ("photo", "size"): {"small", "medium", "large", "xlarge", "xxlarge"},
    ("photo", "aspect"): {"square", "portrait", "landscape"},
    ("header", "layout"): {"traditional", "modern", "minimal", "split", "centered"},
    ("header", "photo_position"): {"left", "right", "top", "center", "none"},
    ("header", "alignment"): {"left", "center", "right"},
}


def get_default_groups() -> Dict[str, Dict[str, Any]]:
    """
    Get a fresh copy of every default field group.

    Returns:
        Dict mapping group name ("colors", "typography", ...) to field values
    """
    return {
        "colors": DEFAULT_COLORS.copy(),
        "typography": DEFAULT_TYPOGRAPHY.copy(),
        "layout": DEFAULT_LAYOUT.copy(),
        "style": DEFAULT_STYLE.copy(),
        "photo": DEFAULT_PHOTO.copy(),
        "header": DEFAULT_HEADER.copy(),
    }
