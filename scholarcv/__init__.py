"""
scholarcv - theme and layout driven academic CV rendering

Turns a hydrated CV document plus a theme and layout selection into a
self-contained HTML document and derived export artifacts.

Architecture:
- Theming Context: Theme and layout catalogs, custom theme validation, style merging
- Composing Context: CV document model and column composition
- Rendering Context: HTML rendering from composed sections and resolved styles
- Exporting Context: PDF, HTML bundle, and word-processor export adapters
"""

__version__ = "0.1.0"
