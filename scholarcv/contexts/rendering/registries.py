"""
Rendering Registries

Registry for loading and caching the HTML templates of a CV document.
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, TemplateNotFound

from scholarcv.contexts.rendering.exceptions import TemplateRenderError

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("SCHOLARCV_TEMPLATES_PATH", Path(__file__).parent / "templates"))


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for HTML generation.

    Templates live in scholarcv/contexts/rendering/templates/:
    - document.html.jinja: page frame, fonts, columns
    - header.html.jinja: name, headline, photo, contact cards and chips
    - section.html.jinja: section wrapper (heading, numbering, divider)
    - sections/{section_type}.html.jinja: entries of one section type

    Autoescaping is on for every template; pre-rendered HTML (Markdown
    output) must be passed as markupsafe.Markup.
    """

    def __init__(self, templates_path: Path = None, filters: Dict[str, Callable[..., Any]] = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Template directory. Defaults to SCHOLARCV_TEMPLATES_PATH
            filters: Extra Jinja2 filters available to every template
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        if filters:
            self.env.filters.update(filters)

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name relative to the templates directory

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(f"Template '{name}' not found in {self.templates_path}") from e

        self._cache[name] = template
        return template

    def render(self, name: str, **context: Any) -> str:
        """
        Render a template, wrapping Jinja2 failures in TemplateRenderError.

        Args:
            name: Template name
            **context: Template variables

        Returns:
            Rendered markup
        """
        try:
            return self.get_template(name).render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render CV template",
                template_name=name,
                template_path=self.get_template_path(name),
                original_error=e,
            ) from e

    def get_template_path(self, name: str) -> Path:
        return self.templates_path / name

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache
