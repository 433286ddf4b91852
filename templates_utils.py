# ============================================================================
# JINJA2 TEMPLATE UTILITIES
# ============================================================================
# STATUS: Core - static site rendering
# PURPOSE: Centralized Jinja2 configuration and template helpers
# ============================================================================
"""
Jinja2 Template Utilities.

Provides the centralized Jinja2 Environment and helper functions used to
render the MovieFinder static site. Templates live in ./templates next to
this module.

Usage:
    from templates_utils import render_template

    html = render_template("site/index.html.j2", default_settings={"url": "", "key": ""})

Exports:
    templates: Jinja2 Environment instance
    get_template_context: Build standard context with common variables
    render_template: Render a template to a string
"""

from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from config import __version__, get_config

# Initialize templates directory (relative to this file)
_templates_dir = Path(__file__).parent / "templates"
templates = Environment(
    loader=FileSystemLoader(str(_templates_dir)),
    autoescape=select_autoescape(["html", "j2"]),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def get_template_context(**kwargs: Any) -> Dict[str, Any]:
    """
    Build a standard template context with common variables.

    Every template receives these variables automatically:
        - version: Application version from config
        - environment: Environment name (dev, qa, prod)
        - debug_mode: Debug flag for conditional markup

    Args:
        **kwargs: Additional context variables

    Returns:
        Dictionary with standard context variables plus any extras
    """
    config = get_config()

    context = {
        "version": __version__,
        "environment": config.environment,
        "debug_mode": config.debug_mode,
    }
    context.update(kwargs)
    return context


def render_template(template_name: str, **kwargs: Any) -> str:
    """
    Render a Jinja2 template with standard context.

    Args:
        template_name: Path inside ./templates (e.g., "site/index.html.j2")
        **kwargs: Additional context variables for the template

    Returns:
        Rendered text
    """
    context = get_template_context(**kwargs)
    return templates.get_template(template_name).render(**context)


__all__ = [
    'templates',
    'get_template_context',
    'render_template',
]
