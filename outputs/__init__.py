"""
Outputs Module
Markdown rendering and export
"""

from .exporter import render_article_markdown, export_article_markdown, slugify_title

__all__ = [
    "render_article_markdown",
    "export_article_markdown",
    "slugify_title",
]
