"""
Output Exporter
Render an ArticleRecord as Markdown and write it to disk
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Union

from models import DEFAULT_AUTHOR, DEFAULT_SITE_NAME, ArticleRecord


def slugify_title(text: str, max_len: int = 80) -> str:
    slug = re.sub(r"[^a-z0-9\s_-]", "", str(text or "").lower())
    slug = re.sub(r"[\s_-]+", "-", slug).strip("-")
    return slug[:max_len].rstrip("-") or "article"


def _byline(record: ArticleRecord) -> str:
    parts: List[str] = []
    if record.author and record.author != DEFAULT_AUTHOR:
        parts.append(f"By {record.author}")
    if record.site_name and record.site_name != DEFAULT_SITE_NAME:
        parts.append(record.site_name)
    parts.append(f"<{record.url}>")
    return " · ".join(parts)


def render_article_markdown(record: ArticleRecord, *, include_sources: bool = True) -> str:
    """`# title`, byline, body, then a Sources list when any exist."""
    lines = [f"# {record.title}", "", f"_{_byline(record)}_", ""]
    body = record.content.strip()
    if body:
        lines.extend([body, ""])

    if include_sources and record.sources:
        lines.extend(["## Sources", ""])
        for source in record.sources:
            lines.append(f"- [{source.title}]({source.uri})")
        lines.append("")

    return "\n".join(lines)


def export_article_markdown(
    record: ArticleRecord,
    out_dir: Union[str, Path],
    *,
    include_sources: bool = True,
) -> Path:
    """Write the article to `<out_dir>/<slug>.md` and return the path."""
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    file_path = out_path / f"{slugify_title(record.title)}.md"
    file_path.write_text(render_article_markdown(record, include_sources=include_sources), encoding="utf-8")
    return file_path
