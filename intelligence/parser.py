"""Response parsing: frontmatter block, layered title fallbacks and grounding sources.

Every function here is pure. `parse_article_response` never raises for text
input; each field falls back until a usable value is found.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple
from urllib.parse import unquote, urlparse

from intelligence.llm import RetrievalResponse
from models import DEFAULT_AUTHOR, DEFAULT_SITE_NAME, ArticleRecord, Source


FALLBACK_TITLE = "Article View"
MIN_TITLE_LENGTH = 3

# Leading block only: lazy interior, greedy remainder, so later `---` rules stay in the body.
_BLOCK_RE = re.compile(
    r"\A\s*-{3,}[ \t]*\r?\n(.*?)^[ \t]*-{3,}[ \t]*\r?$\n?(.*)\Z",
    flags=re.DOTALL | re.MULTILINE,
)
_FENCE_RE = re.compile(
    r"\A\s*```[ \t]*(?:markdown|md)?[ \t]*\r?\n(.*?)\r?\n[ \t]*```\s*\Z",
    flags=re.DOTALL | re.IGNORECASE,
)
# Fenced code regions (closed, or running to the end of the text).
_CODE_FENCE_RE = re.compile(
    r"^[ \t]{0,3}(`{3,}|~{3,})[^\n]*\n.*?(?:^[ \t]{0,3}\1[ \t]*$|\Z)",
    flags=re.DOTALL | re.MULTILINE,
)
_KEY_VALUE_RE = re.compile(r"^\s*([A-Za-z][A-Za-z _-]*?)\s*:\s*(.*?)\s*$")
_HEADING_RE = re.compile(r"^[ \t]{0,3}#{1,2}[ \t]+(.+?)[ \t#]*$", flags=re.MULTILINE)
_LEADING_HEADING_RE = re.compile(r"\A\s*#{1,6}[ \t]+(.+?)[ \t#]*(?:\r?\n|\Z)")
_MD_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_TEMPLATE_PLACEHOLDER_RE = re.compile(r"^\[[^\]]*\]$")
_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]{1,5}$")

_METADATA_KEYS = {
    "title": "title",
    "author": "author",
    "sitename": "site_name",
}
_QUOTE_PAIRS = {'"': '"', "'": "'", "“": "”", "‘": "’"}
_PLACEHOLDER_TITLES = {
    "article view",
    "article title",
    "title",
    "untitled",
    "unknown",
    "no title",
    "none",
    "null",
    "n/a",
}
_SKIPPED_SEGMENTS = {"index", "amp", "default"}


class ParsedBlock(NamedTuple):
    metadata: Dict[str, str]
    content: str
    has_block: bool


# ---------------------------------------------------------------------------
# Structured block
# ---------------------------------------------------------------------------

def strip_quotes(value: str) -> str:
    """Remove one matching pair of surrounding quotes."""
    text = str(value or "").strip()
    if len(text) >= 2 and _QUOTE_PAIRS.get(text[0]) == text[-1]:
        return text[1:-1].strip()
    return text


def _clean_value(value: str) -> Optional[str]:
    text = strip_quotes(value)
    if not text or _TEMPLATE_PLACEHOLDER_RE.match(text):
        return None
    return text


def _normalize_key(key: str) -> str:
    return re.sub(r"[\s_-]+", "", key).lower()


def _unwrap_fence(text: str) -> str:
    match = _FENCE_RE.match(text)
    if not match or "```" in match.group(1):
        return text
    return match.group(1)


def parse_metadata_lines(block: str) -> Dict[str, str]:
    """`key: value` lines -> {title, author, site_name}; first match per key wins."""
    metadata: Dict[str, str] = {}
    for line in block.splitlines():
        match = _KEY_VALUE_RE.match(line)
        if not match:
            continue
        field = _METADATA_KEYS.get(_normalize_key(match.group(1)))
        if not field or field in metadata:
            continue
        value = _clean_value(match.group(2))
        if value:
            metadata[field] = value
    return metadata


def _has_metadata_key(block: str) -> bool:
    for line in block.splitlines():
        match = _KEY_VALUE_RE.match(line)
        if match and _normalize_key(match.group(1)) in _METADATA_KEYS:
            return True
    return False


def split_frontmatter(text: str) -> ParsedBlock:
    """Split the leading `---` block from the body.

    The block counts only when it holds at least one recognized `key: value`
    line (title, author or siteName), so an opening horizontal rule is not
    mistaken for metadata. Extra keys such as date or tags are ignored.
    """
    raw = _unwrap_fence(str(text or ""))
    match = _BLOCK_RE.match(raw)
    if match and _has_metadata_key(match.group(1)):
        return ParsedBlock(
            metadata=parse_metadata_lines(match.group(1)),
            content=match.group(2).strip(),
            has_block=True,
        )
    return ParsedBlock(metadata={}, content=raw.strip(), has_block=False)


# ---------------------------------------------------------------------------
# Title strategies
# ---------------------------------------------------------------------------

def sanitize_title(title: str) -> str:
    """Strip markdown heading/emphasis markup and collapse whitespace."""
    text = _MD_LINK_RE.sub(r"\1", str(title or ""))
    text = re.sub(r"^\s*#+\s*", "", text)
    text = re.sub(r"\*+|`+|~~", "", text)
    text = re.sub(r"(?<!\w)_+|_+(?!\w)", "", text)
    return re.sub(r"\s+", " ", text).strip()


def is_usable_title(title: Optional[str], min_length: int = MIN_TITLE_LENGTH) -> bool:
    text = sanitize_title(title or "")
    if len(text) < min_length:
        return False
    return text.casefold() not in _PLACEHOLDER_TITLES


def title_from_metadata(metadata: Dict[str, str], content: str, url: str) -> Optional[str]:
    return metadata.get("title")


def _find_heading(content: str) -> Optional[re.Match]:
    """First level 1-2 heading outside fenced code."""
    fenced = [m.span() for m in _CODE_FENCE_RE.finditer(content)]
    for match in _HEADING_RE.finditer(content):
        if not any(start <= match.start() < end for start, end in fenced):
            return match
    return None


def title_from_heading(metadata: Dict[str, str], content: str, url: str) -> Optional[str]:
    match = _find_heading(content or "")
    return match.group(1) if match else None


def title_from_url(metadata: Dict[str, str], content: str, url: str) -> Optional[str]:
    """Last meaningful path segment, humanized; else the bare hostname."""
    try:
        parsed = urlparse(str(url or "").strip())
        host = (parsed.hostname or "").lower()
    except ValueError:
        return None
    if host.startswith("www."):
        host = host[4:]

    for segment in reversed([unquote(part) for part in parsed.path.split("/")]):
        stem = _EXTENSION_RE.sub("", segment.strip())
        words = re.sub(r"\s+", " ", re.sub(r"[-_+]+", " ", stem)).strip()
        if len(words) < MIN_TITLE_LENGTH or words.isdigit() or words.lower() in _SKIPPED_SEGMENTS:
            continue
        return words[0].upper() + words[1:]
    return host or None


def title_literal(metadata: Dict[str, str], content: str, url: str) -> Optional[str]:
    return FALLBACK_TITLE


TitleStrategy = Callable[[Dict[str, str], str, str], Optional[str]]

TITLE_STRATEGIES: List[Tuple[str, TitleStrategy]] = [
    ("metadata", title_from_metadata),
    ("heading", title_from_heading),
    ("url", title_from_url),
    ("literal", title_literal),
]


def resolve_title(
    metadata: Dict[str, str],
    content: str,
    url: str,
    min_length: int = MIN_TITLE_LENGTH,
    strategies: Iterable[Tuple[str, TitleStrategy]] = TITLE_STRATEGIES,
) -> Tuple[str, str]:
    """Return (sanitized title, strategy name) from the first usable strategy."""
    for name, strategy in strategies:
        candidate = strategy(metadata, content, url)
        if name == "literal" and candidate:
            return sanitize_title(candidate) or FALLBACK_TITLE, name
        if is_usable_title(candidate, min_length):
            return sanitize_title(candidate), name
    return FALLBACK_TITLE, "literal"


def strip_title_heading(content: str, title: str, strategy: str) -> str:
    """Remove the heading the title came from, or a leading heading repeating it."""
    if strategy == "heading":
        match = _find_heading(content)
        if match:
            return (content[:match.start()] + content[match.end():]).strip()
        return content

    match = _LEADING_HEADING_RE.match(content)
    if match and sanitize_title(match.group(1)).casefold() == title.casefold():
        return content[match.end():].strip()
    return content


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------

def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def extract_sources(citations: Optional[Iterable[Any]]) -> List[Source]:
    """Web grounding chunks -> Source list; order kept, duplicates kept."""
    sources: List[Source] = []
    for chunk in citations or []:
        web = _field(chunk, "web")
        if not web:
            continue
        title = str(_field(web, "title") or "").strip()
        uri = str(_field(web, "uri") or "").strip()
        if title and uri:
            sources.append(Source(title=title, uri=uri))
    return sources


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse_article_response(
    text: str,
    url: str,
    citations: Optional[Iterable[Any]] = None,
    *,
    min_title_length: int = MIN_TITLE_LENGTH,
) -> ArticleRecord:
    block = split_frontmatter(text)
    title, strategy = resolve_title(block.metadata, block.content, url, min_title_length)
    content = strip_title_heading(block.content, title, strategy)

    return ArticleRecord(
        title=title,
        content=content,
        author=block.metadata.get("author") or DEFAULT_AUTHOR,
        site_name=block.metadata.get("site_name") or DEFAULT_SITE_NAME,
        url=url,
        sources=extract_sources(citations),
    )


class ResponseParser:
    """Turns a RetrievalResponse into an ArticleRecord."""

    def __init__(self, min_title_length: int = MIN_TITLE_LENGTH):
        self.min_title_length = max(1, int(min_title_length))

    def parse(self, response: RetrievalResponse, url: str) -> ArticleRecord:
        return parse_article_response(
            response.text,
            url,
            response.citations,
            min_title_length=self.min_title_length,
        )
