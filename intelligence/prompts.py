"""
Prompt Builder
Retrieval, paraphrase-retry and question prompts. Pure functions of their input.
"""

from __future__ import annotations


_OUTPUT_FORMAT = """**OUTPUT FORMAT (MANDATORY):**
---
title: [Article Title]
author: [Author Name]
siteName: [Publication Name]
---

![Hero image description](Direct hero image URL)

[Article body in Markdown with inline images]"""


_RETRIEVAL_TEMPLATE = """ROLE: You are an expert content extraction specialist.
GOAL: Reconstruct the full article at the target URL, using Google Search to find the text when the page is behind a paywall or login wall.

TARGET URL: {url}

**CONTENT REQUIREMENTS:**
1. **Full text**: Provide the complete article text. Do not summarize unless the full text is unavailable. Keep the original flow, section headers and nuance.
2. **Metadata block**: Start the answer with a metadata block delimited by lines containing only `---`, holding exactly these keys: `title`, `author`, `siteName`. The article body follows immediately after the closing `---`.
3. **No duplicate title**: Do not repeat the article title as the first heading of the body. The title belongs in the metadata block only.
4. **Images**: Include at least one image when the article has one, starting with the hero/feature image. Use Markdown `![alt text](direct_image_url)` with direct, publicly accessible image URLs.
5. **Formatting**: Use clean Markdown. Use `##` for section headers.

{output_format}
"""


_PARAPHRASE_TEMPLATE = """ROLE: You are an expert editor preparing a faithful reader's edition of an article.
GOAL: Describe the article at the target URL in your own words. Use Google Search to learn what the article says.

TARGET URL: {url}

**CONTENT REQUIREMENTS:**
1. **Paraphrase only**: Do NOT reproduce any passage verbatim. Restate every paragraph in your own words while preserving its facts, order, section structure and nuance. Quote at most a few words at a time.
2. **Metadata block**: Start the answer with a metadata block delimited by lines containing only `---`, holding exactly these keys: `title`, `author`, `siteName`. The body follows immediately after the closing `---`.
3. **No duplicate title**: Do not repeat the article title as the first heading of the body.
4. **Images**: Include at least one image when the article has one, using Markdown `![alt text](direct_image_url)` with a direct, publicly accessible URL.
5. **Formatting**: Use clean Markdown with `##` section headers.

{output_format}
"""


QUESTION_SYSTEM_INSTRUCTION = (
    "You answer questions about a single article. Use only the article text supplied "
    "by the user. If the article does not contain the answer, say so plainly instead of "
    "using outside knowledge. Answer concisely."
)

_QUESTION_TEMPLATE = """Context: The following is the content of an article:
---
{content}
---
User Question: {question}
Answer concisely based only on the text above."""


def build_retrieval_prompt(url: str) -> str:
    """Instruction asking the model to reconstruct the article at `url`."""
    return _RETRIEVAL_TEMPLATE.format(url=url, output_format=_OUTPUT_FORMAT)


def build_paraphrase_prompt(url: str) -> str:
    """Stricter variant used after a recitation (copyright) block."""
    return _PARAPHRASE_TEMPLATE.format(url=url, output_format=_OUTPUT_FORMAT)


def build_question_prompt(content: str, question: str, max_chars: int = 30000) -> str:
    budget = max(0, int(max_chars))
    return _QUESTION_TEMPLATE.format(
        content=(content or "")[:budget],
        question=(question or "").strip(),
    )
