"""Reader web API: FastAPI endpoints for fetch, ask, export and history."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, field_validator

from intelligence.agents.chat_agent import ERROR_ANSWER
from intelligence.reader import normalize_article_url
from models import ArticleRecord
from outputs import render_article_markdown, slugify_title
from utils.exceptions import (
    ConfigurationError,
    ContentBlocked,
    GenerationFailure,
    HistoryError,
    InvalidURLError,
)
from webapp.runtime import get_history_store, get_reader


logger = logging.getLogger(__name__)


app = FastAPI(title="ClearView Reader API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class ArticleRequest(BaseModel):
    url: str = Field(..., description="Article URL; https:// is added when missing")

    @field_validator("url")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("url is required")
        return text


class QuestionRequest(BaseModel):
    content: str = Field(default="", description="Article markdown body")
    question: str = Field(default="", description="Question about the article")


class MarkdownRequest(BaseModel):
    article: ArticleRecord
    include_sources: bool = True


def _error_detail(exc: Exception, **extra: Any) -> Dict[str, Any]:
    detail = {"message": getattr(exc, "message", None) or str(exc)}
    detail.update(extra)
    return detail


@app.get("/api/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "ts": datetime.now(timezone.utc).isoformat(timespec="seconds")}


@app.post("/api/articles")
async def fetch_article(payload: ArticleRequest) -> Dict[str, Any]:
    try:
        url = normalize_article_url(payload.url)
        record = await get_reader().fetch_article(url)
    except InvalidURLError as exc:
        raise HTTPException(status_code=400, detail=_error_detail(exc))
    except ConfigurationError as exc:
        logger.error(f"Reader is not configured: {exc}")
        raise HTTPException(status_code=503, detail=_error_detail(exc))
    except ContentBlocked as exc:
        raise HTTPException(status_code=422, detail=_error_detail(exc, kind=exc.kind, reason=exc.reason))
    except GenerationFailure as exc:
        logger.error(f"Article retrieval failed for {payload.url}: {exc}")
        raise HTTPException(status_code=502, detail=_error_detail(exc, kind=exc.kind))

    history_entry: Optional[Dict[str, Any]] = None
    try:
        history_entry = get_history_store().append(record).model_dump(mode="json")
    except HistoryError as exc:
        logger.warning(f"History append failed: {exc}")

    return {"article": record.to_dict(), "history_entry": history_entry}


@app.post("/api/articles/ask")
async def ask_question(payload: QuestionRequest) -> Dict[str, str]:
    try:
        reader = get_reader()
    except ConfigurationError as exc:
        logger.error(f"Reader is not configured: {exc}")
        return {"answer": ERROR_ANSWER}
    answer = await reader.ask_question(payload.content, payload.question)
    return {"answer": answer}


@app.post("/api/articles/markdown")
def export_markdown(payload: MarkdownRequest) -> PlainTextResponse:
    markdown = render_article_markdown(payload.article, include_sources=payload.include_sources)
    filename = f"{slugify_title(payload.article.title)}.md"
    return PlainTextResponse(
        markdown,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/api/history")
def list_history() -> Dict[str, List[Dict[str, Any]]]:
    entries = get_history_store().list()
    return {"items": [entry.model_dump(mode="json") for entry in entries]}


@app.delete("/api/history/{entry_id}")
def delete_history_item(entry_id: str) -> Dict[str, Any]:
    try:
        deleted = get_history_store().delete(entry_id)
    except HistoryError as exc:
        raise HTTPException(status_code=500, detail=_error_detail(exc))
    if not deleted:
        raise HTTPException(status_code=404, detail="history entry not found")
    return {"id": entry_id, "deleted": True}


@app.delete("/api/history")
def clear_history() -> Dict[str, Any]:
    try:
        get_history_store().clear()
    except HistoryError as exc:
        raise HTTPException(status_code=500, detail=_error_detail(exc))
    return {"cleared": True}
