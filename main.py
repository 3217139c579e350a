"""CLI entrypoint: read an article, ask about it, manage reading history."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from intelligence.reader import normalize_article_url
from outputs import export_article_markdown, render_article_markdown
from utils.exceptions import ContentBlocked, HistoryError, ReaderError
from utils.logger import configure_logging, console, get_logger
from webapp.runtime import get_history_store, get_reader


logger = get_logger("cli")


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


async def _read(args: argparse.Namespace) -> int:
    reader = get_reader()
    try:
        record = await reader.fetch_article(normalize_article_url(args.url))
    finally:
        await reader.aclose()

    try:
        get_history_store().append(record)
    except HistoryError as exc:
        logger.warning(f"History append failed: {exc}")

    if args.output_dir:
        path = export_article_markdown(record, args.output_dir)
        console.print(f"[green]Saved[/green] {path}")
    if args.json:
        _print_json(record.to_dict())
    elif not args.output_dir:
        print(render_article_markdown(record))
    return 0


async def _ask(args: argparse.Namespace) -> int:
    reader = get_reader()
    try:
        record = await reader.fetch_article(normalize_article_url(args.url))
        answer = await reader.ask_question(record.content, args.question)
    finally:
        await reader.aclose()
    _print_json({"title": record.title, "question": args.question, "answer": answer})
    return 0


def _history(args: argparse.Namespace) -> int:
    store = get_history_store()
    if args.clear:
        store.clear()
        _print_json({"cleared": True})
        return 0
    if args.delete:
        deleted = store.delete(args.delete)
        _print_json({"id": args.delete, "deleted": deleted})
        return 0 if deleted else 1
    _print_json([entry.model_dump(mode="json") for entry in store.list()])
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("webapp.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="ClearView Reader CLI")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    read = sub.add_parser("read", help="Fetch and reconstruct an article")
    read.add_argument("url")
    read.add_argument("--output-dir", default="")
    read.add_argument("--json", action="store_true")

    ask = sub.add_parser("ask", help="Fetch an article and ask a question about it")
    ask.add_argument("url")
    ask.add_argument("--question", required=True)

    history = sub.add_parser("history", help="List or edit reading history")
    history.add_argument("--delete", default="")
    history.add_argument("--clear", action="store_true")

    serve = sub.add_parser("serve", help="Launch the reader web API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind host")
    serve.add_argument("--port", type=int, default=8765, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == "read":
            code = asyncio.run(_read(args))
        elif args.command == "ask":
            code = asyncio.run(_ask(args))
        elif args.command == "serve":
            code = _serve(args)
        else:
            code = _history(args)
    except ContentBlocked as exc:
        console.print(f"[red]Blocked:[/red] {exc.reason}")
        code = 3
    except ReaderError as exc:
        console.print(f"[red]Error:[/red] {exc.message}")
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
