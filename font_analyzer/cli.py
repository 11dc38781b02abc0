#!/usr/bin/env python3
"""
Font Analyzer command line.

Usage
─────
  # Ask the running server for a font (titles are submitted in order,
  # through one orchestrator, so a repeated title is not re-requested)
  font-analyzer suggest "The Last Starship" "Autumn Recipes"

  # Run the suggestion server
  font-analyzer serve --port 3000
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import textwrap

from font_analyzer.client.font_loader import FontLinkLoader, FontPreview
from font_analyzer.client.orchestrator import RequestOrchestrator
from font_analyzer.client.state import RequestState, RequestStatus
from font_analyzer.client.suggestion_client import SuggestionClient
from font_analyzer.config import Settings, get_settings
from font_analyzer.logging_config import configure_logging


def render_state(state: RequestState, title: str, loader: FontLinkLoader) -> str:
    """Text rendition of what the result panel would show."""
    lines: list[str] = []
    if state.message:
        lines.append(f"! {state.message}")
    if state.status is RequestStatus.LOADING:
        lines.append("Consulting the AI typographer...")
    if state.suggestion is not None:
        lines.append(f"Suggested font: {state.suggestion.font_name}")
        lines.extend(textwrap.wrap(state.suggestion.reason, width=72, initial_indent="  ", subsequent_indent="  "))
        lines.append(f"Your title preview: {title.strip()}")
        link = loader.active_link
        if link is not None:
            lines.append(f"Stylesheet: {link.href}")
    return "\n".join(lines)


async def run_suggest(titles: list[str], settings: Settings) -> int:
    loader = FontLinkLoader()
    async with SuggestionClient.from_settings(settings) as client:
        orchestrator = RequestOrchestrator(
            client, fallback_delay_seconds=settings.fallback_delay_seconds
        )
        orchestrator.add_result_listener(FontPreview(loader))
        for title in titles:
            print(f"» {title}")
            state = await orchestrator.submit(title)
            output = render_state(state, title, loader)
            if output:
                print(output)
    return 0 if orchestrator.result is not None else 1


def run_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("font_analyzer.main:create_app", factory=True, host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="font-analyzer",
        description="AI typographer: suggest a Google Font for a title.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p_suggest = sub.add_parser("suggest", help="Ask the server for font suggestions")
    p_suggest.add_argument("titles", nargs="+", metavar="TITLE")
    p_suggest.add_argument("--endpoint", default=None, help="Override SUGGESTION_ENDPOINT")

    p_serve = sub.add_parser("serve", help="Run the suggestion server")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=None, help="Override PORT")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    if args.command == "serve":
        return run_serve(args.host, args.port or settings.port)

    if args.endpoint:
        settings = settings.model_copy(update={"suggestion_endpoint": args.endpoint})
    configure_logging(log_level=args.log_level or settings.log_level, json_output=False)
    return asyncio.run(run_suggest(args.titles, settings))


if __name__ == "__main__":
    sys.exit(main())
