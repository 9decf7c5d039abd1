#!/usr/bin/env python3
"""
Ask the Copilot backend one question from the command line (no HTTP server).

Builds the same prompt as POST /api/ai and prints the answer and citations.
Useful to check that the backend protocol still works.

Run from project root:

    python scripts/ask.py "Halo"
    python scripts/ask.py "What is RAG?" --persona "a data engineer" --language English --model think-deeper
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Project root on path so "app" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.core.errors import ChatServiceError
from app.services.copilot_client import MODEL_MODES, CopilotSession
from app.services.prompt_builder import build_prompt


async def ask(query: str, persona: str | None, language: str | None, model: str) -> int:
    session = CopilotSession()
    prompt = build_prompt(query, persona=persona, language=language)
    try:
        result = await session.chat(prompt, model=model)
    except ChatServiceError as e:
        print(f"[{e.code}] {e.message}", file=sys.stderr)
        return 1
    print(result.text.strip())
    for i, c in enumerate(result.citations, start=1):
        print(f"[{i}] {c.title or ''} {c.url or ''}".rstrip())
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask the Copilot backend one question.")
    parser.add_argument("query", help="Question to ask.")
    parser.add_argument("--persona", default=None, help="Persona the assistant should adopt.")
    parser.add_argument("--language", default=None, help="Answer language (default: Bahasa Indonesia).")
    parser.add_argument("--model", default="default", choices=list(MODEL_MODES), help="Model selector.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log protocol steps.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    if not args.query.strip():
        parser.error("query must not be blank")
    sys.exit(asyncio.run(ask(args.query, args.persona, args.language, args.model)))


if __name__ == "__main__":
    main()
