#!/usr/bin/env python3
"""Example: Quickstart — codex-session-bridge

Minimal working example: run two turns of one codex conversation, then
start over.  Requires the ``codex`` CLI on PATH.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install codex-session-bridge
"""
from __future__ import annotations

import asyncio

import codex_session_bridge
from codex_session_bridge import Codex


async def main() -> None:
    print(f"codex-session-bridge version: {codex_session_bridge.__version__}")

    # Step 1: First turn starts a new conversation
    codex = Codex()
    first = await codex.ask("Summarise the layout of this repository in three lines.")
    print(first.stdout)
    print(f"Conversation: {await codex.conversation_id()}")

    # Step 2: Second turn resumes it
    second = await codex.ask("Which of those directories holds the tests?")
    print(second.stdout)

    # Step 3: Forget the conversation; the next ask starts fresh
    await codex.reset()
    print(f"After reset: {await codex.conversation_id()}")


if __name__ == "__main__":
    asyncio.run(main())
