#!/usr/bin/env python3
"""Example: Tool registry — codex-session-bridge

Drives the tool-call surface the way a tool-calling client would: list
the tools, create a session, and call ``codex`` twice with the same
``sessionId``.  Uses a SQLite store so sessions outlive the process.

Usage:
    python examples/02_tool_registry.py

Requirements:
    pip install codex-session-bridge
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path

from codex_session_bridge import (
    AsyncSQLiteBackend,
    CommandDispatcher,
    SessionStore,
    SubprocessRunner,
    build_default_registry,
)


async def main() -> None:
    store = SessionStore(AsyncSQLiteBackend(db_path=Path("example-sessions.db")))
    dispatcher = CommandDispatcher(store, SubprocessRunner(timeout=600))
    registry = build_default_registry(dispatcher)

    # Step 1: What a client sees
    for tool in registry.list_tools():
        print(f"- {tool['name']}: {tool['description']}")

    # Step 2: Open a session and talk in it
    session_id = (await registry.call("create_session"))["sessionId"]
    arguments = {"prompt": "List the Python files here.", "sessionId": session_id}
    print((await registry.call("codex", arguments))["stdout"])

    arguments = {
        "prompt": "Now count their lines.",
        "sessionId": session_id,
        "additionalArgs": ["--search"],
    }
    print((await registry.call("codex", arguments))["stdout"])

    # Step 3: Inspect stored state
    print(json.dumps(await registry.call("list_sessions"), indent=2))


if __name__ == "__main__":
    asyncio.run(main())
