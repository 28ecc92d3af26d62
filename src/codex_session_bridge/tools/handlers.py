"""Tool-call surface.

Each ``ToolHandler`` takes a plain argument mapping (as decoded by whatever
transport carries tool calls) and returns a plain result mapping.  The
transport itself is not part of this package.

Classes
-------
- ToolHandler         — base class: name, description, input schema, call
- CodexToolHandler    — run codex through the dispatcher
- CreateSessionHandler, ListSessionsHandler, PingHandler, HelpHandler
- ToolRegistry        — name -> handler lookup
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.dispatch.request import InvocationRequest
from codex_session_bridge.errors import UnknownToolError, ValidationError
from codex_session_bridge.session.store import SessionStore

logger = logging.getLogger(__name__)

_EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


class ToolHandler(ABC):
    """A single named tool exposed to tool-calling clients."""

    name: str = ""
    description: str = ""

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema describing accepted arguments."""
        return dict(_EMPTY_SCHEMA)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    @abstractmethod
    async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        """Run the tool and return its result mapping."""


class CodexToolHandler(ToolHandler):
    """Run codex with session-aware conversation tracking."""

    name = "codex"
    description = (
        "Run the codex CLI. Pass sessionId to continue a conversation created "
        "with create_session; additionalArgs are forwarded to codex verbatim."
    )

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def input_schema(self) -> dict[str, Any]:
        return InvocationRequest.model_json_schema(by_alias=True)

    async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        request = InvocationRequest.from_arguments(arguments)
        result = await self._dispatcher.execute(request)
        response: dict[str, Any] = result.to_dict()
        if request.session_id is not None:
            response["sessionId"] = request.session_id
        return response


class CreateSessionHandler(ToolHandler):
    name = "create_session"
    description = "Create a session for a multi-turn codex conversation."

    def __init__(self, store: SessionStore) -> None:
        self._store = store

    async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        return {"sessionId": await self._store.create_session()}


class ListSessionsHandler(ToolHandler):
    name = "list_sessions"
    description = "List sessions with their codex conversation ids."

    def __init__(self, store: SessionStore) -> None:
        self._store = store

    async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        sessions = await self._store.list_sessions()
        return {
            "sessions": [
                {
                    "sessionId": session.session_id,
                    "conversationId": session.conversation_id,
                    "turnCount": session.turn_count,
                    "createdAt": session.created_at.isoformat(),
                    "updatedAt": session.updated_at.isoformat(),
                }
                for session in sessions
            ]
        }


class PingHandler(ToolHandler):
    name = "ping"
    description = "Echo a message back; used to check the bridge is alive."

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {"message": {"type": "string", "default": "pong"}},
        }

    async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        message = arguments.get("message", "pong")
        if not isinstance(message, str):
            raise ValidationError("message must be a string", [("message", "not a string")])
        return {"message": message}


class HelpHandler(ToolHandler):
    name = "help"
    description = "Show the codex CLI's own help text."

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        self._dispatcher = dispatcher

    async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        result = await self._dispatcher.runner.run(self._dispatcher.command, ["--help"])
        return result.to_dict()


class ToolRegistry:
    """Name-indexed collection of tool handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, handler: ToolHandler) -> None:
        if handler.name in self._handlers:
            raise ValueError(f"Tool {handler.name!r} is already registered.")
        self._handlers[handler.name] = handler

    def get(self, name: str) -> ToolHandler:
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> list[dict[str, Any]]:
        return [handler.describe() for handler in self._handlers.values()]

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Invoke tool ``name`` with ``arguments``.

        Raises
        ------
        UnknownToolError
            If no tool is registered under ``name``.
        """
        handler = self.get(name)
        logger.debug("ToolRegistry: calling %r", name)
        return await handler.call(arguments or {})

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def build_default_registry(dispatcher: CommandDispatcher) -> ToolRegistry:
    """Return a registry with every built-in tool wired to ``dispatcher``."""
    registry = ToolRegistry()
    registry.register(CodexToolHandler(dispatcher))
    registry.register(CreateSessionHandler(dispatcher.store))
    registry.register(ListSessionsHandler(dispatcher.store))
    registry.register(PingHandler())
    registry.register(HelpHandler(dispatcher))
    return registry


__all__ = [
    "CodexToolHandler",
    "CreateSessionHandler",
    "HelpHandler",
    "ListSessionsHandler",
    "PingHandler",
    "ToolHandler",
    "ToolRegistry",
    "build_default_registry",
]
