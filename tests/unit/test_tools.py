"""Unit tests for codex_session_bridge.tools.handlers."""
from __future__ import annotations

from typing import Any, Mapping

import pytest

from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.errors import (
    SessionNotFoundError,
    UnknownToolError,
    ValidationError,
)
from codex_session_bridge.tools.handlers import (
    PingHandler,
    ToolHandler,
    ToolRegistry,
    build_default_registry,
)


@pytest.fixture()
def registry(dispatcher: CommandDispatcher) -> ToolRegistry:
    return build_default_registry(dispatcher)


class TestRegistry:
    def test_default_tools(self, registry: ToolRegistry) -> None:
        names = [tool["name"] for tool in registry.list_tools()]
        assert names == ["codex", "create_session", "list_sessions", "ping", "help"]
        assert len(registry) == 5
        assert "codex" in registry

    def test_descriptions_present(self, registry: ToolRegistry) -> None:
        for tool in registry.list_tools():
            assert tool["description"]
            assert tool["inputSchema"]["type"] == "object"

    def test_codex_schema_uses_wire_names(self, registry: ToolRegistry) -> None:
        schema = registry.get("codex").input_schema
        properties = schema["properties"]
        assert {"prompt", "model", "sessionId", "additionalArgs", "resetSession"} <= set(properties)
        assert schema["required"] == ["prompt"]

    def test_duplicate_registration(self, registry: ToolRegistry) -> None:
        with pytest.raises(ValueError, match="already registered"):
            registry.register(PingHandler())

    def test_unknown_tool(self, registry: ToolRegistry) -> None:
        with pytest.raises(UnknownToolError) as exc_info:
            registry.get("nope")
        assert exc_info.value.name == "nope"

    @pytest.mark.asyncio
    async def test_call_unknown_tool(self, registry: ToolRegistry) -> None:
        with pytest.raises(UnknownToolError):
            await registry.call("nope", {})

    @pytest.mark.asyncio
    async def test_custom_handler(self) -> None:
        class Upper(ToolHandler):
            name = "upper"
            description = "Upper-case text."

            async def call(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
                return {"text": str(arguments.get("text", "")).upper()}

        registry = ToolRegistry()
        registry.register(Upper())
        assert await registry.call("upper", {"text": "abc"}) == {"text": "ABC"}
        assert registry.list_tools()[0]["inputSchema"] == {"type": "object", "properties": {}}


class TestCodexTool:
    @pytest.mark.asyncio
    async def test_stateless_call(self, registry: ToolRegistry, runner) -> None:
        result = await registry.call("codex", {"prompt": "hello"})
        assert result == {"stdout": "Test response", "stderr": ""}
        assert runner.last_args[0] == "exec"

    @pytest.mark.asyncio
    async def test_session_round_trip(self, registry: ToolRegistry, runner) -> None:
        session_id = (await registry.call("create_session"))["sessionId"]
        runner.queue(stdout="first", stderr="conversation id: conv-9\n")

        first = await registry.call("codex", {"prompt": "one", "sessionId": session_id})
        assert first["sessionId"] == session_id
        assert first["stdout"] == "first"

        await registry.call("codex", {"prompt": "two", "sessionId": session_id})
        assert runner.last_args[:2] == ["resume", "conv-9"]

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, registry: ToolRegistry, runner) -> None:
        with pytest.raises(ValidationError):
            await registry.call("codex", {"prompt": "x", "additionalArgs": "--search"})
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_unknown_session(self, registry: ToolRegistry) -> None:
        with pytest.raises(SessionNotFoundError):
            await registry.call("codex", {"prompt": "x", "sessionId": "ghost"})


class TestSessionTools:
    @pytest.mark.asyncio
    async def test_list_sessions_empty(self, registry: ToolRegistry) -> None:
        assert await registry.call("list_sessions") == {"sessions": []}

    @pytest.mark.asyncio
    async def test_list_sessions_reports_conversation(self, registry: ToolRegistry, runner) -> None:
        session_id = (await registry.call("create_session"))["sessionId"]
        runner.queue(stderr="conversation id: conv-1")
        await registry.call("codex", {"prompt": "hi", "sessionId": session_id})

        (entry,) = (await registry.call("list_sessions"))["sessions"]
        assert entry["sessionId"] == session_id
        assert entry["conversationId"] == "conv-1"
        assert entry["turnCount"] == 1
        assert entry["createdAt"] <= entry["updatedAt"]


class TestPingAndHelp:
    @pytest.mark.asyncio
    async def test_ping_default(self, registry: ToolRegistry) -> None:
        assert await registry.call("ping") == {"message": "pong"}

    @pytest.mark.asyncio
    async def test_ping_echo(self, registry: ToolRegistry) -> None:
        assert await registry.call("ping", {"message": "hi"}) == {"message": "hi"}

    @pytest.mark.asyncio
    async def test_ping_rejects_non_string(self, registry: ToolRegistry) -> None:
        with pytest.raises(ValidationError):
            await registry.call("ping", {"message": 3})

    @pytest.mark.asyncio
    async def test_help_runs_codex_help(self, registry: ToolRegistry, runner) -> None:
        runner.queue(stdout="Usage: codex")
        result = await registry.call("help")
        assert result["stdout"] == "Usage: codex"
        assert runner.calls == [("codex", ["--help"])]
