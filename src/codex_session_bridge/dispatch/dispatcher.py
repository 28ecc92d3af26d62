"""Session-aware command dispatcher.

Turns one ``InvocationRequest`` into exactly one run of the ``codex``
executable and reconciles the session afterwards.

Classes
-------
- CommandDispatcher  — validate, resolve mode, assemble, execute, reconcile
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from codex_session_bridge.dispatch.arguments import (
    CODEX_COMMAND,
    DEFAULT_MODEL,
    build_argument_vector,
)
from codex_session_bridge.dispatch.markers import extract_conversation_id
from codex_session_bridge.dispatch.request import InvocationRequest
from codex_session_bridge.errors import ExecutionError, SessionNotFoundError
from codex_session_bridge.execution.runner import CommandRunner, ExecutionResult
from codex_session_bridge.session.store import SessionStore

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Dispatch invocation requests to codex, tracking conversations per session.

    The dispatcher performs no locking.  Two concurrent ``execute`` calls
    for the same session may both start a new conversation, and whichever
    finishes last decides the stored conversation id.  Callers must
    serialise calls per session if that matters to them.

    Parameters
    ----------
    store:
        Session store consulted before and updated after each run.
    runner:
        Execution collaborator used to run the command.
    command:
        Executable name.  Defaults to ``"codex"``.
    default_model:
        Model used when a request names none.  Defaults to ``"gpt-5-codex"``.
    """

    def __init__(
        self,
        store: SessionStore,
        runner: CommandRunner,
        *,
        command: str = CODEX_COMMAND,
        default_model: str = DEFAULT_MODEL,
    ) -> None:
        self._store = store
        self._runner = runner
        self.command = command
        self.default_model = default_model

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def runner(self) -> CommandRunner:
        return self._runner

    async def execute(
        self, request: InvocationRequest | Mapping[str, Any]
    ) -> ExecutionResult:
        """Run codex for ``request`` and return its raw output.

        Raises
        ------
        ValidationError
            If the request is malformed.  Nothing is executed.
        SessionNotFoundError
            If ``session_id`` names no stored session.  Nothing is executed.
        ExecutionError
            If the runner fails.  The session is left unchanged.
        """
        request = InvocationRequest.from_arguments(request)
        session_id = request.session_id

        conversation_id: str | None = None
        if session_id is not None:
            session = await self._store.get_session(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            if not request.reset_session:
                conversation_id = session.conversation_id
            had_conversation = session.is_resumable
        else:
            had_conversation = False

        argv = build_argument_vector(
            request.prompt,
            model=request.model,
            conversation_id=conversation_id,
            additional_args=request.additional_args,
            default_model=self.default_model,
        )
        logger.debug(
            "CommandDispatcher: %s session=%r mode=%s argc=%d",
            self.command,
            session_id,
            "resume" if conversation_id is not None else "new",
            len(argv),
        )

        try:
            result = await self._runner.run(self.command, argv)
        except ExecutionError as exc:
            logger.warning(
                "CommandDispatcher: %s failed for session=%r: %s", self.command, session_id, exc
            )
            raise

        if session_id is not None:
            await self._reconcile(session_id, result, request.reset_session and had_conversation)
        return result

    async def _reconcile(
        self, session_id: str, result: ExecutionResult, clear_stale: bool
    ) -> None:
        announced = extract_conversation_id(result.stderr)
        if announced is not None:
            await self._store.update_conversation_id(session_id, announced)
            logger.debug(
                "CommandDispatcher: session %r bound to conversation %r", session_id, announced
            )
        elif clear_stale:
            await self._store.reset_session(session_id)
        await self._store.touch(session_id)

    def __repr__(self) -> str:
        return (
            f"CommandDispatcher(command={self.command!r}, "
            f"default_model={self.default_model!r}, store={self._store!r})"
        )


__all__ = ["CommandDispatcher"]
