"""Convenience API for codex-session-bridge — 3-line quickstart.

Example
-------
::

    from codex_session_bridge import Codex
    codex = Codex()
    result = await codex.ask("Explain this repository")
    follow_up = await codex.ask("Now add tests", "--search")

"""
from __future__ import annotations

from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.dispatch.request import InvocationRequest
from codex_session_bridge.execution.runner import CommandRunner, ExecutionResult, SubprocessRunner
from codex_session_bridge.session.store import SessionStore


class Codex:
    """One in-memory codex conversation for the 80% use case.

    The session is created on the first ``ask`` and every later ``ask``
    continues the same conversation.

    Parameters
    ----------
    model:
        Model for every turn; None uses the dispatcher default.
    runner:
        Execution collaborator; defaults to ``SubprocessRunner()``.
    """

    def __init__(
        self,
        model: str | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.model = model
        self._store = SessionStore()
        self._dispatcher = CommandDispatcher(self._store, runner or SubprocessRunner())
        self._session_id: str | None = None

    @property
    def session_id(self) -> str | None:
        """The backing session's identifier, once the first ``ask`` ran."""
        return self._session_id

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    async def conversation_id(self) -> str | None:
        """The codex conversation id tracked so far, if any."""
        if self._session_id is None:
            return None
        session = await self._store.get_session(self._session_id)
        return session.conversation_id if session else None

    async def ask(self, prompt: str, *additional_args: str) -> ExecutionResult:
        """Send ``prompt`` and return codex's raw output.

        ``additional_args`` are forwarded to codex verbatim.
        """
        if self._session_id is None:
            self._session_id = await self._store.create_session()
        request = InvocationRequest.from_arguments(
            {
                "prompt": prompt,
                "model": self.model,
                "session_id": self._session_id,
                "additional_args": list(additional_args),
            }
        )
        return await self._dispatcher.execute(request)

    async def reset(self) -> None:
        """Forget the conversation; the next ``ask`` starts a new one."""
        if self._session_id is not None:
            await self._store.reset_session(self._session_id)

    def __repr__(self) -> str:
        return f"Codex(session_id={self._session_id!r}, model={self.model!r})"
