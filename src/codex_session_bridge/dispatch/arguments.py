"""Argument vector assembly for the ``codex`` executable.

The vector layout is fixed:

    resume <conversation-id> | exec
    --model <model>
    --skip-git-repo-check
    <additional args, verbatim and in order>
    <prompt>

The leading subcommand decides whether codex starts fresh or continues a
prior conversation.  Every flag must precede the prompt because codex
treats the final positional argument as the prompt text.
"""
from __future__ import annotations

from typing import Sequence

CODEX_COMMAND = "codex"
DEFAULT_MODEL = "gpt-5-codex"
EXEC_SUBCOMMAND = "exec"
RESUME_SUBCOMMAND = "resume"
MODEL_FLAG = "--model"
SKIP_GIT_REPO_CHECK_FLAG = "--skip-git-repo-check"


def build_argument_vector(
    prompt: str,
    *,
    model: str | None = None,
    conversation_id: str | None = None,
    additional_args: Sequence[str] | None = None,
    default_model: str = DEFAULT_MODEL,
) -> list[str]:
    """Return the argument list for one codex invocation.

    Parameters
    ----------
    prompt:
        The prompt text, always the last element.
    model:
        Model identifier; ``default_model`` when None.
    conversation_id:
        When set, the vector resumes that conversation.  Otherwise it
        starts a new one.
    additional_args:
        Flags inserted unmodified between the fixed flags and the prompt.
    default_model:
        Fallback model identifier.
    """
    if conversation_id is not None:
        argv = [RESUME_SUBCOMMAND, conversation_id]
    else:
        argv = [EXEC_SUBCOMMAND]
    argv += [
        MODEL_FLAG,
        model if model is not None else default_model,
        SKIP_GIT_REPO_CHECK_FLAG,
    ]
    argv.extend(additional_args or ())
    argv.append(prompt)
    return argv


__all__ = [
    "CODEX_COMMAND",
    "DEFAULT_MODEL",
    "EXEC_SUBCOMMAND",
    "MODEL_FLAG",
    "RESUME_SUBCOMMAND",
    "SKIP_GIT_REPO_CHECK_FLAG",
    "build_argument_vector",
]
