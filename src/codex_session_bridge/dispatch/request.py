"""Invocation request model.

``InvocationRequest`` is the validated input of one dispatch.  Field names
are snake_case in Python; the camelCase names used on the tool-call surface
(``sessionId``, ``additionalArgs``, ``resetSession``) are accepted as
aliases.

Validation is strict: nothing is coerced.  A bare string where a sequence
of arguments is expected, or a non-string argument, is rejected.
"""
from __future__ import annotations

from typing import Any, Mapping

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from codex_session_bridge.errors import ValidationError


class InvocationRequest(BaseModel):
    """One request to run the ``codex`` executable.

    Parameters
    ----------
    prompt:
        Free-text prompt, passed as the final argument.  Must be non-empty.
    model:
        Model identifier.  ``None`` means the dispatcher's default; an
        empty string is rejected.
    session_id:
        Existing session to continue.  ``None`` means a stateless call.
    additional_args:
        Extra flags forwarded verbatim, in order, before the prompt.
    reset_session:
        Start a new conversation even if the session has a conversation id.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    prompt: StrictStr = Field(min_length=1)
    model: StrictStr | None = Field(default=None, min_length=1)
    session_id: StrictStr | None = Field(default=None, alias="sessionId")
    additional_args: list[StrictStr] | None = Field(default=None, alias="additionalArgs")
    reset_session: StrictBool = Field(default=False, alias="resetSession")

    @field_validator("additional_args", mode="before")
    @classmethod
    def _require_ordered_sequence(cls, value: Any) -> Any:
        # Ordered sequences only; a str is not a list of arguments.
        if value is None or isinstance(value, (list, tuple)):
            return value
        raise ValueError(
            f"additionalArgs must be a list of strings, got {type(value).__name__}"
        )

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any] | "InvocationRequest") -> "InvocationRequest":
        """Validate raw tool-call arguments into a request.

        Raises
        ------
        ValidationError
            If ``arguments`` is not a mapping or any field is invalid.
        """
        if isinstance(arguments, InvocationRequest):
            return arguments
        if not isinstance(arguments, Mapping):
            raise ValidationError(
                f"Request must be a mapping, got {type(arguments).__name__}",
                [("", "not a mapping")],
            )
        try:
            return cls.model_validate(dict(arguments))
        except pydantic.ValidationError as exc:
            problems = [
                (".".join(str(part) for part in error["loc"]), error["msg"])
                for error in exc.errors()
            ]
            summary = "; ".join(f"{loc or 'request'}: {msg}" for loc, msg in problems)
            raise ValidationError(f"Invalid request: {summary}", problems) from None

    def to_arguments(self) -> dict[str, Any]:
        """Return the camelCase mapping accepted by the tool-call surface."""
        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = ["InvocationRequest"]
