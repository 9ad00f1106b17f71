"""Validation of dispatcher class configuration."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from response_switch.core.exceptions import ConfigurationError

_DOTTED_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class SwitchConfig(BaseModel):
    """Configuration of a ``Switch`` subclass.

    Built from the subclass's class attributes when it is defined, so that
    mistakes are reported before any response is dispatched.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    handler_namespace: str = Field(min_length=1)
    default_handlers: tuple[str, ...] = ()
    default_exception: Any = None

    @field_validator("handler_namespace")
    @classmethod
    def _check_namespace(cls, value: str) -> str:
        if not _DOTTED_NAME.match(value):
            raise ValueError(f"'{value}' is not a dotted namespace")
        return value

    @field_validator("default_handlers", mode="before")
    @classmethod
    def _check_default_handlers(cls, value: Any) -> Any:
        # A bare string would otherwise be split into characters
        if isinstance(value, str):
            raise ValueError("must be a sequence of handler names, not a string")
        return value

    @field_validator("default_handlers")
    @classmethod
    def _check_handler_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            if not name:
                raise ValueError("handler names must be non-empty")
        return value

    @field_validator("default_exception")
    @classmethod
    def _check_default_exception(cls, value: Any) -> Any:
        if value is None or isinstance(value, str) or callable(value):
            return value
        raise ValueError(
            "must be an exception class, a callable that raises, "
            "or a dotted path to an exception class"
        )


def build_config(owner: str, **attributes: Any) -> SwitchConfig:
    """Validate dispatcher attributes, raising ``ConfigurationError`` on failure."""
    try:
        return SwitchConfig(**attributes)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration for {owner}: {e}") from e
