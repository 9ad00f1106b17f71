"""Core infrastructure - handlers, registry, dispatcher and exceptions."""

from response_switch.core.decorators import register_handler
from response_switch.core.exceptions import (
    ConfigurationError,
    DefaultExceptionError,
    HandlerDeclinedResponse,
    RegistryError,
    SwitchError,
    UnexpectedResponseError,
    UnknownHandlerError,
)
from response_switch.core.handler import Handler
from response_switch.core.protocols import (
    ExceptionFactory,
    HandlerFactory,
    ResponseHandler,
)
from response_switch.core.registry import HandlerRegistry, handler_registry
from response_switch.core.switch import Switch

__all__ = [
    "Switch",
    "Handler",
    "HandlerRegistry",
    "handler_registry",
    "register_handler",
    "ResponseHandler",
    "HandlerFactory",
    "ExceptionFactory",
    "SwitchError",
    "HandlerDeclinedResponse",
    "UnexpectedResponseError",
    "ConfigurationError",
    "RegistryError",
    "UnknownHandlerError",
    "DefaultExceptionError",
]
