from .core import (
    ConfigurationError,
    DefaultExceptionError,
    ExceptionFactory,
    Handler,
    HandlerDeclinedResponse,
    HandlerFactory,
    HandlerRegistry,
    RegistryError,
    ResponseHandler,
    Switch,
    SwitchError,
    UnexpectedResponseError,
    UnknownHandlerError,
    handler_registry,
    register_handler,
)
from .core.loader import load_classes, load_handlers

__version__ = "1.0.0"

__all__ = [
    "Switch",
    "Handler",
    "HandlerRegistry",
    "handler_registry",
    "register_handler",
    "load_classes",
    "load_handlers",
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
