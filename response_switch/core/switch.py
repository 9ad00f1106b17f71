"""Dispatcher that passes a response through a chain of handlers.

Automated clients of web applications built for humans cannot assume that a
request always produces the same kind of response. Requesting a CSV export
might return the CSV, a form complaining about the input, a "session
expired" page, or something nobody anticipated. A ``Switch`` subclass
collects the handlers for those cases and tries them in order:

    class WebResponses(Switch):
        handler_namespace = "myproject.web_response"
        default_handlers = ("ConfirmAction", "LoginForm")
        default_exception = "myproject.errors.BadWebResponse"

    WebResponses.load_classes()

    try:
        rows = WebResponses.handle(http_response, "RawDataPage", "RawDataForm")
    except NeedConfirmation:
        ...
    except NotLoggedIn:
        ...
"""

from __future__ import annotations

import inspect
import logging
import warnings
from collections.abc import Sequence
from typing import Any, ClassVar, NoReturn

from response_switch.core.config import SwitchConfig, build_config
from response_switch.core.exceptions import (
    ConfigurationError,
    DefaultExceptionError,
    HandlerDeclinedResponse,
    UnexpectedResponseError,
)
from response_switch.core.protocols import ExceptionFactory
from response_switch.core.registry import HandlerRegistry
from response_switch.core.registry import handler_registry as global_registry

logger = logging.getLogger(__name__)


class Switch:
    """Base class for response dispatchers.

    Subclasses configure themselves through class attributes:

    Attributes:
        handler_namespace: Namespace the handler identifiers are resolved in.
            Required; a subclass without one is treated as abstract.
        default_handlers: Identifiers tried after those passed to ``handle``
        default_exception: What to raise when every handler declines. Either
            an exception class (constructed with the response), a callable
            that raises, or a dotted path resolved by ``load_classes``.
        handler_registry: Registry the identifiers are looked up in
    """

    handler_namespace: ClassVar[str | None] = None
    default_handlers: ClassVar[Sequence[str]] = ()
    default_exception: ClassVar[Any] = UnexpectedResponseError
    handler_registry: ClassVar[HandlerRegistry] = global_registry

    _config: ClassVar[SwitchConfig | None] = None
    _resolved_exception: ClassVar[tuple[str, type[BaseException]] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.handler_namespace is None:
            cls._config = None
            return

        cls._config = build_config(
            cls.__qualname__,
            handler_namespace=cls.handler_namespace,
            default_handlers=cls.default_handlers,
            default_exception=cls.default_exception,
        )

    @classmethod
    def get_config(cls) -> SwitchConfig:
        """Return the validated configuration of this dispatcher.

        Raises:
            ConfigurationError: If no ``handler_namespace`` is defined
        """
        if cls._config is None:
            raise ConfigurationError(
                f"{cls.__qualname__} must define handler_namespace before "
                f"it can handle responses"
            )
        return cls._config

    @classmethod
    def handle(cls, response: Any, *handler_names: str) -> Any:
        """Pass a response to each handler in turn until one accepts it.

        The handlers named in ``handler_names`` are tried first, in order,
        followed by ``default_handlers``. The first handler that does not
        decline decides the outcome: its return value is returned, or its
        exception propagates unchanged.

        Args:
            response: The response to dispatch; passed as-is to each handler
            *handler_names: Handler identifiers within ``handler_namespace``

        Returns:
            Whatever the accepting handler returned

        Raises:
            UnknownHandlerError: If an identifier is not registered
            Exception: ``default_exception`` if every handler declined, or
                whatever an accepting handler raised
        """
        config = cls.get_config()
        for name in handler_names:
            if not isinstance(name, str):
                raise ConfigurationError(
                    f"Handler identifiers must be strings, got {name!r}"
                )

        declined: list[str] = []
        for name in (*handler_names, *config.default_handlers):
            factory = cls.handler_registry.get_handler(config.handler_namespace, name)

            try:
                result = factory(response).handle()
            except HandlerDeclinedResponse:
                logger.debug(f"{cls.__qualname__}: handler {name} declined response")
                declined.append(name)
                continue

            logger.debug(f"{cls.__qualname__}: handler {name} accepted response")
            return result

        # All of the handlers declined to handle the response.
        cls._raise_default_exception(response, declined)

    @classmethod
    def load_classes(cls) -> list[str]:
        """Import and register every handler under ``handler_namespace``.

        See ``response_switch.core.loader.load_classes``.
        """
        from response_switch.core.loader import load_classes

        return load_classes(cls)

    @classmethod
    def load_handlers(cls) -> list[str]:
        """Deprecated alias for ``load_classes``."""
        from response_switch.core.loader import LOAD_HANDLERS_DEPRECATION, load_classes

        warnings.warn(LOAD_HANDLERS_DEPRECATION, DeprecationWarning, stacklevel=2)
        return load_classes(cls)

    @classmethod
    def _get_default_exception(cls) -> Any:
        exc = cls.get_config().default_exception
        if exc is None:
            return UnexpectedResponseError

        if isinstance(exc, str):
            resolved = cls._resolved_exception
            if resolved is None or resolved[0] != exc:
                raise ConfigurationError(
                    f"default_exception '{exc}' of {cls.__qualname__} has not "
                    f"been loaded; call {cls.__qualname__}.load_classes() first"
                )
            return resolved[1]

        return exc

    @classmethod
    def _raise_default_exception(cls, response: Any, declined: list[str]) -> NoReturn:
        exc = cls._get_default_exception()
        logger.debug(
            f"{cls.__qualname__}: no handler accepted response, "
            f"raising {getattr(exc, '__name__', exc)!r}"
        )

        if isinstance(exc, type) and issubclass(exc, BaseException):
            if issubclass(exc, UnexpectedResponseError):
                raise exc(response=response, declined=declined)

            try:
                error = exc(response=response)
            except TypeError:
                # Built-in exceptions take no keyword arguments
                error = None
            if error is None:
                error = exc(response)
                error.response = response
            raise error

        returned = _call_exception_factory(exc, response)
        if isinstance(returned, BaseException):
            raise returned
        raise DefaultExceptionError(exc, returned)


def _call_exception_factory(factory: ExceptionFactory, response: Any) -> Any:
    """Call a raise-directly ``default_exception``, passing the response if accepted."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return factory(response)

    try:
        signature.bind(response)
    except TypeError:
        return factory()
    return factory(response)
