from __future__ import annotations

from functools import partial
from textwrap import dedent
from typing import Any

from jinja2 import Template


class SwitchError(Exception):
    """Base exception for all response-switch errors."""

    pass


class HandlerDeclinedResponse(SwitchError):
    """Raised by a handler to indicate that a response is not its concern.

    This is a control signal, not an error. A dispatcher catches it and moves
    on to the next handler, so it never reaches code that calls
    ``Switch.handle``. It carries no data.

    Examples:
        ```python
        class RawDataPage(Handler):
            def handle(self):
                if self.response.content_type != "text/csv":
                    self.decline()
                return parse_csv(self.response.content)
        ```
    """

    pass


class UnexpectedResponseError(SwitchError):
    """Exception raised when every handler declined a response.

    Attributes:
        response: The response that nothing recognised
        declined: Identifiers of the handlers that declined it, in trial order
    """

    def __init__(
        self,
        *args: Any,
        response: Any | None = None,
        declined: list[str] | None = None,
        message: str = "unexpected HTTP response",
        **kwargs: Any,
    ):
        self.response = response
        self.declined = declined
        super().__init__(message, *args, **kwargs)

    def __reduce__(self):
        message, *args = self.args
        rebuild = partial(
            type(self), response=self.response, declined=self.declined, message=message
        )
        return (rebuild, tuple(args), self.__dict__)

    def __str__(self) -> str:
        if not self.declined:
            return super().__str__()

        template = Template(
            dedent(
                """
                {{ message }}
                <declined_handlers>
                {% for name in declined %}
                <handler position="{{ loop.index0 }}">{{ name }}</handler>
                {% endfor %}
                </declined_handlers>
                """
            ).strip()
        )
        return template.render(message=super().__str__(), declined=self.declined)


class ConfigurationError(SwitchError):
    """Exception raised for configuration-related errors."""

    pass


class RegistryError(ConfigurationError):
    """Exception raised for handler registration or lookup problems."""

    pass


class UnknownHandlerError(RegistryError, KeyError):
    """Exception raised when a handler identifier cannot be resolved.

    Unlike a decline, this means the dispatcher was asked to try a handler
    that does not exist, which is a programming error.

    Note: This exception inherits from both KeyError and RegistryError
    so that mapping-style lookups can still be caught with ``KeyError``.

    Attributes:
        namespace: The handler namespace the lookup was made in
        name: The identifier that was not found
        available: Identifiers registered under that namespace
    """

    def __init__(
        self,
        namespace: str,
        name: str,
        available: list[str] | None = None,
        *args: Any,
        **kwargs: Any,
    ):
        self.namespace = namespace
        self.name = name
        self.available = available or []
        message = (
            f"Handler '{name}' is not registered under namespace '{namespace}'. "
            f"Available handlers: {', '.join(self.available) or '(none)'}"
        )
        super().__init__(message, *args, **kwargs)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])

    def __reduce__(self):
        return (
            type(self),
            (self.namespace, self.name, self.available, *self.args[1:]),
            self.__dict__,
        )


class DefaultExceptionError(ConfigurationError):
    """Exception raised when a callable ``default_exception`` fails to raise."""

    def __init__(self, factory: Any, returned: Any, *args: Any, **kwargs: Any):
        self.factory = factory
        self.returned = returned
        message = (
            f"default_exception {factory!r} returned {returned!r} "
            f"instead of raising an exception"
        )
        super().__init__(message, *args, **kwargs)

    def __reduce__(self):
        return (
            type(self),
            (self.factory, self.returned, *self.args[1:]),
            self.__dict__,
        )
