"""Base class for handlers that deal with one specific kind of response."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, NoReturn, TypeVar

from .exceptions import HandlerDeclinedResponse

R = TypeVar("R")


class Handler(ABC, Generic[R]):
    """Recognise and react to one particular kind of response.

    A handler is constructed with a single response and asked to ``handle``
    it. It should look at the response with one concern in mind and either:

    - return structured data (any value, including ``None``);
    - raise a domain-specific exception for a recognised but undesired
      response, such as a login page; or
    - call ``decline`` so the dispatcher can try the next handler.

    Example:
        >>> class RawDataPage(Handler):
        ...     def handle(self):
        ...         if self.response.content_type != "text/csv":
        ...             self.decline()
        ...         return parse_csv(self.response.content)

    Class attributes:
        handler_name: Identifier used when registering the class; defaults
            to the class name
        response_type: If set, construction rejects responses of other types
    """

    handler_name: ClassVar[str | None] = None
    response_type: ClassVar[type | tuple[type, ...] | None] = None

    def __init__(self, response: R) -> None:
        if self.response_type is not None and not isinstance(
            response, self.response_type
        ):
            raise TypeError(
                f"{type(self).__name__} expects a response of type "
                f"{self.response_type!r}, got {type(response).__name__}"
            )
        self._response = response

    @property
    def response(self) -> R:
        """The response to analyse."""
        return self._response

    @classmethod
    def get_handler_name(cls) -> str:
        return cls.handler_name or cls.__name__

    @abstractmethod
    def handle(self) -> Any:
        """Handle the response, raise a domain exception, or ``decline``.

        If this method returns without error, even with ``None``, the
        response is deemed handled and no further handlers are tried.
        """
        pass

    def decline(self) -> NoReturn:
        """Indicate that this handler cannot handle this response.

        Raises ``HandlerDeclinedResponse`` unconditionally, which stops the
        rest of ``handle`` from running.
        """
        raise HandlerDeclinedResponse()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(response={self._response!r})"
