"""Protocol definitions for handlers and fallback exception factories.

Defines the structural interfaces the dispatcher relies on, so that handler
factories need not inherit from ``Handler``.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

R_contra = TypeVar("R_contra", contravariant=True)


@runtime_checkable
class ResponseHandler(Protocol):
    """An object bound to one response that either handles it or declines."""

    def handle(self) -> Any:
        """Handle the bound response.

        Returns:
            Any structured data; returning at all means the response was handled

        Raises:
            HandlerDeclinedResponse: If the response is not this handler's concern
        """
        ...


class HandlerFactory(Protocol[R_contra]):
    """Builds a ``ResponseHandler`` for a single response.

    A ``Handler`` subclass satisfies this protocol, as does any function
    taking the response and returning an object with ``handle()``.
    """

    def __call__(self, response: R_contra) -> ResponseHandler: ...


class ExceptionFactory(Protocol):
    """Raises (or returns) the exception for a response nothing recognised."""

    def __call__(self, response: Any) -> BaseException: ...
