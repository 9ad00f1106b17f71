"""Decorator utilities for handler registration."""

from __future__ import annotations

from response_switch.core.registry import HandlerRegistry, handler_registry


def register_handler(
    namespace: str,
    name: str | None = None,
    registry: HandlerRegistry | None = None,
):
    """Decorator to register a handler class under a namespace.

    The decorated class must accept the response as its only constructor
    argument and implement ``handle()``.

    Args:
        namespace: Namespace the dispatcher resolves identifiers in
        name: Identifier to register under; defaults to the class's
            ``handler_name`` or its ``__name__``
        registry: Registry to use; defaults to the global ``handler_registry``

    Returns:
        Decorator function

    Example:
        >>> @register_handler("myproject.web_response")
        ... class LoginForm(Handler):
        ...     def handle(self):
        ...         if "login" not in self.response.text:
        ...             self.decline()
        ...         raise NotLoggedIn()
    """

    def decorator(handler_class: type) -> type:
        """Register the handler class."""
        handler_name = (
            name or getattr(handler_class, "handler_name", None) or handler_class.__name__
        )
        target = registry if registry is not None else handler_registry
        target.register(namespace, handler_name, handler_class)
        return handler_class

    return decorator
