"""Handler registry.

Maps (namespace, name) pairs to handler factories. A dispatcher resolves its
short handler identifiers against a registry that has already been populated,
either with ``register_handler`` or by ``load_classes``.
"""

from __future__ import annotations

import logging
from typing import Any

from response_switch.core.exceptions import RegistryError, UnknownHandlerError
from response_switch.core.protocols import HandlerFactory

logger = logging.getLogger(__name__)

HandlerFactoryType = HandlerFactory[Any]


class HandlerRegistry:
    """Central registry for response handlers.

    Example:
        >>> registry = HandlerRegistry()
        >>> registry.register("myproject.web_response", "LoginForm", LoginForm)
        >>> factory = registry.get_handler("myproject.web_response", "LoginForm")
        >>> factory(http_response).handle()
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._factories: dict[tuple[str, str], HandlerFactoryType] = {}

    def register(
        self,
        namespace: str,
        name: str,
        factory: HandlerFactoryType,
    ) -> None:
        """Register a handler factory under a namespace.

        Args:
            namespace: Namespace the dispatcher will look the handler up in
            name: Short identifier of the handler within that namespace
            factory: ``Handler`` subclass or callable taking the response

        Raises:
            RegistryError: If a different factory is already registered
                under the same namespace and name
        """
        if not callable(factory):
            raise RegistryError(f"Handler factory {factory!r} is not callable")

        key = (namespace, name)
        existing = self._factories.get(key)
        if existing is factory:
            return
        if existing is not None:
            raise RegistryError(
                f"Handler '{name}' is already registered under namespace "
                f"'{namespace}' as {existing!r}"
            )

        self._factories[key] = factory
        logger.debug(f"Registered handler {namespace}.{name}")

    def unregister(self, namespace: str, name: str) -> None:
        """Remove a handler, raising ``UnknownHandlerError`` if absent."""
        try:
            del self._factories[(namespace, name)]
        except KeyError:
            raise UnknownHandlerError(
                namespace, name, self.list_handlers(namespace)
            ) from None

    def get_handler(self, namespace: str, name: str) -> HandlerFactoryType:
        """Resolve a handler identifier to its factory.

        Args:
            namespace: Namespace configured on the dispatcher
            name: Short handler identifier

        Returns:
            The registered factory

        Raises:
            UnknownHandlerError: If nothing is registered under that name
        """
        try:
            return self._factories[(namespace, name)]
        except KeyError:
            raise UnknownHandlerError(
                namespace, name, self.list_handlers(namespace)
            ) from None

    def is_registered(self, namespace: str, name: str) -> bool:
        return (namespace, name) in self._factories

    def list_handlers(self, namespace: str) -> list[str]:
        """List the identifiers registered under a namespace."""
        return sorted(n for ns, n in self._factories if ns == namespace)

    def find(self, namespace: str, factory: HandlerFactoryType) -> list[str]:
        """Identifiers under which ``factory`` is registered in a namespace."""
        return sorted(
            n
            for (ns, n), f in self._factories.items()
            if ns == namespace and f is factory
        )

    def list_namespaces(self) -> list[str]:
        return sorted({ns for ns, _ in self._factories})

    def clear(self) -> None:
        self._factories.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)


# Global registry instance
handler_registry = HandlerRegistry()
