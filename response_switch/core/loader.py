"""Bulk loading of handler modules for a dispatcher.

``Switch.handle`` never imports anything, so every handler module under a
dispatcher's ``handler_namespace`` must be imported and registered before the
first response is dispatched. Call ``load_classes`` once, at import time of
the module defining the dispatcher:

    class WebResponses(Switch):
        handler_namespace = "myproject.web_response"

    WebResponses.load_classes()
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import warnings
from types import ModuleType
from typing import TYPE_CHECKING

from response_switch.core.exceptions import ConfigurationError
from response_switch.core.handler import Handler

if TYPE_CHECKING:
    from response_switch.core.switch import Switch

logger = logging.getLogger(__name__)

LOAD_HANDLERS_DEPRECATION = (
    "'load_handlers' is deprecated and will be removed in a future release. "
    "Use 'load_classes' instead, which also loads default_exception."
)


def _import_namespace(namespace: str) -> list[ModuleType]:
    """Import a package and every module beneath it."""
    try:
        package = importlib.import_module(namespace)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import handler namespace '{namespace}': {e}"
        ) from e

    modules = [package]
    if hasattr(package, "__path__"):
        for info in pkgutil.walk_packages(package.__path__, prefix=f"{namespace}."):
            modules.append(importlib.import_module(info.name))
    return modules


def _handler_classes(module: ModuleType) -> list[type[Handler]]:
    """Concrete ``Handler`` subclasses defined (not just imported) in a module."""
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__
        and issubclass(obj, Handler)
        and not inspect.isabstract(obj)
    ]


def import_exception(path: str) -> type[BaseException]:
    """Import an exception class from a dotted ``module.ClassName`` path."""
    module_path, _, attr = path.rpartition(".")
    if not module_path:
        raise ConfigurationError(
            f"default_exception '{path}' must be a dotted path to an exception class"
        )

    try:
        exc = getattr(importlib.import_module(module_path), attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import default_exception '{path}': {e}") from e

    if not (isinstance(exc, type) and issubclass(exc, BaseException)):
        raise ConfigurationError(
            f"default_exception '{path}' does not name an exception class"
        )
    return exc


def load_classes(switch_cls: type[Switch]) -> list[str]:
    """Load all handlers for a dispatcher and check its configuration.

    Imports every module under the dispatcher's ``handler_namespace`` and
    registers each concrete ``Handler`` subclass found there under its
    ``handler_name`` (or class name), unless the class is already registered
    in that namespace. Also imports ``default_exception`` if it is given as a
    dotted path, and checks that every ``default_handlers`` entry resolves.

    Args:
        switch_cls: The ``Switch`` subclass to load handlers for

    Returns:
        Identifiers newly registered by this call

    Raises:
        ConfigurationError: If the namespace or exception cannot be imported
        RegistryError: If two handler classes claim the same identifier
        UnknownHandlerError: If a default handler is still unresolved
    """
    config = switch_cls.get_config()
    namespace = config.handler_namespace
    registry = switch_cls.handler_registry

    registered: list[str] = []
    for module in _import_namespace(namespace):
        for handler_class in _handler_classes(module):
            if registry.find(namespace, handler_class):
                continue
            name = handler_class.get_handler_name()
            registry.register(namespace, name, handler_class)
            registered.append(name)

    if isinstance(config.default_exception, str):
        switch_cls._resolved_exception = (
            config.default_exception,
            import_exception(config.default_exception),
        )

    for name in config.default_handlers:
        registry.get_handler(namespace, name)

    logger.debug(
        f"Loaded {len(registered)} handler(s) for {switch_cls.__qualname__} "
        f"from {namespace}"
    )
    return registered


def load_handlers(switch_cls: type[Switch]) -> list[str]:
    """Deprecated alias for ``load_classes``."""
    warnings.warn(LOAD_HANDLERS_DEPRECATION, DeprecationWarning, stacklevel=2)
    return load_classes(switch_cls)
