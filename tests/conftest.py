# conftest.py
from dataclasses import dataclass, field

import pytest

from response_switch import Handler, HandlerRegistry


@dataclass(frozen=True)
class FakeResponse:
    """Minimal stand-in for an HTTP response."""

    content_type: str = "text/html"
    content: str = ""
    headers: dict = field(default_factory=dict)


@pytest.fixture
def registry():
    """A fresh registry so tests never touch the global one."""
    return HandlerRegistry()


@pytest.fixture
def calls():
    """Records the name of every handler constructed, in order."""
    return []


@pytest.fixture
def make_handler(calls):
    """Build handler classes that record construction and behave as told.

    ``behaviour`` is "decline", an exception instance to raise, or any other
    value to return.
    """

    def _make(name, behaviour="decline"):
        def handle(self):
            if behaviour == "decline":
                self.decline()
            if isinstance(behaviour, BaseException):
                raise behaviour
            return behaviour

        def __init__(self, response):
            calls.append(name)
            Handler.__init__(self, response)

        return type(name, (Handler,), {"handle": handle, "__init__": __init__})

    return _make


@pytest.fixture
def html_page():
    return FakeResponse("text/html", "<html><body>Maintenance</body></html>")


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_switch(registry):
    """Build a ``Switch`` subclass bound to the test registry."""
    from response_switch import Switch

    def _make(namespace="tests.web_response", **attributes):
        attributes.setdefault("handler_registry", registry)
        return type(
            "WebResponses",
            (Switch,),
            {"handler_namespace": namespace, **attributes},
        )

    return _make
