"""Tests for bulk loading of handler packages."""

import sys
import textwrap
import uuid

import pytest

from response_switch import (
    ConfigurationError,
    RegistryError,
    UnexpectedResponseError,
    UnknownHandlerError,
    load_classes,
    load_handlers,
)

HANDLER_MODULES = {
    "__init__.py": "",
    "raw_data.py": """
        from response_switch import Handler


        class RawDataPage(Handler):
            def handle(self):
                if self.response.content_type != "text/csv":
                    self.decline()
                return self.response.content.splitlines()
    """,
    "session/__init__.py": "",
    "session/login.py": """
        from response_switch import Handler

        from ..errors import NotLoggedIn


        class LoginForm(Handler):
            def handle(self):
                if "login" not in self.response.content:
                    self.decline()
                raise NotLoggedIn()
    """,
    "errors.py": """
        from response_switch import Handler


        class NotLoggedIn(Exception):
            pass


        class BadWebResponse(Exception):
            def __init__(self, response):
                self.response = response
                super().__init__("bad web response")


        class BaseHandler(Handler):
            # Abstract; never registered
            pass
    """,
    "aliases.py": """
        from response_switch import Handler

        from .raw_data import RawDataPage


        class Maintenance(Handler):
            handler_name = "MaintenancePage"

            def handle(self):
                if "maintenance" not in self.response.content:
                    self.decline()
                return {"maintenance": True}
    """,
}


@pytest.fixture
def handler_package(tmp_path, monkeypatch):
    """Write an importable handler package and return its name."""

    def _write(modules=HANDLER_MODULES):
        name = f"web_response_{uuid.uuid4().hex}"
        root = tmp_path / name
        for path, source in modules.items():
            target = root / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source))
        monkeypatch.syspath_prepend(str(tmp_path))
        return name

    yield _write

    for module in list(sys.modules):
        if module.startswith("web_response_"):
            del sys.modules[module]


def test_load_classes_registers_handlers(handler_package, make_switch, registry):
    namespace = handler_package()
    switch = make_switch(namespace)

    registered = switch.load_classes()

    assert sorted(registered) == ["LoginForm", "MaintenancePage", "RawDataPage"]
    assert registry.list_handlers(namespace) == [
        "LoginForm",
        "MaintenancePage",
        "RawDataPage",
    ]


def test_imported_names_are_not_registered_twice(
    handler_package, make_switch, registry
):
    namespace = handler_package()
    make_switch(namespace).load_classes()

    raw_data_page = registry.get_handler(namespace, "RawDataPage")
    assert raw_data_page.__module__ == f"{namespace}.raw_data"
    assert registry.find(namespace, raw_data_page) == ["RawDataPage"]


def test_load_classes_is_idempotent(handler_package, make_switch, registry):
    namespace = handler_package()
    switch = make_switch(namespace)

    switch.load_classes()
    assert switch.load_classes() == []


def test_dispatch_after_loading(handler_package, make_switch, make_response):
    namespace = handler_package()
    switch = make_switch(namespace, default_handlers=("LoginForm",))
    switch.load_classes()

    csv_response = make_response("text/csv", "a,b\nc,d")
    assert switch.handle(csv_response, "RawDataPage") == ["a,b", "c,d"]

    maintenance = make_response("text/html", "down for maintenance")
    assert switch.handle(maintenance, "RawDataPage", "MaintenancePage") == {
        "maintenance": True
    }

    login = make_response("text/html", "please login")
    errors = sys.modules[f"{namespace}.errors"]
    with pytest.raises(errors.NotLoggedIn):
        switch.handle(login, "RawDataPage")

    with pytest.raises(UnexpectedResponseError):
        switch.handle(make_response("text/html", "?"), "RawDataPage")


def test_string_default_exception_is_resolved(
    handler_package, make_switch, make_response
):
    namespace = handler_package()
    switch = make_switch(namespace, default_exception=f"{namespace}.errors.BadWebResponse")
    load_classes(switch)

    errors = sys.modules[f"{namespace}.errors"]
    response = make_response("text/html", "?")
    with pytest.raises(errors.BadWebResponse) as exc_info:
        switch.handle(response, "RawDataPage")
    assert exc_info.value.response is response


@pytest.mark.parametrize(
    "path, message",
    [
        ("BadWebResponse", "dotted path"),
        ("{namespace}.errors.Missing", "Cannot import"),
        ("{namespace}.nowhere.BadWebResponse", "Cannot import"),
        ("{namespace}.raw_data.RawDataPage", "does not name an exception"),
    ],
)
def test_bad_default_exception_path(handler_package, make_switch, path, message):
    namespace = handler_package()
    switch = make_switch(namespace, default_exception=path.format(namespace=namespace))

    with pytest.raises(ConfigurationError, match=message):
        switch.load_classes()


def test_unresolved_default_handler_fails_at_load(handler_package, make_switch):
    namespace = handler_package()
    switch = make_switch(namespace, default_handlers=("LoginForm", "Missing"))

    with pytest.raises(UnknownHandlerError) as exc_info:
        switch.load_classes()
    assert exc_info.value.name == "Missing"


def test_missing_namespace(make_switch):
    switch = make_switch("no_such_package_for_switch_tests")
    with pytest.raises(ConfigurationError, match="Cannot import handler namespace"):
        switch.load_classes()


def test_conflicting_handler_names(handler_package, make_switch):
    modules = dict(HANDLER_MODULES)
    modules["duplicate.py"] = """
        from response_switch import Handler


        class RawDataPage(Handler):
            def handle(self):
                return "duplicate"
    """
    namespace = handler_package(modules)

    with pytest.raises(RegistryError, match="already registered"):
        make_switch(namespace).load_classes()


def test_load_handlers_is_deprecated(handler_package, make_switch, registry):
    namespace = handler_package()
    switch = make_switch(namespace)

    with pytest.warns(DeprecationWarning, match="load_classes") as record:
        switch.load_handlers()
    assert registry.is_registered(namespace, "RawDataPage")
    assert record[0].filename == __file__

    with pytest.warns(DeprecationWarning) as record:
        load_handlers(switch)
    assert record[0].filename == __file__
