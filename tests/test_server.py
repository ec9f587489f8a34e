from http import HTTPStatus

import pytest

import webadmin
from webadmin import MisconfiguredResourceError, ResourceState, WebAdminServer
from webadmin.config import get_config, is_debug
from webadmin.server import parse_listen_address
from webadmin.swagger_doc import parse_object_doc
from conftest import FooResource, decode


@pytest.fixture
def server(processor, logger):
    server = WebAdminServer(processor, logger=logger, TESTING=True, WEBADMIN_LISTEN_ADDRESS="127.0.0.1:0")
    server.register_resource(FooResource())
    yield server
    server.stop()


def test_register_resource(server, processor, logger):
    resource = server.resources["foo"]

    assert resource.state is ResourceState.MOUNTED
    assert resource.processor is processor
    assert resource.logger is logger


def test_register_duplicate_name(server):
    with pytest.raises(MisconfiguredResourceError):
        server.register_resource(FooResource())


def test_server_routes(server):
    client = server.app.test_client()

    assert decode(client.get("/foo"))["data"]["id"] == "fooID"
    assert client.get("/foo/dont_find_me").status_code == HTTPStatus.NOT_FOUND
    assert decode(client.post("/foo/post")) == {}


def test_swagger_doc(server):
    doc = server.get_swagger_doc()

    assert doc["swagger"] == "2.0"
    assert doc["info"]["version"] == webadmin.__version__
    assert doc["tags"] == [{"name": "foo", "description": "Foo test resource"}]
    assert set(doc["paths"]) == {"/foo", "/foo/{id}", "/foo/{id}/single", "/foo/{id}/multi", "/foo/post"}
    assert list(doc["paths"]["/foo/post"]) == ["post"]

    detail = doc["paths"]["/foo/{id}"]["get"]
    assert detail["summary"] == "Retrieve a foo"
    assert detail["parameters"] == [{"name": "id", "in": "path", "type": "string", "required": True}]
    assert "404" in detail["responses"]
    assert "404" not in doc["paths"]["/foo"]["get"]["responses"]


def test_swagger_endpoint(server):
    response = server.app.test_client().get("/swagger.json")

    assert response.status_code == HTTPStatus.OK
    assert "/foo/{id}" in decode(response)["paths"]


def test_swagger_ui_disabled(processor):
    server = WebAdminServer(processor, SWAGGER_UI=False)

    assert "swagger_ui" not in server.app.blueprints


def test_parse_object_doc():
    def yaml_doc():
        """
        summary: a summary
        description: a description
        ---
        not: parsed
        """

    def text_doc():
        """Just text"""

    def no_doc():
        pass

    assert parse_object_doc(yaml_doc) == {"summary": "a summary", "description": "a description"}
    assert parse_object_doc(text_doc) == {"description": "Just text"}
    assert parse_object_doc(no_doc) == {}


def test_start_stop(server):
    server.start()
    assert server.is_running

    with pytest.raises(MisconfiguredResourceError):
        server.start()

    server.stop()
    assert not server.is_running


def test_start_disabled(processor):
    server = WebAdminServer(processor, WEBADMIN_ENABLED=False)
    server.start()

    assert not server.is_running


@pytest.mark.parametrize(
    "listen_address, expected",
    [(":8081", ("0.0.0.0", 8081)), ("127.0.0.1:9000", ("127.0.0.1", 9000)), ("localhost:0", ("localhost", 0))],
)
def test_parse_listen_address(listen_address, expected):
    assert parse_listen_address(listen_address) == expected


@pytest.mark.parametrize("listen_address", ["8081", "host:port"])
def test_parse_invalid_listen_address(listen_address):
    with pytest.raises(MisconfiguredResourceError):
        parse_listen_address(listen_address)


def test_get_config_defaults(monkeypatch):
    monkeypatch.delenv("WEBADMIN_LISTEN_ADDRESS", raising=False)

    assert get_config("WEBADMIN_LISTEN_ADDRESS") == ":8081"
    assert get_config("UNKNOWN_OPTION") is None


def test_get_config_environment(monkeypatch):
    monkeypatch.setenv("WEBADMIN_ENABLED", "false")
    monkeypatch.setenv("WEBADMIN_LISTEN_ADDRESS", ":9999")

    assert get_config("WEBADMIN_ENABLED") is False
    assert get_config("WEBADMIN_LISTEN_ADDRESS") == ":9999"


def test_get_config_app_config_first(monkeypatch, processor):
    monkeypatch.setenv("WEBADMIN_LISTEN_ADDRESS", ":9999")
    server = WebAdminServer(processor, WEBADMIN_LISTEN_ADDRESS=":7777")

    assert server.get_config("WEBADMIN_LISTEN_ADDRESS") == ":7777"


def test_is_debug(monkeypatch):
    monkeypatch.setattr(webadmin.log, "level", 10)
    assert is_debug()
