import json
import logging
from types import SimpleNamespace

import pytest
from flask import Flask

from webadmin import AbstractResource, CustomRoute, ResourceMethod, url_param


class FooResource(AbstractResource):
    """
    description: Foo test resource
    """

    def __init__(self):
        super().__init__("foo", [ResourceMethod.GET_LIST, ResourceMethod.GET_DETAIL])

    def get_single(self, request):
        return "fooID", {"a1": "v1", "a2": 2}

    def get_by_id(self, request, id):
        """
        summary: Retrieve a foo
        ---
        returns None for dont_find_me
        """
        if id == "dont_find_me":
            return None

        return {"got_id": id}

    def get_custom_routes(self):
        return {
            "/{id}/single": CustomRoute("GET", self.get_custom_single),
            "/{id}/multi": CustomRoute("GET", self.get_custom_multi),
            "/post": CustomRoute("POST", self.post_custom),
        }

    def get_custom_single(self, request):
        resource_id = url_param(request, "id")

        return "getCustomSingle", {resource_id: {"a": "b", "c": "d"}}, True

    def get_custom_multi(self, request):
        resource_id = url_param(request, "id")

        return "getCustomMulti", {resource_id: {"a": "b", "c": "d"}, resource_id + "-1": {"e": "f"}}, False

    def post_custom(self, request):
        return "postCustom", None, True, None


@pytest.fixture
def logger():
    return logging.getLogger("webadmin.test")


@pytest.fixture
def processor():
    # only the presence of the owning process matters to the resources
    return SimpleNamespace(name="test-processor")


@pytest.fixture
def app():
    app = Flask("webadmin_test")
    app.config["TESTING"] = True
    app.url_map.strict_slashes = False
    return app


@pytest.fixture
def foo_resource(app, logger, processor):
    resource = FooResource()
    resource.initialize(logger, processor)
    resource.mount(app)
    return resource


@pytest.fixture
def client(app, foo_resource):
    return app.test_client()


def decode(response):
    return json.loads(response.get_data(as_text=True))
