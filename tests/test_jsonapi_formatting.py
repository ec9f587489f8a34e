import datetime
import decimal
import uuid
from collections import OrderedDict
from http import HTTPStatus

import pytest
from flask import Flask

from webadmin import GenericError, JsonapiResponse, WebAdminJSONProvider
from webadmin.jsonapi_formatting import jsonapi_format_collection, jsonapi_format_instance, jsonapi_format_response


def test_format_instance():
    result = jsonapi_format_instance("fooID", "foo", {"a1": "v1", "a2": 2})

    assert result.status_code == HTTPStatus.OK
    assert result.to_dict() == {"data": {"id": "fooID", "type": "foo", "attributes": {"a1": "v1", "a2": 2}}}


def test_format_instance_not_found():
    result = jsonapi_format_instance("dont_find_me", "foo", None)

    assert result.status_code == HTTPStatus.NOT_FOUND
    assert result.is_empty
    assert result.to_dict() is None


def test_format_instance_empty_attributes():
    result = jsonapi_format_instance("1", "foo", {})

    assert result.status_code == HTTPStatus.OK
    assert result.to_dict() == {"data": {"id": "1", "type": "foo", "attributes": {}}}


def test_format_instance_id_is_a_string():
    result = jsonapi_format_instance(300, "foo", {"n": 300})

    assert result.to_dict()["data"]["id"] == "300"
    assert result.to_dict()["data"]["attributes"]["n"] == 300


def test_singular_flag_with_one_item():
    assert jsonapi_format_response("t", {"a": {"x": 1}}, True) == {"data": {"id": "a", "type": "t", "attributes": {"x": 1}}}


def test_collection_flag_with_one_item():
    assert jsonapi_format_response("t", {"a": {"x": 1}}, False) == {"data": [{"id": "a", "type": "t", "attributes": {"x": 1}}]}


def test_collection_keeps_item_order():
    items = OrderedDict((str(i), {"i": i}) for i in (5, 3, 9, 1))

    result = jsonapi_format_response("t", items, False)

    assert [item["id"] for item in result["data"]] == ["5", "3", "9", "1"]
    assert all(item["type"] == "t" for item in result["data"])


def test_singular_flag_with_several_items_uses_the_first():
    result = jsonapi_format_response("t", {"b": {}, "a": {}}, True)

    assert result == {"data": {"id": "b", "type": "t", "attributes": {}}}


@pytest.mark.parametrize("items", [None, {}])
def test_no_items_singular(items):
    assert jsonapi_format_response("t", items, True) == {}
    assert jsonapi_format_collection("t", items, True).to_dict() == {}


@pytest.mark.parametrize("items", [None, {}])
def test_no_items_collection_is_an_empty_array(items):
    assert jsonapi_format_response("t", items, False) == {"data": []}
    assert jsonapi_format_collection("t", items, False).to_dict() == {"data": []}


def test_attributes_are_not_copied():
    attributes = {"nested": {"list": [1, "2", 3.0]}}

    result = jsonapi_format_response("t", {"a": attributes}, True)

    assert result["data"]["attributes"] is attributes


def test_invalid_attributes():
    with pytest.raises(GenericError):
        jsonapi_format_response("t", {"a": ["not", "a", "mapping"]}, False)


def test_json_provider():
    app = Flask("json_test")
    provider = WebAdminJSONProvider(app)
    attributes = {
        "z": 1,
        "created": datetime.datetime(2020, 1, 2, 3, 4, 5),
        "day": datetime.date(2020, 1, 2),
        "uid": uuid.UUID("12345678-1234-5678-1234-567812345678"),
        "price": decimal.Decimal("1.5"),
        "tags": {"x"},
        "raw": b"\x01\x02",
    }

    result = provider.loads(provider.dumps(attributes))

    assert list(result) == list(attributes)  # key order is kept
    assert result["z"] == 1
    assert result["created"] == "2020-01-02 03:04:05"
    assert result["day"] == "2020-01-02"
    assert result["uid"] == "12345678-1234-5678-1234-567812345678"
    assert result["price"] == 1.5
    assert result["tags"] == ["x"]
    assert result["raw"] == "0102"


def test_json_provider_unknown_type():
    provider = WebAdminJSONProvider(Flask("json_test"))

    with pytest.raises(TypeError):
        provider.dumps({"obj": object()})


def test_json_provider_response_object():
    provider = WebAdminJSONProvider(Flask("json_test"))

    assert provider.loads(provider.dumps(JsonapiResponse({"data": []}))) == {"data": []}
