# webadmin to json encoding

import datetime
import decimal
from flask import current_app, make_response
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import webadmin
from .config import get_config, is_debug
from typing import Any, Optional


class JsonapiResponse:
    """
    Encoded handler output: the jsonapi document and the HTTP status
    A document of None means the response has no body (f.i. a 404)
    """

    # pylint: disable=too-few-public-methods
    def __init__(self, document: Optional[dict] = None, status_code: int = 200) -> None:
        self.document = document
        self.status_code = status_code

    @property
    def is_empty(self) -> bool:
        return self.document is None

    def to_dict(self):
        """
        create the response payload that will be sent to the browser
        :return: dict or None
        """
        return self.document


class _WebAdminJSONEncoder:
    """
    JSON encoding for the attribute values that json can't handle natively,
    json native values (str, int, float, bool, None, list, dict) are not passed here
    """

    # pylint: disable=too-many-return-statements
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, JsonapiResponse):
            return obj.to_dict()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            webadmin.log.debug("WebAdminJSONEncoder: serializing bytes obj")
            return obj.hex()

        if is_debug():
            webadmin.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class WebAdminJSONProvider(_WebAdminJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding, attribute key order is kept as supplied by the handlers
    """

    mimetype = "application/vnd.api+json"
    sort_keys = False


def output_jsonapi(data, code, headers=None):
    """
    flask-restful representation: serialize data with the app json provider
    """
    body = current_app.json.dumps(data)
    response = make_response(body, code)
    response.headers.extend(headers or {})
    response.headers["Content-Type"] = get_config("JSONAPI_MEDIA_TYPE")
    return response
