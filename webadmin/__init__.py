# flake8: noqa: F401
#
# Declarative JSON:API resources, exposed as flask-restful blueprints
#
from .webadmin_init import WebAdmin, log
from .errors import JsonapiError, NotFoundError, GenericError, MisconfiguredResourceError
from .resource_types import ResourceMethod, ResourceState, CustomRoute
from .json_encoder import WebAdminJSONProvider, JsonapiResponse
from .jsonapi_formatting import jsonapi_format_response, jsonapi_format_instance
from .resource import AbstractResource, url_param
from .server import WebAdminServer
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "WebAdmin",
    "WebAdminServer",
    "log",
    # resources:
    "AbstractResource",
    "ResourceMethod",
    "ResourceState",
    "CustomRoute",
    "url_param",
    # jsonapi:
    "WebAdminJSONProvider",
    "JsonapiResponse",
    "jsonapi_format_response",
    "jsonapi_format_instance",
    # Errors:
    "JsonapiError",
    "NotFoundError",
    "GenericError",
    "MisconfiguredResourceError",
)
