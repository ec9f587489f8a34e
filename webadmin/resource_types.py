import re
from enum import Enum
from typing import Callable, NamedTuple

HTTP_METHODS = ["GET", "POST", "PATCH", "DELETE", "PUT"]

# {param} placeholders in route paths, eg. /{id}/stats
URL_PARAM_RE = re.compile(r"\{(\w+)\}")


class ResourceMethod(Enum):
    """
    The standard capabilities a resource can declare,
    each one is exposed on a fixed route (cfr. resource.RESOURCE_METHOD_ROUTES)
    """

    GET_LIST = "get_list"  # GET /<name>
    GET_DETAIL = "get_detail"  # GET /<name>/<id>


class ResourceState(Enum):
    CONSTRUCTED = "constructed"
    INITIALIZED = "initialized"
    MOUNTED = "mounted"


class CustomRoute(NamedTuple):
    """
    A route outside of the standard resource methods, f.i.

        "/{id}/single": CustomRoute("GET", self.get_custom_single)

    the handler is called with the flask request and returns
    (type label, {id: attributes}, singular)
    """

    http_method: str
    handler: Callable
