#
# Functions for api documentation: the swagger spec is generated from the mounted resource routes
# The handler docstrings may contain a yaml description, eg.
#
#    def get_by_id(self, request, id):
#        """
#        summary: Retrieve a trigger
#        description: Retrieve the trigger configuration
#        ---
#        Regular documentation, not shown in the swagger
#        """
#
import inspect
from http import HTTPStatus
import yaml
import webadmin
from .config import get_config
from .resource_types import URL_PARAM_RE, ResourceMethod
from typing import Any, Callable, Dict, Iterable

DOC_DELIMITER = "---"  # used as delimiter between the yaml spec and regular documentation
SWAGGER_VERSION = "2.0"


# pylint: disable=redefined-builtin
def parse_object_doc(object: Callable) -> Dict[str, Any]:
    """
    Parse the yaml description from the documented methods
    """
    api_doc = {}
    # __doc__ instead of inspect.getdoc: docstrings of base classes are not inherited
    if not object.__doc__:
        return api_doc
    raw_doc = inspect.cleandoc(object.__doc__).split(DOC_DELIMITER)[0]
    yaml_doc = None

    try:
        yaml_doc = yaml.safe_load(raw_doc)
    except yaml.YAMLError as exc:
        webadmin.log.error(f"Failed to parse documentation {raw_doc} ({exc})")
        yaml_doc = {"description": raw_doc}

    if isinstance(yaml_doc, dict):
        api_doc.update(yaml_doc)
    elif isinstance(yaml_doc, str):
        api_doc["description"] = yaml_doc

    return api_doc


def swagger_path_parameters(path: str) -> list:
    """
    :param path: swagger path, eg. /triggers/{id}/stats
    :return: swagger parameter objects for the {} placeholders in the path
    """
    result = []
    for param_name in URL_PARAM_RE.findall(path):
        result.append({"name": param_name, "in": "path", "type": "string", "required": True})
    return result


def swagger_operation_doc(resource, route) -> Dict[str, Any]:
    """
    :param resource: AbstractResource
    :param route: ResourceRoute
    :return: swagger operation object
    """
    responses = {str(HTTPStatus.OK.value): {"description": HTTPStatus.OK.phrase}}
    if route.resource_method is ResourceMethod.GET_DETAIL:
        responses[str(HTTPStatus.NOT_FOUND.value)] = {"description": HTTPStatus.NOT_FOUND.phrase}
    responses[str(HTTPStatus.INTERNAL_SERVER_ERROR.value)] = {"description": "Internal Server Error"}

    operation = {
        "tags": [resource.name],
        "operationId": route.endpoint,
        "summary": route.endpoint,
        "produces": [get_config("JSONAPI_MEDIA_TYPE")],
        "parameters": swagger_path_parameters(route.path),
        "responses": responses,
    }
    handler_doc = parse_object_doc(route.handler)
    for key in ("summary", "description"):
        if key in handler_doc:
            operation[key] = handler_doc[key]
    return operation


def swagger_doc(resources: Iterable, title: str = "webadmin", version: str = "") -> Dict[str, Any]:
    """
    Create the swagger document for the mounted resources
    :param resources: AbstractResource instances
    :return: swagger spec dict
    """
    paths = {}
    tags = []
    for resource in resources:
        tag = {"name": resource.name}
        tag.update(parse_object_doc(type(resource)))
        tags.append(tag)
        for route in resource.routes:
            path = "/" + resource.name + route.path
            path_item = paths.setdefault(path, {})
            path_item[route.http_method.lower()] = swagger_operation_doc(resource, route)

    return {
        "swagger": SWAGGER_VERSION,
        "info": {"title": title, "version": version or webadmin.__version__},
        "tags": tags,
        "paths": paths,
    }
