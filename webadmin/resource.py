#  This file contains the flask-restful "Resource" objects exposing an AbstractResource:
#  - ResourceListAPI for ResourceMethod.GET_LIST (GET /<name>)
#  - ResourceDetailAPI for ResourceMethod.GET_DETAIL (GET /<name>/<id>)
#  - CustomRouteAPI for the routes returned by get_custom_routes()
#
# The routes of a resource are added to a flask Blueprint, the host mounts it under /<name>:
#
#   resource.initialize(logger, processor)
#   app.register_blueprint(resource.router, url_prefix="/" + resource.name)
#
# pylint: disable=redefined-builtin,invalid-name,protected-access,logging-format-interpolation
#
import logging
from functools import wraps
from http import HTTPStatus
from typing import Any, Callable, Dict, Iterable, NamedTuple, Optional
import werkzeug
from flask import Blueprint, make_response as flask_make_response, request
from flask.app import Flask
from flask_restful import Api, Resource as FRSResource, abort
from flask_restful.utils import OrderedDict
import webadmin
from .config import get_config, is_debug
from .errors import GenericError, JsonapiError, MisconfiguredResourceError, HIDDEN_LOG
from .json_encoder import JsonapiResponse, WebAdminJSONProvider, output_jsonapi
from .jsonapi_formatting import jsonapi_format_collection, jsonapi_format_instance
from .jsonapi_types import Attributes, CustomRouteResult, OptionalAttributes
from .resource_types import HTTP_METHODS, URL_PARAM_RE, CustomRoute, ResourceMethod, ResourceState


def url_param(req: Any, name: str, default: Optional[str] = None) -> Optional[str]:
    """
    :param req: flask request
    :param name: name of the url path parameter, eg. "id" for "/{id}/single"
    :return: the value of the parameter in the matched url
    """
    view_args = getattr(req, "view_args", None) or {}
    return view_args.get(name, default)


def flask_rule(path: str) -> str:
    """
    :param path: route path with {} placeholders, eg. /{id}/single
    :return: werkzeug rule, eg. /<string:id>/single
    """
    return URL_PARAM_RE.sub(r"<string:\1>", path)


class ResourceRoute(NamedTuple):
    path: str  # relative to the mount point, with {} placeholders
    http_method: str
    handler: Callable
    endpoint: str
    resource_method: Optional[ResourceMethod] = None  # None for custom routes


def make_response(result: JsonapiResponse):
    """
    :param result: encoded handler output
    :return: flask-restful response value, an empty flask response if there's no document
    """
    if result.is_empty:
        return flask_make_response("", result.status_code)
    return result.to_dict(), result.status_code


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the route views:
    - an empty 404 is returned for NotFound exceptions
    - all other exceptions are logged and converted to a jsonapi error response

    Handler exceptions never reach flask, a failing handler doesn't affect other requests
    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(self, *args, **kwargs):
        """Wrap the method and perform error handling
        :param self: the view, a Resource instance
        :return: result of the wrapped method
        """
        resource = self.resource
        exception = None
        status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
        message = ""
        try:
            return fun(self, *args, **kwargs)

        except werkzeug.exceptions.NotFound:
            # this also catches webadmin.errors.NotFoundError
            resource.logger.debug("Not found: %s %s", request.method, request.path)
            return flask_make_response("", HTTPStatus.NOT_FOUND.value)

        except JsonapiError as exc:
            resource.logger.exception(
                "Handler failed (resource: %s, route: %s %s, path: %s)", resource.name, self.http_method, self.route_path, request.path
            )
            exception = exc

        except werkzeug.exceptions.HTTPException as exc:
            # raised on purpose by the handler (eg. flask.abort), the status code is kept
            status_code = exc.code
            message = exc.description
            resource.logger.error(f"{resource.name} {self.http_method} {self.route_path}: {status_code} {message}")

        except Exception as exc:
            resource.logger.exception(
                "Handler failed (resource: %s, route: %s %s, path: %s)", resource.name, self.http_method, self.route_path, request.path
            )
            exception = exc
            message = str(exc) if is_debug() else HIDDEN_LOG

        status_code = getattr(exception, "status_code", status_code)
        api_code = getattr(exception, "api_code", None) or status_code
        title = getattr(exception, "message", message)
        detail = getattr(exception, "detail", title)

        errors = dict(title=title, detail=detail, code=str(api_code))
        abort(status_code, errors=[errors])

    return method_wrapper


def api_decorator(cls):
    """Decorator for the route views: add generic exception handling to the HTTP methods
    :param cls: The class that will be decorated (e.g. ResourceListAPI)
    :return: decorated class
    """
    for http_method in HTTP_METHODS:
        method_name = http_method.lower()
        method = getattr(cls, method_name, None)
        if not method:
            continue
        setattr(cls, method_name, http_method_decorator(method))
    return cls


class Resource(FRSResource):
    """
    Superclass for the exposed routes
    * get representative : ResourceListAPI
    * get by id : ResourceDetailAPI
    * custom routes : CustomRouteAPI
    """

    # resource: the AbstractResource that implements the handlers
    resource = None
    route_path = None
    http_method = None


class ResourceListAPI(Resource):
    def get(self, **kwargs):
        """
        HTTP GET: return the resource representative,
        the handler returns the id and the attributes
        """
        resource_id, attributes = self.resource.get_single(request)
        if attributes is None:
            attributes = {}
        result = jsonapi_format_instance(resource_id, self.resource.name, attributes)
        return make_response(result)


class ResourceDetailAPI(Resource):
    def get(self, id=None, **kwargs):
        """
        HTTP GET: return the instance with the given id,
        the handler returns None if there's no such instance
        """
        attributes = self.resource.get_by_id(request, id)
        result = jsonapi_format_instance(id, self.resource.name, attributes)
        return make_response(result)


class CustomRouteAPI(Resource):
    """
    Route wrapper for a custom route handler, the view method name (get, post, ..)
    is set when the route is registered
    """

    custom_route = None

    def call_handler(self, **kwargs):
        """
        The url parameters are available to the handler through url_param(request, name)
        """
        result = self.custom_route.handler(request)
        resource_type, items, singular = self.parse_handler_result(result)
        return make_response(jsonapi_format_collection(resource_type, items, singular))

    def parse_handler_result(self, result) -> CustomRouteResult:
        """
        :param result: (type, items, singular) or (type, items, singular, error)
        :return: (type, items, singular)
        """
        if not isinstance(result, tuple) or len(result) not in (3, 4):
            raise GenericError(f"Invalid result for {self.resource.name} {self.http_method} {self.route_path}: {result!r}")
        if len(result) == 4:
            error = result[3]
            if error is not None:
                raise error
            result = result[:3]
        return result


# ResourceMethod -> (http method, route path, view class, handler name)
RESOURCE_METHOD_ROUTES = {
    ResourceMethod.GET_LIST: ("GET", "", ResourceListAPI, "get_single"),
    ResourceMethod.GET_DETAIL: ("GET", "/{id}", ResourceDetailAPI, "get_by_id"),
}

DEFAULT_REPRESENTATIONS = [("application/vnd.api+json", output_jsonapi)]


class AbstractResource:
    """
    Base class for the resources exposed in the web admin

    Subclasses declare a name and the standard methods they support
    and implement the corresponding handlers:

        class TriggersResource(AbstractResource):
            def __init__(self):
                super().__init__("triggers", [ResourceMethod.GET_LIST, ResourceMethod.GET_DETAIL])

            def get_single(self, request):
                return "triggers", {"count": 3}

            def get_by_id(self, request, id):
                return self.triggers.get(id)  # None => 404

            def get_custom_routes(self):
                return {"/{id}/stats": CustomRoute("GET", self.get_stats)}

    The resource is initialized once with its dependencies (initialize),
    after which the router blueprint can be mounted once in a flask app (mount)
    """

    def __init__(self, name: str, resource_methods: Iterable[ResourceMethod] = ()) -> None:
        """
        :param name: resource name, used as mount point (/<name>) and as default jsonapi type
        :param resource_methods: the ResourceMethods this resource implements
        """
        if not isinstance(name, str) or not name or "/" in name or "." in name:
            raise MisconfiguredResourceError(f"Invalid resource name {name!r}")

        resource_methods = frozenset(resource_methods)
        for resource_method in resource_methods:
            if not isinstance(resource_method, ResourceMethod):
                raise MisconfiguredResourceError(f"Invalid resource method {resource_method!r} for {name}")

        self.name = name
        self.resource_methods = resource_methods
        self.logger = webadmin.log
        self.processor = None
        self.routes = []
        self.state = ResourceState.CONSTRUCTED
        self.router = Blueprint(name, __name__)
        # check the state before flask-restful adds the routes to the app
        self.router.record(self._on_mount)
        self.api = Api(self.router, default_mediatype=get_config("JSONAPI_MEDIA_TYPE"))
        self.api.representations = OrderedDict(DEFAULT_REPRESENTATIONS)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name} ({self.state.value})>"

    #
    # Handlers, implemented by the subclasses according to the declared resource methods
    #
    def get_single(self, request) -> "tuple[str, Attributes]":
        """
        GET_LIST handler
        :return: (id, attributes) of the resource representative
        """
        raise NotImplementedError

    def get_by_id(self, request, id: str) -> OptionalAttributes:
        """
        GET_DETAIL handler
        :return: attributes of the instance with the given id, None if it doesn't exist
        """
        raise NotImplementedError

    def get_custom_routes(self) -> Dict[str, CustomRoute]:
        """
        :return: mapping of route path (relative to the mount point) to CustomRoute
        """
        return {}

    #
    # Lifecycle
    #
    def initialize(self, logger: Optional[logging.Logger], processor: Any) -> None:
        """
        Set the dependencies and create the routes, this must be called exactly once
        before the resource is mounted
        :param logger: logger used by the resource, webadmin.log if None
        :param processor: the process owning the resource
        """
        if self.state is not ResourceState.CONSTRUCTED:
            raise MisconfiguredResourceError(f"Resource {self.name} was already initialized")

        self.logger = logger or webadmin.log
        self.processor = processor
        self._register_routes()
        self.state = ResourceState.INITIALIZED

    def mount(self, app: Flask) -> None:
        """
        Register the router blueprint in the app under /<name>
        """
        # checked before flask stores the blueprint in the app
        self._check_mountable()
        app.register_blueprint(self.router, url_prefix="/" + self.name)

    def _check_mountable(self) -> None:
        if self.state is ResourceState.CONSTRUCTED:
            raise MisconfiguredResourceError(f"Resource {self.name} must be initialized before it is mounted")
        if self.state is ResourceState.MOUNTED:
            raise MisconfiguredResourceError(f"Resource {self.name} is already mounted")

    def _on_mount(self, setup_state) -> None:
        """
        Called by flask when the router blueprint is registered,
        also when the host calls app.register_blueprint directly
        """
        self._check_mountable()

        app = setup_state.app
        if not isinstance(app.json, WebAdminJSONProvider):
            app.json = WebAdminJSONProvider(app)
        self.state = ResourceState.MOUNTED
        self.logger.info(f"Mounted {self.name} on {setup_state.url_prefix}")

    #
    # Route table
    #
    def _register_routes(self) -> None:
        """
        Create the routes for the declared resource methods and the custom routes
        """
        # iterate the table rather than the set to get a stable route order
        for resource_method, (http_method, path, api_class, handler_name) in RESOURCE_METHOD_ROUTES.items():
            if resource_method not in self.resource_methods:
                continue
            handler = getattr(self, handler_name)
            if getattr(type(self), handler_name) is getattr(AbstractResource, handler_name):
                raise MisconfiguredResourceError(f"{self.name} declares {resource_method.name} but doesn't implement {handler_name}")
            endpoint = f"{self.name}_{resource_method.value}"
            self._add_route(api_class, {}, ResourceRoute(path, http_method, handler, endpoint, resource_method))

        for i, (path, custom_route) in enumerate(self.get_custom_routes().items()):
            http_method = str(custom_route.http_method).upper()
            if http_method not in HTTP_METHODS:
                raise MisconfiguredResourceError(f"Invalid HTTP method {custom_route.http_method!r} for {self.name}{path}")
            if not callable(custom_route.handler):
                raise MisconfiguredResourceError(f"Handler for {self.name}{path} is not callable")
            if path and not path.startswith("/"):
                path = "/" + path
            endpoint = f"{self.name}_custom_{i}"
            properties = {"custom_route": custom_route, http_method.lower(): CustomRouteAPI.call_handler}
            self._add_route(CustomRouteAPI, properties, ResourceRoute(path, http_method, custom_route.handler, endpoint))

    def _add_route(self, api_class, properties: Dict[str, Any], route: ResourceRoute) -> None:
        """
        creates a class of the form

        @api_decorator
        class foo_get_list_API(ResourceListAPI):
            resource = self

        and adds it to the blueprint api
        """
        properties.update(resource=self, route_path=route.path, http_method=route.http_method)
        api_class_name = f"{route.endpoint}_API"
        view_class = api_decorator(type(api_class_name, (api_class,), properties))

        rule = flask_rule(route.path)
        self.logger.info(f"Exposing {self.name} {route.http_method} /{self.name}{route.path}, endpoint: {route.endpoint}")
        self.api.add_resource(view_class, rule, endpoint=route.endpoint, methods=[route.http_method])
        self.routes.append(route)
