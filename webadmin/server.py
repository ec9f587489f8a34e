"""
Web admin server: a flask app in which the resources of a processor are mounted

    server = WebAdminServer(processor, WEBADMIN_LISTEN_ADDRESS=":8081")
    server.register_resource(TriggersResource())
    server.start()

Every request is handled in its own thread (werkzeug threaded server),
the resources don't share any mutable state between requests.
"""
import logging
import threading
from flask import Flask, jsonify
from flask_swagger_ui import get_swaggerui_blueprint
from werkzeug.serving import make_server
import webadmin
from .config import get_config
from .errors import MisconfiguredResourceError
from .json_encoder import WebAdminJSONProvider
from .swagger_doc import swagger_doc
from typing import Any, Dict, Optional, Tuple


def parse_listen_address(listen_address: str) -> Tuple[str, int]:
    """
    :param listen_address: "[host]:port", eg. ":8081" or "127.0.0.1:8081"
    :return: (host, port), host defaults to 0.0.0.0
    """
    host, sep, port = str(listen_address).rpartition(":")
    if not sep:
        raise MisconfiguredResourceError(f"Invalid listen address {listen_address!r}")
    try:
        port = int(port)
    except ValueError:
        raise MisconfiguredResourceError(f"Invalid listen address {listen_address!r}")
    return host or "0.0.0.0", port


class WebAdminServer:
    """
    Owns the flask app, mounts the resources and serves them
    :param processor: the process owning the resources, passed to every resource
    :param logger: logger passed to the resources, webadmin.log by default
    :param config: app.config overrides, eg. WEBADMIN_LISTEN_ADDRESS, SWAGGER_UI
    """

    def __init__(self, processor: Any, logger: Optional[logging.Logger] = None, app: Optional[Flask] = None, **config: Any) -> None:
        self.processor = processor
        self.logger = logger or webadmin.log
        self.resources = {}
        self.app = app if app is not None else Flask(__name__)
        self.app.config.update(config)
        self._http_server = None
        self._thread = None
        self.create_app()

    def get_config(self, option: str) -> Any:
        with self.app.app_context():
            return get_config(option)

    def create_app(self) -> Flask:
        """
        Configure the flask app: json encoding and the swagger endpoints
        """
        app = self.app
        app.json = WebAdminJSONProvider(app)
        app.url_map.strict_slashes = False

        if app.config.get("DEBUG", False):
            webadmin.log.setLevel(logging.DEBUG)

        api_spec_url = self.get_config("API_SPEC_URL")

        @app.route(api_spec_url, endpoint="webadmin_swagger")
        def swagger_json():
            return jsonify(self.get_swagger_doc())

        if self.get_config("SWAGGER_UI"):
            swaggerui_blueprint = get_swaggerui_blueprint(
                "/swagger", api_spec_url, config={"docExpansion": "none", "defaultModelsExpandDepth": -1}
            )
            app.register_blueprint(swaggerui_blueprint, url_prefix="/swagger")

        return app

    def register_resource(self, resource) -> None:
        """
        Initialize the resource with the server dependencies and mount it on /<name>
        :param resource: AbstractResource
        """
        if resource.name in self.resources:
            raise MisconfiguredResourceError(f"A resource named {resource.name} is already registered")

        resource.initialize(self.logger, self.processor)
        resource.mount(self.app)
        self.resources[resource.name] = resource

    def get_swagger_doc(self) -> Dict[str, Any]:
        return swagger_doc(self.resources.values(), title="webadmin")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """
        Serve the app on WEBADMIN_LISTEN_ADDRESS in a background thread
        """
        if not self.get_config("WEBADMIN_ENABLED"):
            self.logger.info("Web admin disabled, not listening")
            return

        if self.is_running:
            raise MisconfiguredResourceError("Web admin server already started")

        host, port = parse_listen_address(self.get_config("WEBADMIN_LISTEN_ADDRESS"))
        self._http_server = make_server(host, port, self.app, threaded=True)
        self._thread = threading.Thread(target=self._http_server.serve_forever, name="webadmin", daemon=True)
        self._thread.start()
        self.logger.info(f"Web admin listening on {host}:{self._http_server.server_port}")

    def stop(self) -> None:
        if self._http_server is None:
            return
        self._http_server.shutdown()
        self._thread.join()
        self._http_server = None
        self._thread = None
        self.logger.info("Web admin stopped")
