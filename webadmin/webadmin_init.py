import logging
import os
import sys


class WebAdmin:
    """Default configuration of the web admin
    The values are class variables, they can be overridden in the flask app.config
    or in the environment (cfr. webadmin.config.get_config)
    The loglevel is set with the DEBUG environment variable (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    WEBADMIN_ENABLED = True
    WEBADMIN_LISTEN_ADDRESS = ":8081"
    SWAGGER_UI = True
    API_SPEC_URL = "/swagger.json"
    JSONAPI_MEDIA_TYPE = "application/vnd.api+json"

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stdout so we redirect eveything to sys.stderr
        """
        log = logging.getLogger(__package__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = WebAdmin.init_logging(LOGLEVEL)
