# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions will be caught in http_method_decorator and formatted, for example:
# {
#      "title": "Generic Error: ",
#      "detail": "Generic Error: ",
#      "code": "500"
# }
#
from werkzeug.exceptions import NotFound
import webadmin
from http import HTTPStatus
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class JsonapiError(Exception):
    pass


class NotFoundError(JsonapiError, NotFound):
    """
    This exception is raised when an item was not found,
    the response will be an empty 404
    """

    status_code = HTTPStatus.NOT_FOUND.value
    message = "NotFoundError "

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value, api_code=None):
        """
        :param message: Message to be logged
        :param status_code: HTTP Status code
        :param api_code: API code
        """
        NotFound.__init__(self)
        self.status_code = status_code
        webadmin.log.debug("Not found: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class GenericError(JsonapiError):
    """
    This exception is raised when an error has been detected while handling a request
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        # logged by the route adapter, together with the resource and route
        if is_debug():
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class MisconfiguredResourceError(JsonapiError):
    """
    This exception is raised when a resource is declared or mounted incorrectly:
    this is a programming error, it is raised immediately instead of being sent to a client
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = "Misconfigured Resource: "

    def __init__(self, message="", status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        webadmin.log.error("Misconfigured Resource: %s", message)
        self.message += message
