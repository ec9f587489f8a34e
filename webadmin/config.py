# Configuration settings should be set in app.config
# The defaults are the WebAdmin class variables, the environment may override them
import os
import logging
from flask import current_app
import webadmin
from typing import Any


def get_config(option: str) -> Any:
    """Retrieve a configuration parameter
    lookup order: flask app.config, environment, WebAdmin class variables
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        return current_app.config[option]
    except (KeyError, RuntimeError):
        # RuntimeError: working outside of the application context
        pass

    default = getattr(webadmin.WebAdmin, option, None)
    value = os.environ.get(option, None)
    if value is None:
        return default
    # environment values are strings, convert them to the type of the default
    if isinstance(default, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        return int(value)
    return value


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return webadmin.log.getEffectiveLevel() < logging.INFO
