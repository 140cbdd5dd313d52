"""Application logging configuration values."""

import os

from ..utils.env import env_flag


APP_LOG_LEVEL = (os.getenv("APP_LOG_LEVEL", "INFO") or "INFO").upper()
APP_LOG_FORMAT = os.getenv(
    "APP_LOG_FORMAT",
    "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] "
    "session=%(session_id)s role=%(client_type)s conn=%(connection_id)s %(message)s",
)
APP_LOG_DATEFMT = os.getenv("APP_LOG_DATEFMT", "%Y-%m-%d %H:%M:%S")

# uvicorn access log for the HTTP status endpoints
ACCESS_LOG = env_flag("ACCESS_LOG", False)


__all__ = [
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
    "ACCESS_LOG",
]
