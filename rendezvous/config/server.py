"""HTTP server binding and cross-origin configuration."""

import os

from ..utils.env import env_list


HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# "*" allows any origin, matching the browser clients served from elsewhere
CORS_ALLOW_ORIGINS = env_list("CORS_ALLOW_ORIGINS", "*")


__all__ = [
    "HOST",
    "PORT",
    "CORS_ALLOW_ORIGINS",
]
