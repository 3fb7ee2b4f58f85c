"""
HTTP API

Exposes the A/B comparison and the server-wide scoring config over FastAPI.
"""

from prompt_gauge.api.app import create_app
from prompt_gauge.api.scoring import router

__all__ = [
    "create_app",
    "router",
]
