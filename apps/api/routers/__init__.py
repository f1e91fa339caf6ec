"""Routers package."""

from . import (
    health,
    upload,
    analyze,
    save_result,
)
