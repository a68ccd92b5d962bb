"""API routers."""

from dayplan.api import optimization, planner

__all__ = [
    "planner",
    "optimization",
]
