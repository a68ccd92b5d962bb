"""Day planner scheduling and layout backend."""

__version__ = "0.1.0"
