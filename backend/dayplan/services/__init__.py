"""Scheduling and planning services."""
