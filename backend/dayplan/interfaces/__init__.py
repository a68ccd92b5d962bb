"""Abstract interfaces for external capabilities."""
