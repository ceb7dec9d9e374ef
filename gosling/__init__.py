"""Gosling - model registry and request dispatch for the Gosling assistant."""

__version__ = "0.1.0"

__all__ = ["__version__"]
