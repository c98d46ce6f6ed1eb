"""Partial update (PATCH) of typed objects from decoded documents."""

__version__ = "0.1.0"
