"""Errors raised by the product service; views map them to HTTP 404."""

from __future__ import annotations


class ProductNotFound(Exception):
    """No product has the requested id."""
