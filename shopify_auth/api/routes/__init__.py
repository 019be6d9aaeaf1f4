"""API route modules."""

from . import oauth

__all__ = ["oauth"]
