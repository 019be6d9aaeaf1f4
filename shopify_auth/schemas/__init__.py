"""Pydantic schemas for the Shopify auth service."""

from .auth import AuthFailure, AuthResult, AuthSuccess, Credentials, Extra, Info

__all__ = [
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "Credentials",
    "Extra",
    "Info",
]
