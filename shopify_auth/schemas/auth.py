"""Normalized authentication result schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Token details handed to the host application."""

    token: str = Field(min_length=1)
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    expires: bool = False
    expires_at: Optional[int] = None
    scopes: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Info(BaseModel):
    """Well-known profile fields, plus whatever the profile carried besides them."""

    uid: Optional[str] = None
    name: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    urls: Dict[str, Optional[str]] = Field(default_factory=dict)
    extra_fields: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Extra(BaseModel):
    """Raw provider responses."""

    raw_info: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class AuthSuccess(BaseModel):
    """Terminal value of a successful callback."""

    status: Literal["success"] = "success"
    provider: str = "shopify"
    strategy: str = "ShopifyStrategy"
    uid: Optional[str] = None
    credentials: Credentials
    info: Info
    extra: Extra

    model_config = ConfigDict(frozen=True)


class AuthFailure(BaseModel):
    """Terminal value of a failed request or callback."""

    status: Literal["failure"] = "failure"
    provider: str = "shopify"
    strategy: str = "ShopifyStrategy"
    kind: str
    message: str

    model_config = ConfigDict(frozen=True)


AuthResult = Union[AuthSuccess, AuthFailure]


__all__ = [
    "AuthFailure",
    "AuthResult",
    "AuthSuccess",
    "Credentials",
    "Extra",
    "Info",
]
