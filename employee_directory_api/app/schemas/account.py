"""
Pydantic models for account registration and login.

Signup fields accept any JSON value: presence and
length rules are enforced by ``AccountService`` so that every client
gets the same messages in the same order.  Password hashes never
appear in any response model.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Schema for registering an account."""

    username: Any = Field(None, examples=["jdoe"])
    email: Any = Field(None, examples=["jdoe@example.com"])
    password: Any = Field(None, examples=["s3cretpass"])


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["jdoe@example.com"])
    password: Optional[str] = Field(None, examples=["s3cretpass"])


class TokenResponse(BaseModel):
    """Signed token returned by a successful login."""

    token: str
    token_type: str = "bearer"
