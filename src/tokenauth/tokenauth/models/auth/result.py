# ABOUTME: AuthResult model describing the outcome of one authentication attempt
# ABOUTME: Distinguishes success, typed failure and "not applicable" for strategy chains

from datetime import datetime, UTC
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from tokenauth.exceptions import InvalidTokenError
from tokenauth.models.auth.enum import AuthFailure, AuthStatus

GENERIC_FAILURE_MESSAGE = "Invalid credentials"


class AuthResult(BaseModel):
    """
    Outcome of an authentication attempt.

    A strategy either authenticates a principal, fails with a typed reason, or
    declines because the request carries no credentials it understands. The
    last case is not a failure: it lets other strategies in a chain run.
    Failures always carry the same generic message so nothing about the cause
    reaches the client.
    """

    status: AuthStatus = Field(description="Outcome of the attempt")
    principal: Optional[Any] = Field(default=None, description="Authenticated principal on success")
    failure: Optional[AuthFailure] = Field(default=None, description="Failure reason when status is failed")
    message: Optional[str] = Field(default=None, description="Client-safe message")
    completed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def succeeded(cls, principal: Any) -> "AuthResult":
        return cls(status=AuthStatus.SUCCESS, principal=principal)

    @classmethod
    def failed(cls, reason: AuthFailure = AuthFailure.INVALID_TOKEN) -> "AuthResult":
        return cls(status=AuthStatus.FAILED, failure=reason, message=GENERIC_FAILURE_MESSAGE)

    @classmethod
    def not_applicable(cls) -> "AuthResult":
        return cls(status=AuthStatus.NOT_APPLICABLE)

    @property
    def is_success(self) -> bool:
        return self.status == AuthStatus.SUCCESS

    @property
    def is_applicable(self) -> bool:
        return self.status != AuthStatus.NOT_APPLICABLE

    def raise_for_failure(self) -> None:
        """
        Raise `InvalidTokenError` if this result is a failure.

        Successful and not-applicable results return silently.
        """
        if self.status == AuthStatus.FAILED:
            raise InvalidTokenError(details={"reason": self.failure.value if self.failure else None})
