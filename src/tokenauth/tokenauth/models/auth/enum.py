from enum import Enum


class AuthStatus(str, Enum):
    """
    Enum for the outcome of an authentication attempt.
    """

    SUCCESS = "success"
    FAILED = "failed"
    NOT_APPLICABLE = "not_applicable"


class AuthFailure(str, Enum):
    """
    Enum for externally visible authentication failure reasons.
    """

    INVALID_TOKEN = "invalid_token"
