from typing import Protocol

from pydantic import BaseModel, Field


class AuthRequest(Protocol):
    """
    Protocol for framework-agnostic authentication requests.

    This protocol defines the minimal interface required for an incoming request
    to be processed by an `AbstractAuthenticator` or used as provenance when a
    token is issued. It abstracts away framework-specific request details
    (e.g., Flask's `request`, FastAPI's `Request`).
    """

    def get_header(self, name: str) -> str | None:
        """
        Retrieves the value of a specific HTTP header from the request.

        Args:
            name: The name of the HTTP header to retrieve (case-insensitive).

        Returns:
            The string value of the header if found, otherwise `None`.
        """
        ...

    @property
    def remote_ip(self) -> str | None:
        """
        The address of the client making the request, or `None` if unknown.
        """
        ...

    @property
    def user_agent(self) -> str | None:
        """
        The client's user agent string, or `None` if not supplied.
        """
        ...


class RequestContext(BaseModel):
    """
    Provenance captured when a token is issued.

    Both values are advisory audit metadata; either may be absent.
    """

    remote_ip: str | None = None
    user_agent: str | None = None


class HeaderAuthRequest(RequestContext):
    """
    Concrete `AuthRequest` backed by a plain header mapping.

    Header lookups are case-insensitive, matching HTTP semantics.
    """

    headers: dict[str, str] = Field(default_factory=dict)

    def get_header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None
