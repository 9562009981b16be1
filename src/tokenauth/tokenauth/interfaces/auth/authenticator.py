# ABOUTME: Abstract authenticator interface for request authentication strategies
# ABOUTME: Defines the contract for components that extract and validate credentials from requests

from abc import ABC, abstractmethod

from tokenauth.models.auth.auth_request import AuthRequest
from tokenauth.models.auth.result import AuthResult


class AbstractAuthenticator(ABC):
    """
    Abstract authenticator for validating incoming requests.

    This abstract class defines the contract for strategies responsible for
    determining the principal behind a request. A strategy extracts credentials
    from the request (e.g., HTTP headers) and delegates their verification.
    Strategies are stateless across requests and never cache results.
    """

    @abstractmethod
    def is_applicable(self, request: AuthRequest) -> bool:
        """
        Whether the request carries credentials this strategy understands.

        Args:
            request (AuthRequest): The incoming request.

        Returns:
            bool: `False` lets other strategies in a chain handle the request.
        """
        pass

    @abstractmethod
    async def authenticate(self, request: AuthRequest) -> AuthResult:
        """
        Authenticates an incoming request.

        This asynchronous method extracts credentials from the `AuthRequest`,
        verifies them, and reports the outcome as an `AuthResult`: success with
        the principal, a typed failure, or "not applicable".

        Args:
            request (AuthRequest): An object conforming to the `AuthRequest` protocol.

        Returns:
            AuthResult: The outcome of the attempt.

        Raises:
            StorageError: If a backing store fails while verifying credentials.
        """
        pass
