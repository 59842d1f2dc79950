"""Interface for the authentication provider boundary.

The application never authenticates users itself; it only asks whether
someone is signed in and, if not, hands them over to the provider.
"""

import abc


class AuthProvider(abc.ABC):
    """Abstract Base Class for the sign-in state of the current user."""

    @abc.abstractmethod
    def is_authenticated(self) -> bool:
        """Returns True if the current user is signed in."""
        pass

    @abc.abstractmethod
    def redirect_to_sign_in(self) -> None:
        """Sends the user to the provider's sign-in flow."""
        pass
