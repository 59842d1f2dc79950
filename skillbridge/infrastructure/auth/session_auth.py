"""AuthProvider backed by a session token issued by the hosted sign-in page.

The token itself is opaque here: presence means signed in. Validation is
the auth provider's job, not ours.
"""

import logging
from typing import Optional

import typer

from skillbridge.domain.interfaces.auth import AuthProvider
from skillbridge.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)


class SessionTokenAuth(AuthProvider):
    """Signed in when a session token is configured."""

    def __init__(self, session_token: Optional[str], sign_in_url: str, ui: UserInterface):
        self._session_token = session_token
        self.sign_in_url = sign_in_url
        self.ui = ui

    def is_authenticated(self) -> bool:
        return bool(self._session_token)

    def redirect_to_sign_in(self) -> None:
        logger.info(f"Redirecting to sign-in: {self.sign_in_url}")
        self.ui.display_warning(
            "You need to sign in first. After signing in, set SKILLBRIDGE_SESSION_TOKEN "
            f"to the token shown on the page.\n{self.sign_in_url}"
        )
        typer.launch(self.sign_in_url)
