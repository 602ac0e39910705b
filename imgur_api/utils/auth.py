"""OAuth pin authorization for the Imgur API."""

import logging
from typing import Any, Dict, Optional

from oauthlib.oauth2 import Client, OAuth2Error
from oauthlib.oauth2.rfc6749.parameters import prepare_grant_uri, prepare_token_request
from requests_oauthlib import OAuth2Session

from imgur_api.models import AuthenticationError
from imgur_api.services.transport import ImgurCredentials

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://api.imgur.com/oauth2/authorize"
TOKEN_URL = "https://api.imgur.com/oauth2/token"


class PinApplicationClient(Client):
    """OAuth 2 client for Imgur's pin grant.

    The user visits the authorization URL, approves the application and is
    shown a pin, which is then exchanged for an access token.
    """

    grant_type = "pin"
    response_type = "pin"

    def prepare_request_uri(self, uri, redirect_uri=None, scope=None, state=None, **kwargs):
        return prepare_grant_uri(
            uri,
            self.client_id,
            self.response_type,
            redirect_uri=redirect_uri,
            scope=scope,
            state=state,
            **kwargs,
        )

    def prepare_request_body(self, pin=None, body="", include_client_id=True, **kwargs):
        kwargs["client_id"] = self.client_id
        return prepare_token_request(
            self.grant_type, body=body, include_client_id=include_client_id, pin=pin, **kwargs
        )


class OAuthCoordinator:
    """Runs the authorization URL / pin exchange handshake.

    A successful exchange stores the access token in the shared credentials,
    which switches every later request from ``Client-ID`` to ``Bearer``.
    """

    def __init__(self, credentials: ImgurCredentials, client_secret: str):
        self.credentials = credentials
        self.client_secret = client_secret
        self.state: Optional[str] = None
        self.session = OAuth2Session(client=PinApplicationClient(credentials.client_id))

    def get_authorization_url(self) -> str:
        """Get the URL the user visits to authorize the application."""
        url, self.state = self.session.authorization_url(AUTHORIZE_URL)
        return url

    def authorize(self, pin: str) -> Dict[str, Any]:
        """Exchange a pin for an access token.

        Args:
            pin: Pin shown to the user after authorizing

        Returns:
            The token response

        Raises:
            AuthenticationError: If the exchange fails; the current token is kept
        """
        if not pin:
            raise ValueError("pin must be a non-empty string")
        # The token endpoint must not receive a previously issued bearer token.
        self.session.token = {}
        try:
            token = self.session.fetch_token(
                TOKEN_URL,
                pin=pin,
                client_secret=self.client_secret,
                include_client_id=True,
            )
        except OAuth2Error as e:
            logger.error("Pin exchange failed: %s", str(e))
            raise AuthenticationError(f"Error authorizing with Imgur: {e}") from e

        self.credentials.token = token["access_token"]
        logger.info("Authorized as %s", token.get("account_username", "unknown account"))
        return dict(token)

    def close(self) -> None:
        self.session.close()
