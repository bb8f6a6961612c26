"""Session login credentials for the document service."""

import os
from urllib.parse import urlencode

from dotenv import load_dotenv

DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "admin"


class DocsAuth:
    """Holds the credentials and base URL used to open a service session.

    The service authenticates with a cookie issued by the login endpoint, so
    this class only builds the login form and request URLs; the cookie itself
    lives in the client's ``requests.Session``.
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        base_url: str | None = None,
        remember: bool = True,
    ) -> None:
        """Initialize authentication with credentials.

        Args:
            username: Login name (or load from DOCSYNC_USERNAME env, default "admin")
            password: Password (or load from DOCSYNC_PASSWORD env, default "admin")
            base_url: Service base URL (or load from DOCSYNC_HOST env)
            remember: Ask the service for a long-lived session
        """
        load_dotenv()

        self.username = username or os.getenv("DOCSYNC_USERNAME", DEFAULT_USERNAME)
        self.password = password or os.getenv("DOCSYNC_PASSWORD", DEFAULT_PASSWORD)
        self.base_url = (base_url or os.getenv("DOCSYNC_HOST", "")).rstrip("/")
        self.remember = remember

        if not self.base_url:
            raise ValueError(
                "Missing service host. Set DOCSYNC_HOST environment variable "
                "or pass it directly."
            )

    def login_form(self) -> dict[str, str]:
        """Form fields posted to the login endpoint."""
        return {
            "username": self.username,
            "password": self.password,
            "remember": "true" if self.remember else "false",
        }

    def get_full_url(self, path: str, query_params: dict[str, str] | None = None) -> str:
        """Build full URL from base URL, path, and query params.

        Args:
            path: API path (e.g., /api/document/list)
            query_params: Optional query parameters

        Returns:
            Full URL string
        """
        url = f"{self.base_url}{path}"
        if query_params:
            url += "?" + urlencode(sorted(query_params.items()))
        return url

    def verify_credentials(self) -> bool:
        """Verify that credentials are set (does not test API connectivity)."""
        return bool(self.username and self.password and self.base_url)
