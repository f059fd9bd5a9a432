"""Connection configuration and authentication models."""

import os
import warnings
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .version import SUPPORTED_API_VERSION, ApiVersion

AUTH_TOKEN = "token"
AUTH_LEGACY = "legacy"
AUTH_METHODS = (AUTH_TOKEN, AUTH_LEGACY)


@dataclass
class SubsonicConfig:
    """Configuration for connecting to a Subsonic-compatible server.

    Attributes:
        url: Base server URL (e.g., "https://music.example.com")
        username: Subsonic username
        password: Subsonic password (never sent in clear with token auth)
        api_key: Optional API key for OpenSubsonic servers (alternative to password)
        client_name: Client identifier for API requests
        api_version: Highest protocol version the client asks for
        auth_method: "token" (salted MD5) or "legacy" (hex-encoded password)
    """

    url: str
    username: str
    password: Optional[str] = None
    api_key: Optional[str] = None
    client_name: str = "subsonic-compat"
    api_version: str = SUPPORTED_API_VERSION
    auth_method: str = AUTH_TOKEN

    def __post_init__(self):
        """Validate configuration on initialization."""
        if not self.url or not self.url.startswith(("http://", "https://")):
            raise ValueError("url must be a valid HTTP/HTTPS URL")
        if not self.username:
            raise ValueError("username is required")

        # Either password or API key must be provided
        if not self.password and not self.api_key:
            raise ValueError("Either password or api_key must be provided")

        if self.auth_method not in AUTH_METHODS:
            raise ValueError(
                f"auth_method must be one of {', '.join(AUTH_METHODS)}, got {self.auth_method!r}"
            )

        requested = ApiVersion.parse(self.api_version)
        if requested is None:
            raise ValueError(f"api_version is not a valid version: {self.api_version!r}")
        if requested > ApiVersion.parse(SUPPORTED_API_VERSION):
            raise ValueError(
                f"Subsonic API version '{self.api_version}' is not supported. "
                f"Maximum supported version is '{SUPPORTED_API_VERSION}'."
            )

        if not self.url.startswith("https://"):
            warnings.warn(
                "Using HTTP instead of HTTPS for Subsonic connection. "
                "Credentials will be transmitted insecurely.",
                UserWarning,
                stacklevel=2,
            )

    @classmethod
    def from_environment(cls) -> "SubsonicConfig":
        """Load configuration from environment variables.

        Required: SUBSONIC_URL, SUBSONIC_USER and one of SUBSONIC_PASSWORD or
        SUBSONIC_API_KEY. Optional: SUBSONIC_CLIENT_NAME, SUBSONIC_API_VERSION,
        SUBSONIC_AUTH_METHOD.

        Returns:
            SubsonicConfig: Loaded configuration object

        Raises:
            EnvironmentError: If required environment variables are missing
        """
        required = {
            "SUBSONIC_URL": os.getenv("SUBSONIC_URL"),
            "SUBSONIC_USER": os.getenv("SUBSONIC_USER"),
        }
        missing = [var for var, value in required.items() if not value]

        password = os.getenv("SUBSONIC_PASSWORD")
        api_key = os.getenv("SUBSONIC_API_KEY")
        if not password and not api_key:
            missing.append("SUBSONIC_PASSWORD (or SUBSONIC_API_KEY)")

        if missing:
            raise EnvironmentError(
                f"Required environment variables missing: {', '.join(missing)}\n"
                f"Example: export SUBSONIC_URL='https://your-server.com'"
            )

        return cls(
            url=required["SUBSONIC_URL"],
            username=required["SUBSONIC_USER"],
            password=password,
            api_key=api_key,
            client_name=os.getenv("SUBSONIC_CLIENT_NAME", "subsonic-compat"),
            api_version=os.getenv("SUBSONIC_API_VERSION", SUPPORTED_API_VERSION),
            auth_method=os.getenv("SUBSONIC_AUTH_METHOD", AUTH_TOKEN),
        )

    def __repr__(self) -> str:
        """Return string representation with credentials masked."""
        return (
            f"SubsonicConfig("
            f"url='{self.url}', "
            f"username='{self.username}', "
            f"password={'***' if self.password else None}, "
            f"api_key={'***' if self.api_key else None}, "
            f"client_name='{self.client_name}', "
            f"api_version='{self.api_version}', "
            f"auth_method='{self.auth_method}'"
            f")"
        )


@dataclass
class SubsonicAuthToken:
    """Salted MD5 authentication token.

    Attributes:
        token: MD5(password + salt)
        salt: Random salt string
        username: Username for this token
        created_at: Token creation timestamp
    """

    token: str
    salt: str
    username: str
    created_at: datetime

    def to_auth_params(self) -> dict:
        """Convert to authentication query parameters.

        Returns:
            Dict with u (username), t (token), s (salt)
        """
        return {"u": self.username, "t": self.token, "s": self.salt}
