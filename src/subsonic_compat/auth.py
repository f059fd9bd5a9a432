"""Request authentication for Subsonic-compatible servers.

Three credential schemes are supported, chosen from the configuration:

    API key (OpenSubsonic):  u={username}&k={api_key}
    Token (protocol 1.13+):  u={username}&t=md5(password + salt)&s={salt}
    Legacy password:         u={username}&p=enc:{hex(password)}

The API key wins whenever one is configured. Token salts are regenerated
for every request; the password itself never leaves the client with token
auth. The legacy scheme only obscures the password and is meant for old
servers (or LDAP-backed accounts) that reject tokens with error 41.
"""

import hashlib
import secrets
from datetime import datetime, timezone
from typing import Dict, Optional

from .models import AUTH_LEGACY, SubsonicAuthToken, SubsonicConfig

RESPONSE_FORMAT = "json"


def generate_token(config: SubsonicConfig, salt: Optional[str] = None) -> Optional[SubsonicAuthToken]:
    """Generate a salted MD5 token.

    Args:
        config: Configuration holding username and password
        salt: Salt to use; a fresh 16-hex-character salt when None

    Returns:
        SubsonicAuthToken, or None when the configuration uses an API key
        or has no password

    Example:
        >>> config = SubsonicConfig(
        ...     url="https://music.example.com", username="admin", password="sesame"
        ... )
        >>> generate_token(config, salt="c19b2d").token
        '26719a1196d2a940705a59634eb18eab'
    """
    if config.api_key or not config.password:
        return None

    if salt is None:
        salt = secrets.token_hex(8)

    token = hashlib.md5(f"{config.password}{salt}".encode("utf-8")).hexdigest()
    return SubsonicAuthToken(
        token=token,
        salt=salt,
        username=config.username,
        created_at=datetime.now(timezone.utc),
    )


def verify_token(config: SubsonicConfig, token: str, salt: str) -> bool:
    """Check a token against md5(password + salt)."""
    if not config.password:
        return False
    expected = hashlib.md5(f"{config.password}{salt}".encode("utf-8")).hexdigest()
    return secrets.compare_digest(token, expected)


def encode_legacy_password(password: str) -> str:
    """Hex-encode a password for the legacy ``p`` parameter.

    Examples:
        >>> encode_legacy_password("sesame")
        'enc:736573616d65'
    """
    return "enc:" + password.encode("utf-8").hex()


def credential_params(config: SubsonicConfig, salt: Optional[str] = None) -> Dict[str, str]:
    """Build the credential query parameters for one request.

    Args:
        config: Connection configuration
        salt: Fixed salt for token auth (tests); random when None

    Returns:
        Dict with ``u`` plus ``k``, ``t``/``s`` or ``p`` depending on the scheme
    """
    if config.api_key:
        return {"u": config.username, "k": config.api_key}

    if config.auth_method == AUTH_LEGACY:
        return {"u": config.username, "p": encode_legacy_password(config.password)}

    return generate_token(config, salt=salt).to_auth_params()


def create_auth_params(
    config: SubsonicConfig,
    api_version: Optional[str] = None,
    salt: Optional[str] = None,
) -> Dict[str, str]:
    """Build the full set of common query parameters.

    Args:
        config: Connection configuration
        api_version: Protocol version to announce (``v``); defaults to the
            configured version
        salt: Fixed salt for token auth (tests); random when None

    Returns:
        Credentials plus ``v`` (version), ``c`` (client name) and ``f=json``
    """
    return {
        **credential_params(config, salt=salt),
        "v": api_version or config.api_version,
        "c": config.client_name,
        "f": RESPONSE_FORMAT,
    }
