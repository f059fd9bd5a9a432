"""Exception classes for the Subsonic client.

Two families are kept apart so callers can tell "we could not understand the
server" (SubsonicDecodeError, always code 0) from "the server rejected the
request" (SubsonicProtocolError and its subclasses, server code verbatim).
"""

from typing import TYPE_CHECKING, Dict, Type

if TYPE_CHECKING:
    from .responses import SubsonicEnvelope


class SubsonicError(Exception):
    """Base exception for all Subsonic API errors.

    Attributes:
        code: Subsonic error code
        message: Error message
    """

    def __init__(self, code: int, message: str):
        """Initialize Subsonic error.

        Args:
            code: Subsonic error code (0 for local decode failures)
            message: Human-readable error message
        """
        self.code = code
        self.message = message
        super().__init__(f"Subsonic Error {code}: {message}")


class SubsonicDecodeError(SubsonicError):
    """Response could not be decoded (malformed JSON, missing root, bad status).

    Always carries code 0; the server never produced this error.
    """

    def __init__(self, message: str):
        super().__init__(0, message)


class SubsonicProtocolError(SubsonicError):
    """Server answered with ``status="failed"``.

    Used directly for codes without a more specific class (0, or codes
    introduced by newer servers).
    """

    pass


class SubsonicParameterError(SubsonicProtocolError):
    """Required parameter missing (error code 10)."""

    pass


class SubsonicVersionError(SubsonicProtocolError):
    """Client/server protocol versions are incompatible (error codes 20, 30)."""

    pass


class ClientVersionTooOldError(SubsonicVersionError):
    """Client must upgrade (code 20)."""

    pass


class ServerVersionTooOldError(SubsonicVersionError):
    """Server must upgrade (code 30)."""

    pass


class SubsonicAuthenticationError(SubsonicProtocolError):
    """Authentication failed (error codes 40, 42, 43, 44).

    Raised for a wrong username/password, an unsupported or conflicting
    authentication mechanism, or an invalid API key.
    """

    pass


class TokenAuthenticationNotSupportedError(SubsonicAuthenticationError):
    """Token authentication not supported for this user (code 41)."""

    pass


class SubsonicAuthorizationError(SubsonicProtocolError):
    """User not authorized for requested action (error code 50)."""

    pass


class SubsonicTrialError(SubsonicProtocolError):
    """Trial period expired (error code 60)."""

    pass


class SubsonicNotFoundError(SubsonicProtocolError):
    """Requested resource not found (error code 70)."""

    pass


ERROR_CLASSES: Dict[int, Type[SubsonicProtocolError]] = {
    10: SubsonicParameterError,
    20: ClientVersionTooOldError,
    30: ServerVersionTooOldError,
    40: SubsonicAuthenticationError,
    41: TokenAuthenticationNotSupportedError,
    42: SubsonicAuthenticationError,
    43: SubsonicAuthenticationError,
    44: SubsonicAuthenticationError,
    50: SubsonicAuthorizationError,
    60: SubsonicTrialError,
    70: SubsonicNotFoundError,
}


def error_for_code(code: int, message: str) -> SubsonicProtocolError:
    """Build the exception matching a server-reported error code.

    Args:
        code: Error code from the ``error`` node
        message: Error message from the ``error`` node

    Returns:
        Instance of the most specific SubsonicProtocolError subclass

    Examples:
        >>> type(error_for_code(70, "Album not found")).__name__
        'SubsonicNotFoundError'
        >>> type(error_for_code(99, "Something new")).__name__
        'SubsonicProtocolError'
    """
    error_class = ERROR_CLASSES.get(code, SubsonicProtocolError)
    return error_class(code, message)


def raise_for_error(envelope: "SubsonicEnvelope") -> None:
    """Raise the typed exception for a failed envelope.

    Args:
        envelope: Decoded response envelope

    Raises:
        SubsonicProtocolError: (or a subclass) if ``envelope.status`` is "failed"
    """
    if envelope.error is not None:
        raise error_for_code(envelope.error.code, envelope.error.message)
