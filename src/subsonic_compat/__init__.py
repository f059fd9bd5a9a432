"""Version-adaptive client for Subsonic-compatible music servers."""

__version__ = "1.0.0"

from .adapter import adapt_album_info, adapt_album_list, adapt_artist_info, adapt_envelope, adapt_starred
from .auth import create_auth_params, generate_token, verify_token
from .client import AlbumListType, SubsonicClient
from .decoder import PayloadKind, decode_response
from .dispatch import call_versioned
from .exceptions import (
    ClientVersionTooOldError,
    ServerVersionTooOldError,
    SubsonicAuthenticationError,
    SubsonicAuthorizationError,
    SubsonicDecodeError,
    SubsonicError,
    SubsonicNotFoundError,
    SubsonicParameterError,
    SubsonicProtocolError,
    SubsonicTrialError,
    SubsonicVersionError,
    TokenAuthenticationNotSupportedError,
    error_for_code,
    raise_for_error,
)
from .logger import setup_logging
from .models import SubsonicAuthToken, SubsonicConfig
from .responses import (
    Album,
    AlbumInfo,
    AlbumList,
    Artist,
    ArtistIndex,
    ArtistInfo,
    ArtistsIndex,
    Bookmark,
    Child,
    Genre,
    Indexes,
    License,
    Lyrics,
    MusicDirectory,
    MusicFolder,
    PlayQueue,
    Playlist,
    ScanStatus,
    SearchResult,
    Song,
    Starred,
    SubsonicEnvelope,
    SubsonicErrorInfo,
)
from .selector import DUAL_ENDPOINTS, DualEndpoint, EndpointSelection, Operation, select_endpoint
from .version import SUPPORTED_API_VERSION, ApiVersion, VersionOrder, compare_versions, is_at_least, parse_version

__all__ = [
    # Client
    "SubsonicClient",
    "AlbumListType",
    # Configuration
    "SubsonicConfig",
    "SubsonicAuthToken",
    "setup_logging",
    # Versions
    "SUPPORTED_API_VERSION",
    "ApiVersion",
    "VersionOrder",
    "parse_version",
    "compare_versions",
    "is_at_least",
    # Dispatch
    "Operation",
    "DualEndpoint",
    "DUAL_ENDPOINTS",
    "EndpointSelection",
    "select_endpoint",
    "call_versioned",
    "PayloadKind",
    "decode_response",
    "adapt_envelope",
    "adapt_starred",
    "adapt_album_list",
    "adapt_artist_info",
    "adapt_album_info",
    # Responses
    "SubsonicEnvelope",
    "SubsonicErrorInfo",
    "Artist",
    "Album",
    "Song",
    "Starred",
    "AlbumList",
    "ArtistInfo",
    "AlbumInfo",
    "MusicFolder",
    "Genre",
    "ArtistIndex",
    "ArtistsIndex",
    "SearchResult",
    "Playlist",
    "ScanStatus",
    "Indexes",
    "MusicDirectory",
    "Child",
    "License",
    "Lyrics",
    "Bookmark",
    "PlayQueue",
    # Authentication
    "generate_token",
    "verify_token",
    "create_auth_params",
    # Exceptions
    "SubsonicError",
    "SubsonicDecodeError",
    "SubsonicProtocolError",
    "SubsonicParameterError",
    "SubsonicVersionError",
    "ClientVersionTooOldError",
    "ServerVersionTooOldError",
    "SubsonicAuthenticationError",
    "TokenAuthenticationNotSupportedError",
    "SubsonicAuthorizationError",
    "SubsonicTrialError",
    "SubsonicNotFoundError",
    "error_for_code",
    "raise_for_error",
]
