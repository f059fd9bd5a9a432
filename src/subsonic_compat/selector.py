"""Version-gated endpoint selection.

Several operations exist in two generations: a legacy endpoint every server
supports and a modern one (suffix "2") added in a later protocol version.
Each such operation is described by one DualEndpoint entry; selection is
generic over the table.

An unparseable server version always selects the legacy endpoint.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .adapter import (
    PayloadAdapter,
    adapt_album_info,
    adapt_album_list,
    adapt_artist_info,
    adapt_starred,
)
from .decoder import PayloadKind
from .version import ApiVersion

logger = logging.getLogger(__name__)


class Operation(Enum):
    """Logical operations backed by two endpoint generations."""

    ALBUM_LIST = "album_list"
    STARRED = "starred"
    ARTIST_INFO = "artist_info"
    ALBUM_INFO = "album_info"


@dataclass(frozen=True)
class DualEndpoint:
    """Legacy/modern endpoint pair for one operation.

    Attributes:
        legacy_endpoint: Endpoint every server supports
        modern_endpoint: Endpoint available from ``threshold`` on
        threshold: Minimum server version for the modern endpoint
        legacy_kind: Payload kind decoded from the legacy endpoint
        modern_kind: Payload kind decoded from the modern endpoint
        adapt: Maps a legacy payload to the unified payload
        legacy_unsupported: Request parameters the legacy endpoint ignores
    """

    legacy_endpoint: str
    modern_endpoint: str
    threshold: str
    legacy_kind: PayloadKind
    modern_kind: PayloadKind
    adapt: PayloadAdapter
    legacy_unsupported: FrozenSet[str] = frozenset()

    @property
    def minimum_version(self) -> ApiVersion:
        return ApiVersion.parse(self.threshold)


DUAL_ENDPOINTS: Dict[Operation, DualEndpoint] = {
    Operation.ALBUM_LIST: DualEndpoint(
        legacy_endpoint="getAlbumList",
        modern_endpoint="getAlbumList2",
        threshold="1.11.0",
        legacy_kind=PayloadKind.ALBUM_LIST,
        modern_kind=PayloadKind.ALBUM_LIST2,
        adapt=adapt_album_list,
        legacy_unsupported=frozenset({"fromYear", "toYear", "genre", "musicFolderId"}),
    ),
    Operation.STARRED: DualEndpoint(
        legacy_endpoint="getStarred",
        modern_endpoint="getStarred2",
        threshold="1.8.0",
        legacy_kind=PayloadKind.STARRED,
        modern_kind=PayloadKind.STARRED2,
        adapt=adapt_starred,
        legacy_unsupported=frozenset({"musicFolderId"}),
    ),
    Operation.ARTIST_INFO: DualEndpoint(
        legacy_endpoint="getArtistInfo",
        modern_endpoint="getArtistInfo2",
        threshold="1.11.0",
        legacy_kind=PayloadKind.ARTIST_INFO,
        modern_kind=PayloadKind.ARTIST_INFO2,
        adapt=adapt_artist_info,
    ),
    Operation.ALBUM_INFO: DualEndpoint(
        legacy_endpoint="getAlbumInfo",
        modern_endpoint="getAlbumInfo2",
        threshold="1.11.0",
        legacy_kind=PayloadKind.ALBUM_INFO,
        modern_kind=PayloadKind.ALBUM_INFO2,
        adapt=adapt_album_info,
    ),
}


@dataclass(frozen=True)
class EndpointSelection:
    """Outcome of endpoint selection.

    Attributes:
        operation: Logical operation requested
        endpoint: Wire endpoint to call
        payload_kind: Payload kind to decode the response as
        requires_adaptation: True when the legacy endpoint was chosen
        params: Request parameters to send (unsupported ones removed)
    """

    operation: Operation
    endpoint: str
    payload_kind: PayloadKind
    requires_adaptation: bool
    params: Dict[str, Any] = field(default_factory=dict)


def select_endpoint(
    operation: Operation,
    server_version: Optional[str],
    params: Optional[Mapping[str, Any]] = None,
) -> EndpointSelection:
    """Choose the endpoint for an operation given the server's version.

    Args:
        operation: Logical operation
        server_version: Version string advertised by the server (may be
            None or unparseable)
        params: Request parameters for the call

    Returns:
        EndpointSelection. When the legacy endpoint is chosen, parameters it
        does not support are removed and each removal is logged as a warning.

    Examples:
        >>> select_endpoint(Operation.STARRED, "1.16.1").endpoint
        'getStarred2'
        >>> select_endpoint(Operation.STARRED, "1.7.0").endpoint
        'getStarred'
    """
    dual = DUAL_ENDPOINTS[operation]
    outgoing = dict(params or {})

    version = ApiVersion.parse(server_version)
    if version is None:
        logger.warning(
            f"Unparseable server version {server_version!r}; "
            f"using legacy endpoint {dual.legacy_endpoint} for {operation.value}"
        )
    elif version >= dual.minimum_version:
        return EndpointSelection(
            operation=operation,
            endpoint=dual.modern_endpoint,
            payload_kind=dual.modern_kind,
            requires_adaptation=False,
            params=outgoing,
        )
    else:
        logger.debug(
            f"Server version {version} below {dual.threshold}; "
            f"using {dual.legacy_endpoint} for {operation.value}"
        )

    for name in sorted(dual.legacy_unsupported):
        if outgoing.get(name) is None:
            outgoing.pop(name, None)
            continue
        logger.warning(
            f"Parameter '{name}' is not supported by {dual.legacy_endpoint}; "
            f"dropped from {operation.value} request"
        )
        del outgoing[name]

    return EndpointSelection(
        operation=operation,
        endpoint=dual.legacy_endpoint,
        payload_kind=dual.legacy_kind,
        requires_adaptation=True,
        params=outgoing,
    )
