"""Version-adaptive call orchestration.

``call_versioned`` glues the pieces together: pick the endpoint, send the
request through a transport callable, decode the response, and adapt it when
the legacy endpoint answered. The transport is any callable taking an
endpoint name and a parameter dict and returning the raw response.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from .adapter import adapt_envelope
from .decoder import RawResponse, decode_response
from .responses import SubsonicEnvelope
from .selector import DUAL_ENDPOINTS, Operation, select_endpoint

logger = logging.getLogger(__name__)

Send = Callable[[str, Mapping[str, Any]], RawResponse]


def call_versioned(
    operation: Operation,
    params: Optional[Mapping[str, Any]],
    send: Send,
    server_version: Optional[str],
) -> SubsonicEnvelope:
    """Run a dual-generation operation and return the unified envelope.

    Args:
        operation: Logical operation to perform
        params: Request parameters (legacy-unsupported ones may be dropped)
        send: Transport callable ``send(endpoint, params) -> raw``
        server_version: Last-known server protocol version

    Returns:
        SubsonicEnvelope whose payload is always the unified shape. Failed
        responses are returned as envelopes, not raised.

    Raises:
        SubsonicDecodeError: If the response cannot be decoded
        Any exception raised by ``send`` propagates unchanged
    """
    selection = select_endpoint(operation, server_version, params)
    logger.debug(f"{operation.value}: calling {selection.endpoint}")

    raw = send(selection.endpoint, selection.params)
    envelope = decode_response(raw, selection.payload_kind)

    if not selection.requires_adaptation:
        return envelope

    return adapt_envelope(envelope, DUAL_ENDPOINTS[operation].adapt)
