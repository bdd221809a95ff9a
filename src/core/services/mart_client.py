"""Client façade over the `martservice` endpoint.

Each operation follows the same flow: build the request parameters, call the
transport exactly once, classify the status and, only on success, hand the
body to the matching decoder. There are no retries or timeouts here; both
belong to the transport.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import TypeVar

from core.domain.errors import QueryBuildError, QueryError, ServerError, StatusError
from core.domain.models import AttributeInfo, DatasetInfo, FilterInfo, MartInfo
from core.domain.query import REQUEST_ID, QueryDocument
from core.domain.response import Response
from core.interfaces.transport import MartTransport, TransportReply
from core.services import metadata_parsing

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

QUERY_ERROR_PREFIX = "Query ERROR"


class StatusClass(str, Enum):
    SUCCESS = "success"
    SERVER_ERROR = "server_error"
    OTHER = "other"


def classify_status(status_code: int) -> StatusClass:
    if 200 <= status_code < 300:
        return StatusClass.SUCCESS
    if 500 <= status_code < 600:
        return StatusClass.SERVER_ERROR
    return StatusClass.OTHER


class MartClient:
    """Synchronous BioMart client.

    Instances hold no mutable state besides the transport, so separate
    instances can be used from separate threads when the transport allows it.
    """

    def __init__(self, transport: MartTransport) -> None:
        self._transport = transport

    def __enter__(self) -> "MartClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def _request(self, params: Sequence[tuple[str, str]], decode: Callable[[str], _T]) -> _T:
        full_params = [*params, ("requestid", REQUEST_ID)]
        kind = dict(params).get("type", "query")
        logger.debug("martservice request type=%s", kind)

        reply: TransportReply = self._transport.send(full_params)
        status = classify_status(reply.status_code)
        if status is StatusClass.SERVER_ERROR:
            logger.warning("martservice %s request failed with server error %d", kind, reply.status_code)
            raise ServerError()
        if status is StatusClass.OTHER:
            logger.warning("martservice %s request failed with status %d", kind, reply.status_code)
            raise StatusError(reply.status_code)
        return decode(reply.text)

    def run_query(self, document: QueryDocument) -> Response:
        """Send `document` and wrap the tabular body in a `Response`.

        Documents built by hand with a non-tabular formatter are rejected
        before anything is sent.
        """

        delimiter = document.column_delimiter()
        if delimiter is None:
            raise QueryBuildError(f"formatter {document.output_format!r} does not return delimited rows")

        def _decode(text: str) -> Response:
            # The service reports query failures in-band with a 2xx status.
            if text.lstrip().startswith(QUERY_ERROR_PREFIX):
                raise QueryError(text.strip())
            return Response(text, has_header=document.emit_header, delimiter=delimiter)

        return self._request([("query", document.to_text())], _decode)

    def list_marts(self) -> list[MartInfo]:
        registry = self._request([("type", "registry")], metadata_parsing.parse_registry)
        return list(registry.marts)

    def list_datasets(self, mart: str) -> list[DatasetInfo]:
        return self._request(
            [("mart", mart), ("type", "datasets")],
            metadata_parsing.parse_datasets,
        )

    def list_filters(self, mart: str, dataset: str) -> list[FilterInfo]:
        return self._request(
            [("mart", mart), ("dataset", dataset), ("type", "filters")],
            metadata_parsing.parse_filters,
        )

    def list_attributes(self, mart: str, dataset: str) -> list[AttributeInfo]:
        return self._request(
            [("mart", mart), ("dataset", dataset), ("type", "attributes")],
            metadata_parsing.parse_attributes,
        )
