"""Decoding of the metadata endpoints (registry XML and TSV listings).

Two different tolerance contracts live here:

- The registry is all-or-nothing: a malformed document or a `MartURLLocation`
  that fails validation raises `MetadataDecodeError`.
- Listings are best-effort: a row with the wrong column count, or one that
  fails validation, is dropped (DEBUG log) and the remaining rows are kept.
  Callers that need to know about drops must compare counts themselves.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterator

from pydantic import ValidationError

from core.domain.errors import MetadataDecodeError
from core.domain.models import (
    AttributeInfo,
    DatasetInfo,
    FilterInfo,
    MartInfo,
    MartRegistry,
    TabularRecord,
)

logger = logging.getLogger(__name__)

REGISTRY_ROOT = "MartRegistry"
REGISTRY_ENTRY = "MartURLLocation"


def parse_registry(text: str) -> MartRegistry:
    """Decode the `type=registry` XML document into a `MartRegistry`."""

    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as exc:
        raise MetadataDecodeError(f"Malformed registry document: {exc}") from exc

    if root.tag != REGISTRY_ROOT:
        raise MetadataDecodeError(f"Unexpected registry root element <{root.tag}>")

    marts: list[MartInfo] = []
    for position, element in enumerate(root.iter(REGISTRY_ENTRY)):
        try:
            marts.append(MartInfo.model_validate(dict(element.attrib)))
        except ValidationError as exc:
            raise MetadataDecodeError(
                f"Invalid {REGISTRY_ENTRY} #{position}: {exc.error_count()} error(s)"
            ) from exc
    return MartRegistry(marts=marts)


def _split_rows(text: str) -> Iterator[list[str]]:
    for line in text.splitlines():
        if not line.strip():
            continue
        yield line.split("\t")


def parse_listing(text: str, record_type: type[TabularRecord]) -> list[TabularRecord]:
    """Decode a headerless TSV listing into `record_type` rows, dropping bad rows."""

    records: list[TabularRecord] = []
    dropped = 0
    for line_no, row in enumerate(_split_rows(text), start=1):
        try:
            records.append(record_type.from_row(row))
        except ValueError as exc:
            dropped += 1
            logger.debug("Dropping %s row %d: %s", record_type.__name__, line_no, exc)
    if dropped:
        logger.debug("Decoded %d %s rows, dropped %d", len(records), record_type.__name__, dropped)
    return records


def parse_datasets(text: str) -> list[DatasetInfo]:
    return parse_listing(text, DatasetInfo)  # type: ignore[return-value]


def parse_filters(text: str) -> list[FilterInfo]:
    return parse_listing(text, FilterInfo)  # type: ignore[return-value]


def parse_attributes(text: str) -> list[AttributeInfo]:
    return parse_listing(text, AttributeInfo)  # type: ignore[return-value]
