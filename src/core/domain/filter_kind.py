"""Filter kinds advertised by BioMart filter listings.

The catalog grows over time on the service side, so anything that is not a
known tag maps to `FilterKind.UNKNOWN` instead of failing the row.
"""

from __future__ import annotations

from enum import Enum


class FilterKind(str, Enum):
    """Wire tags (`snake_case`) of the `type` column of a filter listing."""

    BOOLEAN = "boolean"
    BOOLEAN_LIST = "boolean_list"
    ID_LIST = "id_list"
    LIST = "list"
    TEXT = "text"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "FilterKind":
        return cls.UNKNOWN

    def is_boolean(self) -> bool:
        """True for kinds used with `excluded="0|1"` filters."""

        return self in (FilterKind.BOOLEAN, FilterKind.BOOLEAN_LIST)
