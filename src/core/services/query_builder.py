"""Fluent accumulator for BioMart query documents.

The builder records filters and attributes in call order and materializes an
immutable `QueryDocument` on `build()`. It deliberately does not validate
names against the dataset's filter/attribute catalog (that catalog is a
separate metadata call), nor does it special-case empty match lists or
duplicate attributes: both are passed through to the service.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from core.domain.errors import QueryBuildError
from core.domain.query import (
    DEFAULT_FORMATTER,
    DEFAULT_SCHEMA,
    TABULAR_FORMATTERS,
    DatasetSpec,
    ExcludeFilter,
    FilterEntry,
    IncludeFilter,
    MatchFilter,
    QueryDocument,
)


class QueryBuilder:
    """Mutable builder; every setter returns `self` for chaining.

    Example::

        query = (
            QueryBuilder()
            .set_mart("ENSEMBL_MART_ENSEMBL")
            .set_dataset("hsapiens_gene_ensembl")
            .add_attributes(["affy_hg_u133_plus_2", "entrezgene_id"])
            .add_match_filter("affy_hg_u133_plus_2", ["202763_at", "209310_s_at"])
            .build()
        )
    """

    def __init__(self) -> None:
        self._mart = ""
        self._dataset = ""
        self._filters: list[FilterEntry] = []
        self._attributes: list[str] = []
        self._schema_name = DEFAULT_SCHEMA
        self._row_limit = 0
        self._unique_rows = True
        self._emit_header = True
        self._output_format = DEFAULT_FORMATTER

    @property
    def mart(self) -> str:
        """Stored mart name; it is not part of the query document."""

        return self._mart

    @property
    def dataset(self) -> str:
        return self._dataset

    def set_mart(self, name: str) -> "QueryBuilder":
        self._mart = str(name)
        return self

    def set_dataset(self, name: str) -> "QueryBuilder":
        self._dataset = str(name)
        return self

    def add_match_filter(self, name: str, values: Iterable[Any]) -> "QueryBuilder":
        """Restrict rows to those whose `name` field equals one of `values`."""

        self._filters.append(MatchFilter(name=str(name), values=tuple(str(v) for v in values)))
        return self

    def add_boolean_filter(self, name: str, include: bool) -> "QueryBuilder":
        entry: FilterEntry = IncludeFilter(name=str(name)) if include else ExcludeFilter(name=str(name))
        self._filters.append(entry)
        return self

    def add_attribute(self, name: str) -> "QueryBuilder":
        self._attributes.append(str(name))
        return self

    def add_attributes(self, names: Iterable[str]) -> "QueryBuilder":
        for name in names:
            self.add_attribute(name)
        return self

    def set_schema(self, name: str) -> "QueryBuilder":
        self._schema_name = str(name)
        return self

    def set_row_limit(self, limit: int) -> "QueryBuilder":
        if limit < 0:
            raise QueryBuildError(f"row limit must be >= 0, got {limit}")
        self._row_limit = int(limit)
        return self

    def set_unique_rows(self, unique: bool) -> "QueryBuilder":
        self._unique_rows = bool(unique)
        return self

    def set_header(self, emit: bool) -> "QueryBuilder":
        self._emit_header = bool(emit)
        return self

    def set_output_format(self, name: str) -> "QueryBuilder":
        """Choose a tabular formatter (`TSV` or `CSV`); the result is read as rows."""

        fmt = str(name).strip().upper()
        if fmt not in TABULAR_FORMATTERS:
            raise QueryBuildError(
                f"unsupported output format {name!r}; expected one of {sorted(TABULAR_FORMATTERS)}"
            )
        self._output_format = fmt
        return self

    def build(self) -> QueryDocument:
        """Materialize a fresh document from the current builder state.

        Successive calls share no mutable state: each one starts from the
        protocol defaults and copies the recorded entries.
        """

        if not self._dataset:
            raise QueryBuildError("dataset name is required; call set_dataset() first")

        return QueryDocument(
            schema_name=self._schema_name,
            unique_rows=self._unique_rows,
            row_limit=self._row_limit,
            emit_header=self._emit_header,
            output_format=self._output_format,
            dataset=DatasetSpec(
                name=self._dataset,
                filters=tuple(self._filters),
                attributes=tuple(self._attributes),
            ),
        )
