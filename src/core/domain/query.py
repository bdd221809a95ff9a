"""Documento de consulta BioMart y su serialización XML.

Por qué un modelo propio (y no un árbol XML genérico):
- Campos tipados en vez de mapas de atributos con claves string.
- `FilterEntry` es una unión etiquetada: no existe un filtro con `value` y
  `excluded` a la vez.

Limitación conocida:
- Un documento modela un único `Dataset` aunque el protocolo admita varios.
- Solo se aplica el escapado estándar de entidades en valores de atributos;
  el llamador no debe inyectar XML ilegal en nombres/valores.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union
from xml.sax.saxutils import escape

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

REQUEST_ID = "martclient"
DATASET_CONFIG_VERSION = "0.6"
DEFAULT_SCHEMA = "default"
DEFAULT_FORMATTER = "TSV"

# Formatters whose output is one delimited row per line. `Response` only reads these.
TABULAR_FORMATTERS = {"TSV": "\t", "CSV": ","}

_XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?><!DOCTYPE Query>'
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


def _quote(value: str) -> str:
    return '"' + escape(value, _ATTRIBUTE_ENTITIES) + '"'


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _element(tag: str, attributes: list[tuple[str, str]]) -> str:
    rendered = "".join(f" {key}={_quote(value)}" for key, value in attributes)
    return f"<{tag}{rendered}/>"


class MatchFilter(BaseModel):
    """Restringe a filas cuyo campo sea uno de `values`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["match"] = "match"
    name: str = Field(..., description="Identificador del filtro (opaco).")
    values: tuple[str, ...] = Field(default=(), description="Valores aceptados, en orden.")

    def xml_attributes(self) -> list[tuple[str, str]]:
        return [("name", self.name), ("value", ",".join(self.values))]


class IncludeFilter(BaseModel):
    """Filtro booleano de presencia: `excluded="0"`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["include"] = "include"
    name: str

    def xml_attributes(self) -> list[tuple[str, str]]:
        return [("name", self.name), ("excluded", "0")]


class ExcludeFilter(BaseModel):
    """Filtro booleano de ausencia: `excluded="1"`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["exclude"] = "exclude"
    name: str

    def xml_attributes(self) -> list[tuple[str, str]]:
        return [("name", self.name), ("excluded", "1")]


FilterEntry = Annotated[
    Union[MatchFilter, IncludeFilter, ExcludeFilter],
    Field(discriminator="kind"),
]


class DatasetSpec(BaseModel):
    """Dataset objetivo + filtros y atributos pedidos (orden significativo)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Identificador del dataset.")
    filters: tuple[FilterEntry, ...] = Field(default=())
    attributes: tuple[str, ...] = Field(default=())

    def to_text(self) -> str:
        children = [_element("Filter", entry.xml_attributes()) for entry in self.filters]
        children.extend(_element("Attribute", [("name", name)]) for name in self.attributes)
        return f"<Dataset name={_quote(self.name)}>{''.join(children)}</Dataset>"


class QueryDocument(BaseModel):
    """Una petición completa al endpoint `martservice`."""

    model_config = ConfigDict(frozen=True)

    schema_name: str = Field(default=DEFAULT_SCHEMA, description="virtualSchemaName.")
    unique_rows: bool = Field(default=True, description="Deduplicar filas en el servidor.")
    row_limit: int = Field(default=0, ge=0, description="Atributo `count`; 0 = sin límite.")
    dataset_config_version: str = Field(default=DATASET_CONFIG_VERSION)
    emit_header: bool = Field(default=True, description="Incluir fila de cabecera.")
    output_format: str = Field(default=DEFAULT_FORMATTER, description="Formatter del servicio.")
    request_id: str = Field(default=REQUEST_ID)
    dataset: DatasetSpec

    def query_attributes(self) -> list[tuple[str, str]]:
        """Atributos del elemento `Query`, en el orden que espera el servicio."""

        return [
            ("virtualSchemaName", self.schema_name),
            ("uniqueRows", _flag(self.unique_rows)),
            ("count", str(self.row_limit)),
            ("datasetConfigVersion", self.dataset_config_version),
            ("header", _flag(self.emit_header)),
            ("formatter", self.output_format),
            ("requestid", self.request_id),
        ]

    def column_delimiter(self) -> str | None:
        """Separador de columnas de la respuesta; `None` si el formatter no es tabular."""

        return TABULAR_FORMATTERS.get(self.output_format.upper())

    def to_text(self) -> str:
        """Serializa el documento al XML que se envía como parámetro `query`."""

        attributes = "".join(f" {key}={_quote(value)}" for key, value in self.query_attributes())
        return f"{_XML_PROLOG}<Query{attributes}>{self.dataset.to_text()}</Query>"

    def __str__(self) -> str:
        return self.to_text()
