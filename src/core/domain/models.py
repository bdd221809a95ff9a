"""Modelos de metadata del servicio (Pydantic v2).

Por qué Pydantic en el dominio:
- Cada campo declara su estrategia de decodificación (`IntBool`,
  `CommaList`, `default_on_decode_failure`...), auditable campo a campo.
- Los registros son inmutables (`frozen`) y no conocen al cliente HTTP.

Nota:
- Los listados TSV no traen cabecera: el orden de declaración de los campos
  ES el orden de columnas del servicio. No reordenar ni quitar columnas.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from core.domain.decoders import BracketList, CommaList, IntBool, KindTag, default_on_decode_failure

_RecordT = TypeVar("_RecordT", bound="TabularRecord")


class MartInfo(BaseModel):
    """Una entrada `MartURLLocation` del registro de marts.

    Por qué hay campos con default:
    - `visible`, `martUser`, `default` e `includeDatasets` llegan ausentes o
      mal formados según el servidor; no deben invalidar la entrada.
    - `port` sí es estricto: sin puerto no hay mart utilizable.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    host: str = Field(..., description="Host del servidor del mart.")
    port: int = Field(..., ge=0, description="Puerto TCP del servidor.")
    database: str = Field(..., description="Base de datos física (p.ej. 'ensembl_mart_99').")
    include_datasets: Annotated[CommaList, default_on_decode_failure(list)] = Field(
        default_factory=list,
        description="Datasets publicados explícitamente (vacío = todos).",
    )
    visible: Annotated[IntBool, default_on_decode_failure(False)] = Field(
        default=False,
        description="Si el mart se muestra en los listados públicos.",
    )
    mart_user: Annotated[str, default_on_decode_failure("")] = Field(
        default="",
        description="Usuario del mart (normalmente vacío).",
    )
    default: Annotated[IntBool, default_on_decode_failure(False)] = Field(
        default=False,
        description="Si es el mart por defecto del servidor.",
    )
    server_virtual_schema: str = Field(..., description="Virtual schema al que pertenece.")
    display_name: str = Field(..., description="Nombre legible del mart.")
    path: str = Field(..., description="Ruta del endpoint (p.ej. '/biomart/martservice').")
    name: str = Field(..., description="Identificador del mart usado en las consultas.")


class MartRegistry(BaseModel):
    """Objetivo de decodificación del endpoint `type=registry`."""

    model_config = ConfigDict(frozen=True)

    marts: list[MartInfo] = Field(default_factory=list)

    def find(self, name: str) -> MartInfo | None:
        """Busca un mart por `name` (identificador, no display name)."""

        for mart in self.marts:
            if mart.name == name:
                return mart
        return None


class TabularRecord(BaseModel):
    """Base de los registros que llegan como filas TSV posicionales."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def column_count(cls) -> int:
        return len(cls.model_fields)

    @classmethod
    def from_row(cls: type[_RecordT], row: Sequence[str]) -> _RecordT:
        """Mapea una fila posicionalmente sobre los campos declarados.

        Lanza `ValueError` si el número de columnas no coincide (incluye
        `pydantic.ValidationError`, que hereda de `ValueError`).
        """

        names = tuple(cls.model_fields)
        if len(row) != len(names):
            raise ValueError(f"{cls.__name__} expects {len(names)} columns, got {len(row)}")
        return cls.model_validate(dict(zip(names, row)))


class DatasetInfo(TabularRecord):
    """Fila de `type=datasets`."""

    kind: str = Field(..., description="Tipo de dataset (p.ej. 'TableSet', 'GenomicSequence').")
    name: str = Field(..., min_length=1, description="Identificador del dataset.")
    display_name: str = Field(..., description="Nombre legible.")
    visible: IntBool = Field(..., description="Visibilidad (0/1 garantizado por el servicio).")
    version: str = Field(..., description="Versión/ensamblado (p.ej. 'GRCh38.p13').")
    unknown_1: int = Field(..., description="Columna sin semántica conocida; se conserva la alineación.")
    unknown_2: int = Field(..., description="Columna sin semántica conocida; se conserva la alineación.")
    virtual_schema: str = Field(..., description="Virtual schema del dataset.")
    last_modified: str = Field(..., description="Marca de tiempo tal cual la envía el servicio.")


class FilterInfo(TabularRecord):
    """Fila de `type=filters`."""

    name: str = Field(..., min_length=1, description="Identificador del filtro.")
    display_name: str = Field(..., description="Nombre legible.")
    options: BracketList = Field(..., description="Valores legales enumerados (puede ser vacío).")
    description: str = Field(..., description="Descripción libre.")
    page: str = Field(..., description="Página de la interfaz web donde aparece.")
    kind: KindTag = Field(..., description="Tipo de filtro; tags nuevos -> UNKNOWN.")
    operator: str = Field(..., description="Operador(es) soportados (p.ej. '=', '=,in').")
    table: str = Field(..., description="Tabla interna (opaca).")
    column: str = Field(..., description="Columna interna (opaca).")

    @property
    def is_boolean(self) -> bool:
        return self.kind.is_boolean()


class AttributeInfo(TabularRecord):
    """Fila de `type=attributes`."""

    name: str = Field(..., min_length=1, description="Identificador del atributo.")
    display_name: str = Field(..., description="Nombre legible (cabecera de columna en resultados).")
    description: str = Field(..., description="Descripción libre.")
    page: str = Field(..., description="Página de atributos (p.ej. 'feature_page').")
    formats: CommaList = Field(..., description="Formatos de salida soportados.")
    table: str = Field(..., description="Tabla interna (opaca).")
    column: str = Field(..., description="Columna interna (opaca).")
