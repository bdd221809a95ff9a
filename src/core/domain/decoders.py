"""Decodificadores tolerantes a nivel de campo.

Por qué aquí:
- El servicio BioMart mezcla formatos (booleanos 0/1, listas como strings con
  corchetes, campos opcionales mal formados).
- Cada estrategia es una función pequeña + un alias `Annotated` para que la
  política de tolerancia se lea en la propia definición del campo.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any

from pydantic import BeforeValidator, ValidationError, ValidatorFunctionWrapHandler, WrapValidator

from core.domain.filter_kind import FilterKind


def boolean_from_integer(value: Any) -> bool:
    """Decodifica un booleano codificado como `0`/`1` (estricto)."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    # Sin `strip()`: un campo con espacios no es un 0/1 válido.
    if isinstance(value, str) and value in ("0", "1"):
        return value == "1"
    raise ValueError(f"expected zero or one, got {value!r}")


def comma_separated_list(value: Any) -> list[str]:
    """Divide un campo `a,b,c` en una lista ordenada. `""` -> `[]`."""

    if value is None:
        return []
    if isinstance(value, str):
        if value == "":
            return []
        return value.split(",")
    if isinstance(value, Iterable):
        return [str(item) for item in value]
    raise ValueError(f"expected a comma separated string, got {value!r}")


def bracket_trimmed_list(value: Any) -> list[str]:
    """Decodifica el campo `options` de los filtros.

    El servicio entrega `"[a,b,c]"` o bien una lista cuyo primer elemento
    empieza con `[` y el último termina con `]`. Solo se recortan los bordes:
    - 1 elemento: se quitan todos los `[` iniciales y `]` finales.
    - 2+ elementos: un `[` del primero y un `]` del último.
    """

    items = comma_separated_list(value)
    if not items:
        return []
    if len(items) == 1:
        single = items[0].lstrip("[").rstrip("]")
        return [single] if single else []

    first = items[0]
    if first.startswith("["):
        first = first[1:]
    last = items[-1]
    if last.endswith("]"):
        last = last[:-1]
    return [first, *items[1:-1], last]


def filter_kind_or_unknown(value: Any) -> FilterKind:
    """Tag `snake_case` -> `FilterKind`; tags nuevos -> `UNKNOWN`."""

    if isinstance(value, FilterKind):
        return value
    # `FilterKind._missing_` resuelve los tags desconocidos.
    return FilterKind(str(value).strip().lower())


def default_on_decode_failure(default: Any) -> WrapValidator:
    """Sustituye el valor por `default` si el campo no se puede decodificar.

    `default` puede ser un valor inmutable o una factoría sin argumentos
    (p.ej. `list`), para no compartir instancias entre registros.
    """

    def _validate(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return default() if callable(default) else default

    return WrapValidator(_validate)


IntBool = Annotated[bool, BeforeValidator(boolean_from_integer)]
CommaList = Annotated[list[str], BeforeValidator(comma_separated_list)]
BracketList = Annotated[list[str], BeforeValidator(bracket_trimmed_list)]
KindTag = Annotated[FilterKind, BeforeValidator(filter_kind_or_unknown)]

