"""Resultado tabular de una consulta.

Por qué no se cachea nada:
- `header()`/`records()` son funciones puras sobre `raw`; cada llamada vuelve
  a parsear. El texto suele ser pequeño y así no hay estado derivado que
  invalidar.
"""

from __future__ import annotations


class Response:
    """Envuelve el texto delimitado (TSV por defecto) devuelto por `martservice`.

    Las filas se parten a mano: no hay comillas ni escapes en la salida del
    servicio, y un campo puede ser muy largo (secuencias completas).
    """

    __slots__ = ("_raw", "_has_header", "_delimiter")

    def __init__(self, raw: str, *, has_header: bool = True, delimiter: str = "\t") -> None:
        if not delimiter:
            raise ValueError("delimiter must be a non-empty string")
        self._raw = raw
        self._has_header = has_header
        self._delimiter = delimiter

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def has_header(self) -> bool:
        return self._has_header

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def _rows(self) -> list[list[str]]:
        return [line.split(self._delimiter) for line in self._raw.splitlines() if line]

    def header(self) -> list[str]:
        """Fila de cabecera (vacía si el documento se pidió con `header="0"`)."""

        if not self._has_header:
            return []
        rows = self._rows()
        return rows[0] if rows else []

    def records(self) -> list[list[str]]:
        """Filas de datos, sin la cabecera."""

        rows = self._rows()
        return rows[1:] if self._has_header else rows

    def as_dicts(self) -> list[dict[str, str]]:
        """Filas como dicts `{cabecera: valor}`; requiere cabecera."""

        header = self.header()
        if not header:
            raise ValueError("response has no header row")
        return [dict(zip(header, row)) for row in self.records()]

    def __len__(self) -> int:
        return len(self.records())

    def __repr__(self) -> str:
        return f"Response(raw={self._raw[:40]!r}{'...' if len(self._raw) > 40 else ''})"
