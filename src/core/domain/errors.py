"""Errores del cliente BioMart.

Por qué una jerarquía propia:
- El llamador recibe un valor tipado o un único error clasificado.
- La clasificación (status/servidor/decodificación) es la señal principal,
  no el código HTTP crudo.
"""

from __future__ import annotations


class MartError(Exception):
    """Raíz de todos los errores del cliente."""


class StatusError(MartError):
    """Respuesta no exitosa que no es un error de servidor (p.ej. 4xx)."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Error, status code: {status_code}")
        self.status_code = status_code


class ServerError(MartError):
    """Error de la clase 5xx. No transporta el cuerpo de la respuesta."""

    def __init__(self) -> None:
        super().__init__("Server error")


class QueryError(MartError):
    """BioMart devolvió 2xx pero el cuerpo reporta un error de consulta."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MetadataDecodeError(MartError):
    """Documento de metadata estructuralmente inválido."""


class QueryBuildError(MartError, ValueError):
    """El documento no se puede construir o enviar (sin dataset, formatter no tabular)."""
