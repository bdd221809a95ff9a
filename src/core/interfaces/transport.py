"""Contrato del transporte hacia `martservice`.

Por qué Protocol:
- El Core solo necesita "enviar parámetros, recibir status + texto".
- Permite sustituir httpx por un stub en tests sin herencia rígida.
- Timeouts, pooling y reintentos son responsabilidad del transporte.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportReply:
    """Respuesta cruda: código de estado y cuerpo como texto."""

    status_code: int
    text: str


@runtime_checkable
class MartTransport(Protocol):
    """Contrato mínimo de transporte.

    Reglas de diseño:
    - `send` es síncrono: una petición lógica produce una respuesta lógica.
    - Los parámetros se envían en el orden recibido.
    """

    def send(self, params: Sequence[tuple[str, str]]) -> TransportReply:
        """Envía `params` al endpoint y devuelve la respuesta sin interpretar."""

        ...
