"""Transporte httpx hacia `martservice`.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para todas las peticiones.
- Facilita testeo: se puede construir con un `httpx.MockTransport`.
- Implementa `core.interfaces.transport.MartTransport`; el Core no importa httpx.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from core.config import AppSettings
from core.interfaces.transport import MartTransport, TransportReply
from core.services.mart_client import MartClient

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - `transport` permite inyectar un `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/plain,text/tab-separated-values,application/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxMartTransport(MartTransport):
    """Envía los parámetros como formulario (`POST`) al endpoint configurado.

    Nota:
    - Errores de red (`httpx.HTTPError`) se propagan tal cual; no hay reintentos.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    @property
    def url(self) -> str:
        return self._settings.server_url

    def send(self, params: Sequence[tuple[str, str]]) -> TransportReply:
        response = self._client.post(self.url, data=dict(params))
        logger.debug("POST %s -> HTTP %d (%d bytes)", self.url, response.status_code, len(response.content))
        return TransportReply(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def open_mart_client(settings: AppSettings | None = None) -> MartClient:
    """Cliente listo para usar contra el servidor configurado."""

    return MartClient(HttpxMartTransport(settings))
