"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Conserva cabecera + filas sin depender del render de la terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.query import QueryDocument
from core.domain.response import Response


def export_response_json(
    *,
    response: Response,
    output_path: Path,
    document: QueryDocument | None = None,
) -> Path:
    """Exporta un `Response` a JSON UTF-8 con formato estable.

    Si se pasa `document`, se incluye el dataset y el XML enviado para
    trazabilidad.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload: dict[str, object] = {
        "header": response.header(),
        "records": response.records(),
    }
    if document is not None:
        payload["dataset"] = document.dataset.name
        payload["query"] = document.to_text()
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
