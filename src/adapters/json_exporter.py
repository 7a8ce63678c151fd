"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Conserva los campos extra que la API devuelve y no modelamos.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel


def export_models_json(*, items: BaseModel | Sequence[BaseModel], output_path: Path) -> Path:
    """Exporta uno o varios modelos a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(items, BaseModel):
        payload: object = items.model_dump(mode="json")
    else:
        payload = [item.model_dump(mode="json") for item in items]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
