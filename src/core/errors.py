"""Errores tipados del cliente.

Jerarquía:
- `OpenSeaAPIError`: base, lleva `status_code`, `payload` y `path` cuando existen.
- `ValidationError`: la API rechazó la petición (4xx). No se reintenta.
- `UnauthorizedError`: 401/403 (subclase de `ValidationError`).
- `NotFoundError`: 404. Los getters de un solo recurso lo convierten en `None`.
- `TransientServiceError`: 5xx, 429 o fallo de red. Reintentable.
- `UnexpectedResponseShape`: el cuerpo no es JSON o no encaja con el modelo.
"""

from __future__ import annotations

from typing import Any


class OpenSeaAPIError(RuntimeError):
    """Error base de todas las llamadas a la API."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.path = path


class ValidationError(OpenSeaAPIError):
    """La API rechazó la petición como inválida."""


class UnauthorizedError(ValidationError):
    """API key ausente, inválida o sin permisos."""


class NotFoundError(OpenSeaAPIError):
    """El recurso no existe (HTTP 404)."""


class TransientServiceError(OpenSeaAPIError):
    """Servicio no disponible (5xx/429) o fallo de transporte."""


class UnexpectedResponseShape(OpenSeaAPIError):
    """Respuesta 2xx con un cuerpo que no coincide con la estructura esperada."""
