"""Traducción página -> limit/offset y recolección de varias páginas.

La API pagina por `limit`/`offset`; el cliente expone páginas 1-based. Esta
lógica es pura (sin I/O) para que el adaptador y la CLI la compartan.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")


def page_window(page: int, page_size: int) -> tuple[int, int]:
    """Devuelve `(limit, offset)` para una página 1-based."""

    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return page_size, (page - 1) * page_size


def merge_page_params(params: dict[str, Any], *, page: int, page_size: int) -> dict[str, Any]:
    """Añade `limit`/`offset` derivados de `page` salvo que ya vengan en `params`."""

    limit, offset = page_window(page, page_size)
    merged = {"limit": limit, "offset": offset}
    merged.update(params)
    return merged


async def collect_pages(
    fetch_page: Callable[[int], Awaitable[Sequence[T]]],
    *,
    pages: int,
    start_page: int = 1,
) -> list[T]:
    """Pide `pages` páginas en secuencia y concatena los resultados.

    Se detiene en la primera página vacía.
    """

    out: list[T] = []
    for page in range(start_page, start_page + max(0, pages)):
        items = await fetch_page(page)
        if not items:
            break
        out.extend(items)
    return out
