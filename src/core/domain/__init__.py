"""Modelos, queries y constantes de red del dominio.

- Estructuras de datos estrictas (Pydantic v2) para órdenes, assets, bundles y tokens.
- El dominio no conoce HTTP ni CLI: solo la forma de los datos de la API.
"""
