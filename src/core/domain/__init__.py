"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los recursos de la Gamma API y los filtros de consulta (Pydantic v2).
- El dominio no conoce HTTP ni la CLI: solo el contrato de datos.
"""
