"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni transporte: solo conceptos de BioMart
  (marts, datasets, filtros, atributos, documento de consulta).
"""
