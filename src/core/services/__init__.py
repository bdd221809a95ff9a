"""Servicios del Core.

Por qué un paquete:
- Agrupa la orquestación (builder, fachada del cliente, decodificación de
  metadata) separada de los modelos puros del dominio.
"""
