"""Adaptadores de infraestructura (HTTP, exportación)."""
