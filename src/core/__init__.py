"""Core del cliente BioMart: dominio, contratos y servicios (sin I/O)."""
