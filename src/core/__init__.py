"""Core: configuración, errores, dominio y contratos (sin I/O)."""
