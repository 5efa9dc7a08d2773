"""Núcleo: configuración, errores tipados, dominio y contratos."""
