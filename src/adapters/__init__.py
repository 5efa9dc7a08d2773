"""Adaptadores de I/O (HTTP) que implementan los contratos del Core."""
