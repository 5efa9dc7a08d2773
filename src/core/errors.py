"""Errores tipados del cliente Gamma.

Por qué una jerarquía de excepciones:
- Un único `except ClientError` captura cualquier fallo del cliente.
- Cada subclase lleva el contexto de diagnóstico (método, path, status) para
  que el llamador decida si es un bug, un recurso inexistente o un fallo de red.

Ninguna capa reintenta ni recupera: los errores suben tal cual.
"""

from __future__ import annotations

from enum import Enum

NOT_FOUND_MESSAGE = "Unable to find requested resource"


class ErrorKind(str, Enum):
    """Categoría de un `ClientError`."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"


class ClientError(Exception):
    """Raíz de todos los errores del cliente Gamma.

    Example:
        try:
            tag = await client.tag_by_slug("politics")
        except StatusError as e:
            if e.is_not_found:
                ...
        except TransportError:
            # fallo de red, se puede reintentar en una capa superior
            ...
    """

    kind: ErrorKind

    @property
    def is_transient(self) -> bool:
        return False


class ConfigurationError(ClientError):
    """El host base no es una URL absoluta válida (solo en construcción)."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, host: str | None = None) -> None:
        super().__init__(message)
        self.host = host


class TransportError(ClientError):
    """Fallo de DNS, conexión, TLS o timeout al enviar la petición."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, method: str, path: str, cause: BaseException) -> None:
        super().__init__(f"{method} {path}: {type(cause).__name__}: {cause}")
        self.method = method
        self.path = path
        self.cause = cause

    @property
    def is_transient(self) -> bool:
        return True


class StatusError(ClientError):
    """Respuesta no-2xx, o 404 sintetizado para un cuerpo `null`.

    Attributes:
        status_code: Código HTTP recibido (o 404 en la normalización).
        method: Método HTTP de la petición.
        path: Path de la petición (sin query string).
        message: Texto del cuerpo devuelto por el servidor, tal cual.
    """

    kind = ErrorKind.STATUS

    def __init__(self, status_code: int, method: str, path: str, message: str) -> None:
        super().__init__(f"{method} {path} returned HTTP {status_code}: {message}")
        self.status_code = status_code
        self.method = method
        self.path = path
        self.message = message

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class DecodeError(ClientError):
    """El cuerpo 2xx no encaja con el tipo esperado."""

    kind = ErrorKind.DECODE

    def __init__(self, method: str, path: str, cause: BaseException) -> None:
        super().__init__(f"{method} {path}: unable to decode response body: {cause}")
        self.method = method
        self.path = path
        self.cause = cause
        self.message = str(cause)
