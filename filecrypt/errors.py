# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del motor de cifrado de archivos.
# --------------------------------------------------------------
"""Errores que el motor de cifrado expone a la capa que lo invoca."""


class CryptoError(Exception):
    """Base común para todos los fallos del motor de cifrado."""


class EntropyUnavailable(CryptoError):
    """La fuente aleatoria segura no pudo entregar bytes para clave o nonce."""


class MalformedKey(CryptoError):
    """La clave importada no es Base64 válido o no decodifica a 32 bytes."""


class AuthenticationFailed(CryptoError):
    """La verificación AES-GCM falló.

    Cubre clave incorrecta, nonce incorrecto y ciphertext alterado sin
    distinguir la causa.
    """

    MESSAGE = "No se ha podido autenticar el archivo cifrado."

    def __init__(self) -> None:
        super().__init__(self.MESSAGE)


class MalformedEnvelope(CryptoError):
    """El sobre serializado no respeta el formato nonce|ct|tag."""


class StoredFileUnreadable(Exception):
    """El sidecar o el blob guardado falta, está corrupto o no valida."""
