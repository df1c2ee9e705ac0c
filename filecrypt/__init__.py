# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del motor de cifrado de archivos.
# --------------------------------------------------------------
"""Inicializa el paquete `filecrypt` y reexporta sus operaciones principales."""

from filecrypt.crypto_keys import SymmetricKey, export_key, generate_key, import_key
from filecrypt.crypto_sym import decrypt_file, encrypt_file
from filecrypt.errors import (
    AuthenticationFailed,
    CryptoError,
    EntropyUnavailable,
    MalformedEnvelope,
    MalformedKey,
)

__all__ = [
    "AuthenticationFailed",
    "CryptoError",
    "EntropyUnavailable",
    "MalformedEnvelope",
    "MalformedKey",
    "SymmetricKey",
    "decrypt_file",
    "encrypt_file",
    "export_key",
    "generate_key",
    "import_key",
]
