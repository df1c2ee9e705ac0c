# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan sobres cifrados y sus metadatos."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Dict

from pydantic import BaseModel, ValidationError, field_validator

from filecrypt.crypto_sym import NONCE_SIZE, TAG_SIZE
from filecrypt.errors import MalformedEnvelope


class EncryptedFile(BaseModel):
    """Sobre AES-GCM: ciphertext con tag al final y su nonce.

    Attributes:
        ciphertext (bytes): Datos cifrados seguidos del tag de 16 bytes.
        nonce (bytes): Nonce de 12 bytes usado durante el cifrado.

    """

    ciphertext: bytes
    nonce: bytes

    @field_validator("nonce")
    @classmethod
    def _check_nonce(cls, value: bytes) -> bytes:
        if len(value) != NONCE_SIZE:
            raise ValueError(f"el nonce debe medir {NONCE_SIZE} bytes")
        return value

    @field_validator("ciphertext")
    @classmethod
    def _check_ciphertext(cls, value: bytes) -> bytes:
        if len(value) < TAG_SIZE:
            raise ValueError(f"el ciphertext debe incluir al menos el tag de {TAG_SIZE} bytes")
        return value

    @property
    def plaintext_length(self) -> int:
        return len(self.ciphertext) - TAG_SIZE

    def to_dict(self) -> Dict[str, str]:
        """Representa el sobre con campos Base64 estándar aptos para JSON."""

        return {
            "nonce": base64.b64encode(self.nonce).decode("ascii"),
            "ciphertext": base64.b64encode(self.ciphertext).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "EncryptedFile":
        """Reconstruye el sobre desde :meth:`to_dict`.

        Raises:
            MalformedEnvelope: Si faltan campos, el Base64 es inválido o las
                longitudes no encajan.

        """

        try:
            nonce = base64.b64decode(data["nonce"], validate=True)
            ciphertext = base64.b64decode(data["ciphertext"], validate=True)
            return cls(ciphertext=ciphertext, nonce=nonce)
        except (KeyError, TypeError, binascii.Error, ValueError, ValidationError) as exc:
            raise MalformedEnvelope("Sobre cifrado con formato inválido.") from exc


class StoredFileMeta(BaseModel):
    """Metadatos sidecar de un archivo cifrado guardado en disco.

    Attributes:
        version (int): Versión del formato del sidecar.
        original_filename (str): Nombre del archivo tal como se subió.
        stored_as (str): Nombre del blob ``.enc`` dentro de la carpeta del usuario.
        algo (str): Algoritmo AEAD aplicado.
        size (int): Tamaño del contenido en claro.
        ciphertext_length (int): Tamaño del ciphertext incluido el tag.
        created_at (datetime): Momento del guardado en UTC.

    """

    version: int = 1
    original_filename: str
    stored_as: str
    algo: str = "AES-256-GCM"
    size: int
    ciphertext_length: int
    created_at: datetime

    @field_validator("stored_as")
    @classmethod
    def _check_stored_as(cls, value: str) -> str:
        if not value.endswith(".enc") or "/" in value or "\\" in value or ".." in value:
            raise ValueError("stored_as debe ser un nombre de blob .enc sin rutas")
        return value
