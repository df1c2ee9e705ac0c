# --------------------------------------------------------------
# File: envelope.py
# Description: Empaquetado binario de sobres AES-GCM (nonce|ct|tag).
# --------------------------------------------------------------
"""Une ciphertext y nonce en una unidad duradera.

Formato binario del sobre::

    nonce (12 bytes) || datos cifrados (len(plaintext) bytes) || tag (16 bytes)

Es la misma disposición que la capa de almacenamiento escribe en los
ficheros ``.enc``.
"""

from typing import Optional

from pydantic import ValidationError

from filecrypt.crypto_keys import SymmetricKey
from filecrypt.crypto_sym import NONCE_SIZE, TAG_SIZE, BytesLike, decrypt_file, encrypt_file
from filecrypt.entropy import RandomSource
from filecrypt.errors import MalformedEnvelope
from filecrypt.models import EncryptedFile

MIN_ENVELOPE_SIZE = NONCE_SIZE + TAG_SIZE


def seal(plaintext: BytesLike, key: SymmetricKey, rng: Optional[RandomSource] = None) -> EncryptedFile:
    """Cifra el contenido y devuelve el sobre listo para guardar."""

    ciphertext, nonce = encrypt_file(plaintext, key, rng=rng)
    return EncryptedFile(ciphertext=ciphertext, nonce=nonce)


def open_envelope(envelope: EncryptedFile, key: SymmetricKey) -> bytes:
    """Descifra un sobre; propaga ``AuthenticationFailed`` si no verifica."""

    return decrypt_file(envelope.ciphertext, key, envelope.nonce)


def pack_envelope(envelope: EncryptedFile) -> bytes:
    return envelope.nonce + envelope.ciphertext


def unpack_envelope(blob: BytesLike) -> EncryptedFile:
    """Separa un blob ``nonce|ct|tag`` en su sobre.

    Args:
        blob (BytesLike): Bytes leídos de almacenamiento o red.

    Returns:
        EncryptedFile: Sobre con el nonce y el ciphertext (tag incluido).

    Raises:
        MalformedEnvelope: Si el blob no alcanza el tamaño de nonce más tag.

    """

    blob = bytes(blob)
    if len(blob) < MIN_ENVELOPE_SIZE:
        raise MalformedEnvelope(
            f"El sobre mide {len(blob)} bytes; el mínimo es {MIN_ENVELOPE_SIZE}."
        )
    try:
        return EncryptedFile(nonce=blob[:NONCE_SIZE], ciphertext=blob[NONCE_SIZE:])
    except ValidationError as exc:
        raise MalformedEnvelope("Sobre cifrado con formato inválido.") from exc
