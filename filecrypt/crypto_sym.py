# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado de archivos.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico para proteger archivos antes de subirlos.

Formato del ciphertext: ``datos_cifrados || tag`` con un tag de 16 bytes al
final, tal y como lo produce ``AESGCM``. El nonce de 12 bytes viaja aparte.
"""

from typing import Optional, Tuple, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from filecrypt.crypto_keys import SymmetricKey
from filecrypt.entropy import RandomSource, random_bytes
from filecrypt.errors import AuthenticationFailed

NONCE_SIZE = 12
TAG_SIZE = 16

BytesLike = Union[bytes, bytearray, memoryview]


def encrypt_file(
    plaintext: BytesLike, key: SymmetricKey, rng: Optional[RandomSource] = None
) -> Tuple[bytes, bytes]:
    """Cifra un archivo con AES-256-GCM bajo un nonce nuevo.

    Args:
        plaintext (BytesLike): Contenido en claro del archivo.
        key (SymmetricKey): Clave simétrica de la sesión.
        rng (Optional[RandomSource]): Fuente aleatoria para el nonce.

    Returns:
        Tuple[bytes, bytes]: Ciphertext con el tag al final y nonce de 96 bits.

    Raises:
        EntropyUnavailable: Si no se pudo generar el nonce.

    """

    nonce = random_bytes(NONCE_SIZE, rng)
    aes = AESGCM(key.raw)
    ciphertext = aes.encrypt(nonce, bytes(plaintext), None)
    return ciphertext, nonce


def decrypt_file(ciphertext: BytesLike, key: SymmetricKey, nonce: BytesLike) -> bytes:
    """Descifra y verifica un archivo cifrado con :func:`encrypt_file`.

    Args:
        ciphertext (BytesLike): Datos cifrados con el tag de 128 bits al final.
        key (SymmetricKey): Clave usada en el cifrado.
        nonce (BytesLike): Nonce de 12 bytes que acompañaba al ciphertext.

    Returns:
        bytes: Contenido original en claro.

    Raises:
        AuthenticationFailed: Ante cualquier fallo de verificación, sin
            distinguir entre clave, nonce o datos alterados.

    """

    nonce = bytes(nonce)
    ciphertext = bytes(ciphertext)
    if len(nonce) != NONCE_SIZE or len(ciphertext) < TAG_SIZE:
        raise AuthenticationFailed()

    aes = AESGCM(key.raw)
    try:
        return aes.decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise AuthenticationFailed() from None
