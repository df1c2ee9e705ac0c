# --------------------------------------------------------------
# File: crypto_keys.py
# Description: Generación, exportación e importación de claves AES-256-GCM.
# --------------------------------------------------------------
"""Ciclo de vida de la clave simétrica que protege los archivos."""

from __future__ import annotations

import base64
import binascii
import hmac
from typing import Optional, Union

from filecrypt.entropy import RandomSource, random_bytes
from filecrypt.errors import MalformedKey

KEY_SIZE = 32
ALGORITHM = "AES-256-GCM"


class SymmetricKey:
    """Clave simétrica opaca de 256 bits.

    Los bytes viven en un ``bytearray`` propio que se sobrescribe con ceros
    al llamar a :meth:`wipe`, al salir de un bloque ``with`` o cuando el
    objeto se destruye.
    """

    __slots__ = ("_buf", "_wiped")

    algorithm = ALGORITHM

    def __init__(self, raw: Union[bytes, bytearray, memoryview]) -> None:
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise MalformedKey("La clave debe proporcionarse como bytes.")
        if len(raw) != KEY_SIZE:
            raise MalformedKey(f"La clave debe tener {KEY_SIZE} bytes; recibidos {len(raw)}.")
        self._buf = bytearray(raw)
        self._wiped = False

    @property
    def raw(self) -> bytes:
        """Copia inmutable de los 32 bytes de la clave."""

        if self._wiped:
            raise RuntimeError("La clave ya fue destruida.")
        return bytes(self._buf)

    @property
    def wiped(self) -> bool:
        return self._wiped

    def wipe(self) -> None:
        """Sobrescribe el material de clave con ceros."""

        for i in range(len(self._buf)):
            self._buf[i] = 0
        self._wiped = True

    def __enter__(self) -> "SymmetricKey":
        return self

    def __exit__(self, *exc_info) -> None:
        self.wipe()

    def __del__(self) -> None:
        # __init__ puede haber fallado antes de crear el buffer.
        if hasattr(self, "_buf"):
            self.wipe()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymmetricKey):
            return NotImplemented
        if self._wiped or other._wiped:
            return self is other
        return hmac.compare_digest(bytes(self._buf), bytes(other._buf))

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return len(self._buf)

    def __repr__(self) -> str:
        state = "wiped" if self._wiped else "active"
        return f"SymmetricKey(algorithm={self.algorithm!r}, state={state!r})"


def generate_key(rng: Optional[RandomSource] = None) -> SymmetricKey:
    """Genera una clave AES-256 uniformemente aleatoria.

    Args:
        rng (Optional[RandomSource]): Fuente aleatoria inyectada; por defecto
            ``os.urandom``.

    Returns:
        SymmetricKey: Clave nueva de 256 bits.

    Raises:
        EntropyUnavailable: Si la fuente aleatoria falla.

    """

    return SymmetricKey(random_bytes(KEY_SIZE, rng))


def export_key(key: SymmetricKey) -> str:
    """Serializa la clave en Base64 estándar, sin saltos de línea.

    Args:
        key (SymmetricKey): Clave a exportar.

    Returns:
        str: Representación textual determinista de los 32 bytes.

    """

    return base64.b64encode(key.raw).decode("ascii")


def import_key(value: Union[str, bytes]) -> SymmetricKey:
    """Reconstruye una clave a partir de su forma Base64.

    Args:
        value (Union[str, bytes]): Texto producido por :func:`export_key`.

    Returns:
        SymmetricKey: Clave idéntica byte a byte a la exportada.

    Raises:
        MalformedKey: Si el texto no es Base64 válido o no decodifica a 32 bytes.

    """

    if isinstance(value, str):
        try:
            value = value.strip().encode("ascii")
        except UnicodeEncodeError:
            raise MalformedKey("La clave contiene caracteres fuera de Base64.") from None
    elif isinstance(value, (bytes, bytearray)):
        value = bytes(value).strip()
    else:
        raise MalformedKey("La clave debe ser una cadena Base64.")

    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedKey("La clave no es Base64 válido.") from None

    if len(raw) != KEY_SIZE:
        raise MalformedKey(f"La clave decodificada mide {len(raw)} bytes; se esperaban {KEY_SIZE}.")
    return SymmetricKey(raw)
