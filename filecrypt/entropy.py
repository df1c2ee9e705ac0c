# --------------------------------------------------------------
# File: entropy.py
# Description: Proveedor inyectable de aleatoriedad criptográfica.
# --------------------------------------------------------------
"""Fuentes de bytes aleatorios usadas para claves y nonces.

Las funciones del motor reciben un ``RandomSource`` opcional; si no se
indica, usan :class:`SystemRandomSource`, respaldada por ``os.urandom``.
Las pruebas pueden inyectar una fuente determinista.
"""

from __future__ import annotations

import os
from typing import Optional, Protocol

from filecrypt.errors import EntropyUnavailable


class RandomSource(Protocol):
    """Contrato mínimo de una fuente de aleatoriedad."""

    def token_bytes(self, n: int) -> bytes:
        """Devuelve exactamente ``n`` bytes aleatorios."""
        ...


class SystemRandomSource:
    """Fuente basada en el CSPRNG del sistema operativo (thread-safe)."""

    def token_bytes(self, n: int) -> bytes:
        try:
            return os.urandom(n)
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailable("La fuente aleatoria del sistema no está disponible.") from exc


_SYSTEM_SOURCE = SystemRandomSource()


def default_source() -> RandomSource:
    """Devuelve la fuente aleatoria del sistema."""

    return _SYSTEM_SOURCE


def random_bytes(n: int, rng: Optional[RandomSource] = None) -> bytes:
    """Obtiene ``n`` bytes de la fuente indicada validando su longitud.

    Args:
        n (int): Número de bytes requeridos.
        rng (Optional[RandomSource]): Fuente alternativa; por defecto la del sistema.

    Returns:
        bytes: Bytes aleatorios de longitud ``n``.

    Raises:
        EntropyUnavailable: Si la fuente falla o entrega una longitud distinta.

    """

    source = rng if rng is not None else _SYSTEM_SOURCE
    try:
        data = source.token_bytes(n)
    except EntropyUnavailable:
        raise
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailable("La fuente aleatoria no pudo generar bytes.") from exc

    if not isinstance(data, (bytes, bytearray)) or len(data) != n:
        raise EntropyUnavailable(f"La fuente aleatoria devolvió una lectura incompleta ({n} bytes esperados).")
    return bytes(data)
