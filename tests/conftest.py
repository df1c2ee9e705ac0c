# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar almacenamiento y fuentes aleatorias.
# --------------------------------------------------------------

import importlib
from typing import Iterator

import pytest

from filecrypt.crypto_keys import generate_key


class CountingRandomSource:
    """Fuente determinista: cada llamada devuelve un contador distinto."""

    def __init__(self) -> None:
        self.calls = 0

    def token_bytes(self, n: int) -> bytes:
        self.calls += 1
        return self.calls.to_bytes(n, "big")


class BrokenRandomSource:
    """Fuente que simula un CSPRNG no disponible."""

    def token_bytes(self, n: int) -> bytes:
        raise OSError("getrandom() failed")


class ShortRandomSource:
    """Fuente que devuelve menos bytes de los pedidos."""

    def token_bytes(self, n: int) -> bytes:
        return b"\x00" * (n - 1)


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH y recarga filecrypt.config para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    data_dir.mkdir()
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))

    import filecrypt.config as config_module

    importlib.reload(config_module)

    yield
    # tmp_path se limpia automáticamente por pytest


@pytest.fixture
def key():
    return generate_key()


@pytest.fixture
def counting_rng():
    return CountingRandomSource()


@pytest.fixture
def broken_rng():
    return BrokenRandomSource()


@pytest.fixture
def short_rng():
    return ShortRandomSource()
