# --------------------------------------------------------------
# File: test_entropy.py
# Description: Pruebas del proveedor de aleatoriedad inyectable.
# --------------------------------------------------------------

import os

import pytest

from filecrypt.entropy import SystemRandomSource, default_source, random_bytes
from filecrypt.errors import EntropyUnavailable


def test_system_source_returns_requested_length():
    assert len(random_bytes(12)) == 12
    assert len(default_source().token_bytes(32)) == 32


def test_system_source_wraps_os_errors(monkeypatch):
    """Comprueba que un fallo de os.urandom se traduzca a EntropyUnavailable.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para sustituir os.urandom.

    Returns:
        None: Se espera la excepción con la causa original encadenada.
    """

    def _fail(n):
        raise OSError("no entropy")

    monkeypatch.setattr(os, "urandom", _fail)
    with pytest.raises(EntropyUnavailable) as info:
        SystemRandomSource().token_bytes(12)
    assert isinstance(info.value.__cause__, OSError)


def test_short_read_is_rejected(short_rng):
    with pytest.raises(EntropyUnavailable):
        random_bytes(12, short_rng)


def test_non_bytes_result_is_rejected():
    class _Bad:
        def token_bytes(self, n):
            return "x" * n

    with pytest.raises(EntropyUnavailable):
        random_bytes(4, _Bad())
