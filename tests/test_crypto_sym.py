# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del cifrado y descifrado de archivos con AES-GCM.
# --------------------------------------------------------------

import os

import pytest

from filecrypt.crypto_keys import generate_key
from filecrypt.crypto_sym import NONCE_SIZE, TAG_SIZE, decrypt_file, encrypt_file
from filecrypt.errors import AuthenticationFailed, EntropyUnavailable


def _flip_bit(data: bytes, bit: int) -> bytes:
    buf = bytearray(data)
    buf[bit // 8] ^= 1 << (bit % 8)
    return bytes(buf)


def test_hello_world_scenario(key):
    """Cifra "hello world" y comprueba tamaños, recuperación y rechazo con otra clave.

    Returns:
        None: Las aserciones recorren el escenario completo.
    """
    ct, nonce = encrypt_file(b"hello world", key)
    assert len(ct) == 11 + 16 == 27
    assert len(nonce) == 12
    assert decrypt_file(ct, key, nonce) == b"hello world"

    with pytest.raises(AuthenticationFailed):
        decrypt_file(ct, generate_key(), nonce)


def test_empty_plaintext_yields_tag_only(key):
    """Comprueba que un buffer vacío produzca solo el tag de 16 bytes.

    Returns:
        None: Las aserciones revisan longitud y descifrado.
    """
    ct, nonce = encrypt_file(b"", key)
    assert len(ct) == TAG_SIZE
    assert decrypt_file(ct, key, nonce) == b""


@pytest.mark.parametrize("size", [1, 15, 16, 17, 1024, 1024 * 1024 + 3])
def test_roundtrip_various_sizes(key, size):
    """Verifica el descifrado exacto para tamaños dentro y fuera de bloque.

    Args:
        size (int): Longitud del contenido en claro.

    Returns:
        None: Las aserciones comparan claro y descifrado.
    """
    plaintext = os.urandom(size)
    ct, nonce = encrypt_file(plaintext, key)
    assert len(ct) == size + TAG_SIZE
    assert decrypt_file(ct, key, nonce) == plaintext


def test_accepts_bytearray_and_memoryview(key):
    data = bytearray(b"certificado.pdf")
    ct, nonce = encrypt_file(memoryview(data), key)
    assert decrypt_file(bytearray(ct), key, memoryview(nonce)) == bytes(data)


def test_same_plaintext_gives_different_ciphertexts(key):
    ct1, nonce1 = encrypt_file(b"foto de perfil", key)
    ct2, nonce2 = encrypt_file(b"foto de perfil", key)
    assert nonce1 != nonce2
    assert ct1 != ct2


def test_nonce_uniqueness(key):
    """Evalúa que 10.000 nonces consecutivos bajo la misma clave no se repitan.

    Returns:
        None: Las aserciones verifican la ausencia de colisiones.
    """
    nonces = set()
    for _ in range(10_000):
        _, nonce = encrypt_file(b"x", key)
        assert len(nonce) == NONCE_SIZE
        nonces.add(nonce)
    assert len(nonces) == 10_000


def test_every_ciphertext_bit_flip_is_detected(key):
    """Garantiza que alterar cualquier bit del ciphertext (tag incluido) falle.

    Returns:
        None: Se espera AuthenticationFailed en cada posición.
    """
    ct, nonce = encrypt_file(b"hello world", key)
    for bit in range(len(ct) * 8):
        with pytest.raises(AuthenticationFailed):
            decrypt_file(_flip_bit(ct, bit), key, nonce)


def test_every_nonce_bit_flip_is_detected(key):
    """Comprueba que modificar cualquier bit del nonce provoque fallo.

    Returns:
        None: Se espera AuthenticationFailed en cada posición.
    """
    ct, nonce = encrypt_file(b"hello world", key)
    for bit in range(len(nonce) * 8):
        with pytest.raises(AuthenticationFailed):
            decrypt_file(ct, key, _flip_bit(nonce, bit))


def test_wrong_key_is_rejected(key):
    ct, nonce = encrypt_file(os.urandom(64), key)
    for _ in range(20):
        with pytest.raises(AuthenticationFailed):
            decrypt_file(ct, generate_key(), nonce)


@pytest.mark.parametrize("nonce_len", [0, 8, 11, 13, 16])
def test_wrong_nonce_length_is_authentication_failure(key, nonce_len):
    ct, _ = encrypt_file(b"msg", key)
    with pytest.raises(AuthenticationFailed):
        decrypt_file(ct, key, b"\x00" * nonce_len)


def test_truncated_ciphertext_is_rejected(key):
    ct, nonce = encrypt_file(b"msg", key)
    with pytest.raises(AuthenticationFailed):
        decrypt_file(ct[:TAG_SIZE - 1], key, nonce)
    with pytest.raises(AuthenticationFailed):
        decrypt_file(ct[:-1], key, nonce)


def test_failures_share_one_generic_message(key):
    """Verifica que las causas de fallo no se distingan en el error.

    Returns:
        None: Las aserciones comparan mensajes y ausencia de causa encadenada.
    """
    ct, nonce = encrypt_file(b"msg", key)
    errors = []
    for args in (
        (ct, generate_key(), nonce),
        (ct, key, _flip_bit(nonce, 0)),
        (_flip_bit(ct, 0), key, nonce),
        (ct, key, b"short"),
    ):
        with pytest.raises(AuthenticationFailed) as info:
            decrypt_file(*args)
        errors.append(info.value)

    assert len({str(err) for err in errors}) == 1
    assert all(err.__cause__ is None for err in errors)


def test_injected_source_controls_nonce(key, counting_rng):
    ct1, nonce1 = encrypt_file(b"a", key, rng=counting_rng)
    _, nonce2 = encrypt_file(b"a", key, rng=counting_rng)
    assert nonce1 == (1).to_bytes(12, "big")
    assert nonce2 == (2).to_bytes(12, "big")
    assert decrypt_file(ct1, key, nonce1) == b"a"


def test_entropy_failure_is_surfaced(key, broken_rng, short_rng):
    with pytest.raises(EntropyUnavailable):
        encrypt_file(b"a", key, rng=broken_rng)
    with pytest.raises(EntropyUnavailable):
        encrypt_file(b"a", key, rng=short_rng)


def test_concurrent_encryption_is_independent(key):
    """Cifra en paralelo desde varios hilos sin coordinación externa.

    Returns:
        None: Las aserciones comprueban nonces únicos y descifrado correcto.
    """
    from concurrent.futures import ThreadPoolExecutor

    payloads = [os.urandom(256) for _ in range(64)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda p: encrypt_file(p, key), payloads))

    assert len({nonce for _, nonce in results}) == len(payloads)
    for payload, (ct, nonce) in zip(payloads, results):
        assert decrypt_file(ct, key, nonce) == payload
