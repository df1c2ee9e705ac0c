# --------------------------------------------------------------
# File: vault.py
# Description: Bóveda local de archivos cifrados por usuario (blob + sidecar).
# --------------------------------------------------------------
"""Capa que invoca al motor de cifrado para guardar y recuperar archivos.

Cada propietario tiene una carpeta ``<STORAGE_PATH>/storage/<b64u(propietario)>/``.
Cada archivo se guarda como un blob ``<nombre>-<id>.enc`` con el formato
``nonce|ct|tag`` y un sidecar ``<nombre>.meta.json`` que apunta al blob
vigente. El sidecar se escribe después del blob, de modo que un corte entre
ambas escrituras deja intacta la pareja anterior.
"""

from __future__ import annotations

import base64
import logging
import os
import uuid
from datetime import UTC, datetime
from typing import List, Optional, Tuple

from filecrypt import config
from filecrypt.crypto_keys import SymmetricKey
from filecrypt.envelope import open_envelope, pack_envelope, seal, unpack_envelope
from filecrypt.errors import AuthenticationFailed, StoredFileUnreadable
from filecrypt.models import StoredFileMeta
from filecrypt.storage import load_json, read_bytes, save_json, write_bytes_atomic

logger = logging.getLogger(__name__)

ENC_SUFFIX = ".enc"
META_SUFFIX = ".meta.json"


def _b64u(data: bytes) -> str:
    """Codifica datos binarios en Base64 URL-safe sin relleno."""

    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def secure_name(name: str) -> str:
    """Normaliza el nombre de archivo para evitar caracteres problemáticos.

    Args:
        name (str): Nombre original proporcionado por el usuario.

    Returns:
        str: Nombre limpio y libre de rutas o caracteres inválidos.

    """
    bad = '<>:"/\\|?*'
    for ch in bad:
        name = name.replace(ch, "_")
    name = name.strip().replace("..", "_")
    return name or "archivo"


def user_dir(owner: str) -> str:
    """Carpeta del propietario; la codificación es reversible y no colisiona.

    Raises:
        ValueError: Si el propietario está vacío.

    """

    if not owner:
        raise ValueError("El propietario no puede estar vacío.")
    return os.path.join(config.VAULT_DIR, _b64u(owner.encode("utf-8")))


def _meta_path(owner: str, meta_name: str) -> str:
    if secure_name(meta_name) != meta_name or not meta_name.endswith(META_SUFFIX):
        raise ValueError(f"Nombre de sidecar inválido: {meta_name!r}")
    return os.path.join(user_dir(owner), meta_name)


def _existing_meta(path: str) -> Optional[StoredFileMeta]:
    if not os.path.exists(path):
        return None
    return StoredFileMeta.model_validate(load_json(path))


def store_file(owner: str, filename: str, data: bytes, key: SymmetricKey) -> StoredFileMeta:
    """Cifra un archivo y lo guarda junto a su sidecar de metadatos.

    Volver a subir un archivo con el mismo nombre original lo reemplaza. Un
    nombre distinto que se normaliza igual que uno ya guardado se rechaza.

    Args:
        owner (str): Identificador del propietario (p. ej. email).
        filename (str): Nombre original del archivo.
        data (bytes): Contenido en claro.
        key (SymmetricKey): Clave de la sesión del propietario.

    Returns:
        StoredFileMeta: Metadatos persistidos.

    Raises:
        FileExistsError: Si otro archivo ya ocupa el mismo nombre normalizado.
        EntropyUnavailable: Si no se pudo generar el nonce.

    """

    base = secure_name(filename)
    folder = user_dir(owner)
    meta_path = os.path.join(folder, base + META_SUFFIX)

    previous = _existing_meta(meta_path)
    if previous is not None and previous.original_filename != filename:
        raise FileExistsError(
            f"{filename!r} colisiona con {previous.original_filename!r} ya guardado como {base!r}."
        )

    envelope = seal(data, key)
    stored_as = f"{base}-{uuid.uuid4().hex}{ENC_SUFFIX}"
    write_bytes_atomic(pack_envelope(envelope), os.path.join(folder, stored_as))

    meta = StoredFileMeta(
        original_filename=filename,
        stored_as=stored_as,
        size=len(data),
        ciphertext_length=len(envelope.ciphertext),
        created_at=datetime.now(UTC),
    )
    # El sidecar solo apunta al blob nuevo cuando este ya está en disco.
    save_json(meta.model_dump(mode="json"), meta_path)

    if previous is not None and previous.stored_as != stored_as:
        old_blob = os.path.join(folder, secure_name(previous.stored_as))
        try:
            os.remove(old_blob)
        except FileNotFoundError:
            logger.warning("Previous blob %s of %s was already missing", previous.stored_as, owner)

    logger.info("Stored %s for %s (%d bytes)", meta.stored_as, owner, meta.size)
    return meta


def list_files(owner: str) -> List[str]:
    """Devuelve los sidecars ``.meta.json`` del propietario, ordenados."""

    folder = user_dir(owner)
    if not os.path.isdir(folder):
        return []
    return sorted(f for f in os.listdir(folder) if f.endswith(META_SUFFIX))


def read_meta(owner: str, meta_name: str) -> StoredFileMeta:
    return StoredFileMeta.model_validate(load_json(_meta_path(owner, meta_name)))


def read_blob(owner: str, meta: StoredFileMeta) -> bytes:
    return read_bytes(os.path.join(user_dir(owner), secure_name(meta.stored_as)))


def load_file(owner: str, meta_name: str, key: SymmetricKey) -> bytes:
    """Recupera y descifra un archivo guardado con :func:`store_file`.

    Args:
        owner (str): Identificador del propietario.
        meta_name (str): Nombre del sidecar devuelto por :func:`list_files`.
        key (SymmetricKey): Clave con la que se cifró el archivo.

    Returns:
        bytes: Contenido original en claro.

    Raises:
        AuthenticationFailed: Si la verificación AES-GCM falla.
        MalformedEnvelope: Si el blob en disco está truncado.
        StoredFileUnreadable: Si falta el sidecar o el blob, o no son válidos.

    """

    meta, blob = open_stored(owner, meta_name)
    envelope = unpack_envelope(blob)
    try:
        plaintext = open_envelope(envelope, key)
    except AuthenticationFailed:
        logger.warning("Authentication failed for %s of %s", meta.stored_as, owner)
        raise

    logger.info("Loaded %s for %s", meta.stored_as, owner)
    return plaintext


def open_stored(owner: str, meta_name: str) -> Tuple[StoredFileMeta, bytes]:
    """Lee sidecar y blob juntos para mostrarlos o descargarlos.

    Raises:
        StoredFileUnreadable: Si falta alguno de los dos o el sidecar es inválido.

    """

    try:
        meta = read_meta(owner, meta_name)
        return meta, read_blob(owner, meta)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError y pydantic.ValidationError heredan de ValueError.
        logger.warning("Unreadable stored file %s of %s: %s", meta_name, owner, exc)
        raise StoredFileUnreadable(f"No se puede leer {meta_name!r}: {exc}") from exc
