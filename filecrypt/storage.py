# --------------------------------------------------------------
# File: storage.py
# Description: Escritura atómica de blobs cifrados y sidecars JSON.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para el almacenamiento local."""

from __future__ import annotations

import json
import os
from typing import Any, Dict

__all__ = ["load_json", "read_bytes", "save_json", "write_bytes_atomic"]


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def write_bytes_atomic(data: bytes, path: str) -> None:
    """Escribe un blob binario mediante archivo temporal y ``os.replace``.

    Args:
        data (bytes): Contenido a persistir.
        path (str): Ruta final del archivo.

    """

    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "wb") as handler:
        handler.write(data)
    os.replace(tmp_path, path)


def read_bytes(path: str) -> bytes:
    with open(path, "rb") as handler:
        return handler.read()


def save_json(data: Dict[str, Any], path: str) -> None:
    """Guarda un documento JSON aplicando escritura atómica."""

    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as handler:
        json.dump(data, handler, indent=2, ensure_ascii=False)
    os.replace(tmp_path, path)


def load_json(path: str) -> Dict[str, Any]:
    """Carga un documento JSON; los errores de lectura se propagan."""

    with open(path, "r", encoding="utf-8") as handler:
        return json.load(handler)
