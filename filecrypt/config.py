# --------------------------------------------------------------
# File: config.py
# Description: Configuración por entorno (.env) y arranque del logging.
# --------------------------------------------------------------
import logging
import os

from dotenv import load_dotenv

load_dotenv()

DATA_DIR = os.getenv("STORAGE_PATH", "./_data")
VAULT_DIR = os.path.join(DATA_DIR, "storage")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """Aplica LOG_LEVEL al logger raíz."""

    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
