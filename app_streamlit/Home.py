# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

from filecrypt.config import configure_logging

configure_logging()

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="File Vault", page_icon="🔐", layout="centered")

# Presenta el nombre del producto y su propósito general.
st.title("🔐 File Vault")
st.write("Cifra certificados, imágenes de perfil y documentos con AES-256-GCM antes de guardarlos.")
st.info("Primero ve a **Clave de sesión** para generar o importar la clave con la que se cifrarán tus archivos.")
