# --------------------------------------------------------------
# File: 2_Subir_y_Cifrar.py
# Description: Gestiona la carga y el cifrado de archivos mediante Streamlit.
# --------------------------------------------------------------

import streamlit as st

from filecrypt import vault
from filecrypt.errors import CryptoError

# Presenta el título de la sección dedicada al cifrado.
st.title("⬆️ Subir y cifrar")

# Comprueba que la clave de sesión esté disponible antes de continuar.
owner = st.session_state.get("owner")
key = st.session_state.get("file_key")
if not owner or key is None:
    st.warning("Genera o importa primero la clave en **Clave de sesión**.")
    st.stop()

# Permite seleccionar el archivo a procesar.
f = st.file_uploader("Selecciona un archivo", type=None)
if f and st.button("Cifrar con AES-GCM"):
    data = f.read()
    try:
        meta = vault.store_file(owner, f.name, data, key)
    except (CryptoError, FileExistsError) as exc:
        st.error(f"Error cifrando: {exc}")
        st.stop()

    st.success("Archivo cifrado (AES-256-GCM).")
    st.code(
        f"{meta.algo} | nonce=96 bits | tag=128 bits\n"
        f"pt_len={meta.size} bytes | ct_len={meta.ciphertext_length} bytes"
    )
    st.markdown("### Metadatos")
    st.json(meta.model_dump(mode="json"))
    st.caption(f"Guardado en: {vault.user_dir(owner)}")
