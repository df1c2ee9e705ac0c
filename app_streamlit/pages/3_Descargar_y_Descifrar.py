# --------------------------------------------------------------
# File: 3_Descargar_y_Descifrar.py
# Description: Permite recuperar archivos cifrados y descifrarlos desde Streamlit.
# --------------------------------------------------------------

import hashlib

import streamlit as st

from filecrypt import vault
from filecrypt.errors import AuthenticationFailed, MalformedEnvelope, StoredFileUnreadable

# Presenta el título de la sección orientada a la restauración.
st.title("📥 Descargar y descifrar")

# Comprueba que exista clave de sesión antes de acceder a los datos.
owner = st.session_state.get("owner")
key = st.session_state.get("file_key")
if not owner or key is None:
    st.warning("Genera o importa primero la clave en **Clave de sesión**.")
    st.stop()

st.write("Carpeta del usuario:", f"`{vault.user_dir(owner)}`")

meta_files = vault.list_files(owner)
if not meta_files:
    st.info("No hay archivos almacenados aún. Ve a **Subir y Cifrar** para añadir alguno.")
    st.stop()

sel = st.selectbox("Selecciona un archivo (por su .meta.json):", meta_files, index=0)
try:
    meta, enc_blob = vault.open_stored(owner, sel)
except StoredFileUnreadable as exc:
    st.error(str(exc))
    st.stop()

col1, col2 = st.columns(2)
with col1:
    st.write("**Nombre original:**", meta.original_filename)
    st.write("**Guardado como:**", meta.stored_as)
    st.write("**Algoritmo:**", meta.algo)
with col2:
    st.write("**Tamaño en claro:**", meta.size)
    st.write("**Tamaño cifrado (ct_len):**", meta.ciphertext_length)

# Permite descargar directamente el blob cifrado.
st.download_button(
    "⬇️ Descargar archivo cifrado (.enc)",
    data=enc_blob,
    file_name=meta.stored_as,
    mime="application/octet-stream",
)

# Ofrece el descifrado local y la descarga del contenido en claro.
if st.button("🔓 Descifrar y preparar descarga del original"):
    try:
        plaintext = vault.load_file(owner, sel, key)
    except AuthenticationFailed as exc:
        st.error(str(exc))
    except (MalformedEnvelope, StoredFileUnreadable) as exc:
        st.error(f"Archivo cifrado dañado: {exc}")
    else:
        st.success("Archivo descifrado correctamente.")
        st.download_button(
            "⬇️ Descargar archivo original",
            data=plaintext,
            file_name=meta.original_filename or "archivo_recuperado",
            mime="application/octet-stream",
        )
        st.caption(f"SHA-256 del claro: {hashlib.sha256(plaintext).hexdigest()}")
