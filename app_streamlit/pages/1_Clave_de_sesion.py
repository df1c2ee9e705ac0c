# --------------------------------------------------------------
# File: 1_Clave_de_sesion.py
# Description: Genera, exporta e importa la clave simétrica de la sesión.
# --------------------------------------------------------------

import streamlit as st

from filecrypt.crypto_keys import export_key, generate_key, import_key
from filecrypt.errors import EntropyUnavailable, MalformedKey

# Presenta el título general de la página.
st.title("🔑 Clave de sesión")

owner = st.text_input("Propietario (email)", value=st.session_state.get("owner", ""))
if owner:
    st.session_state["owner"] = owner

tab_new, tab_import = st.tabs(["Generar", "Importar"])

# Genera una clave AES-256 nueva para esta sesión.
with tab_new:
    if st.button("Generar clave AES-256", key="btn_generate"):
        try:
            st.session_state["file_key"] = generate_key()
        except EntropyUnavailable as exc:
            st.error(f"No se pudo generar la clave: {exc}")
        else:
            st.success("Clave generada. Guarda la exportación en tu almacén de secretos.")

# Reconstruye una clave exportada previamente.
with tab_import:
    encoded = st.text_input("Clave exportada (Base64)", type="password", key="imp_key")
    if st.button("Importar clave", key="btn_import", disabled=not encoded):
        try:
            st.session_state["file_key"] = import_key(encoded)
        except MalformedKey as exc:
            st.error(str(exc))
        else:
            st.success("Clave importada.")

key = st.session_state.get("file_key")
if key is not None:
    st.markdown("### Exportación")
    # SECURITY: solo se muestra bajo petición expresa del usuario.
    if st.checkbox("Mostrar clave exportada"):
        st.code(export_key(key), language="text")
    st.caption(f"{key.algorithm} | clave={len(key) * 8} bits | nonce=96 bits | tag=128 bits")
    if st.button("Destruir clave de la sesión", key="btn_wipe"):
        key.wipe()
        del st.session_state["file_key"]
        st.info("Clave destruida.")
