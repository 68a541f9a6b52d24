import sys
from pathlib import Path

import streamlit as st

# Allow `streamlit run frontend/app.py` without installing the project
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from frontend.client import make_client_from_env  # noqa: E402
from frontend.session import InventorySession, display_name  # noqa: E402

# =========================================================
# CONFIG
# =========================================================

SESSION_STATE_KEY = "inventory_session_v1"

st.set_page_config(page_title="Stock Master", layout="centered")


def get_session() -> InventorySession:
    if SESSION_STATE_KEY not in st.session_state:
        st.session_state[SESSION_STATE_KEY] = InventorySession(client=make_client_from_env())
    return st.session_state[SESSION_STATE_KEY]


def show_notification(session: InventorySession):
    if session.notification:
        st.error(session.notification)
        session.notification = None


# =========================================================
# LOGIN / REGISTER
# =========================================================

def render_auth_form(session: InventorySession):
    mode = "Register" if session.is_registering else "Login"
    st.title(mode)

    with st.form("auth_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(mode, type="primary", use_container_width=True)

    if submitted:
        if session.is_registering:
            ok = session.register(email, password)
        else:
            ok = session.login(email, password)
        if ok:
            st.rerun()

    show_notification(session)

    st.button(
        "Already have an account? Login" if session.is_registering else "Don't have an account? Register",
        on_click=session.toggle_mode,
    )


# =========================================================
# INVENTORY
# =========================================================

@st.dialog("Add Item")
def add_item_dialog(session: InventorySession):
    c1, c2 = st.columns([4, 1])
    with c1:
        name = st.text_input("Item", label_visibility="collapsed", placeholder="Item")
    with c2:
        if st.button("Add", use_container_width=True):
            session.item_name = name
            session.submit_new_item()
            st.rerun()


def render_inventory(session: InventorySession):
    st.title("Inventory Items")

    if st.button("Add New Item", type="primary"):
        session.open_modal()
    if session.modal_open:
        # The dialog stays up across its own reruns; the page only has to open it once.
        session.close_modal()
        add_item_dialog(session)

    show_notification(session)

    session.search_term = st.text_input("Search", value=session.search_term, placeholder="Type to filter…")

    items = session.filtered_inventory
    if not items:
        st.info("No items.")
        return

    for it in items:
        name = it["name"]
        c1, c2, c3 = st.columns([3, 2, 1], vertical_alignment="center")
        with c1:
            st.subheader(display_name(name))
        with c2:
            st.write(f"Quantity: {it['quantity']}")
        with c3:
            st.button(
                "Remove",
                key=f"remove_{name}",
                on_click=session.remove_item,
                args=(name,),
                use_container_width=True,
            )


session = get_session()

if session.is_authenticated:
    render_inventory(session)
else:
    render_auth_form(session)
