"""Streamlit console for the content inventory."""

import streamlit as st

from config.settings import settings
from inventory.client import ApiError, InventoryClient
from inventory.table import TableController

# Page config
st.set_page_config(
    page_title="Content Inventory",
    page_icon="🗂️",
    layout="wide",
)

# Configuration
API_URL = settings.api_url

STATUS_OPTIONS = ["Draft", "In Review", "Approved"]

# Initialize session state
if "controller" not in st.session_state:
    st.session_state.controller = TableController()
if "loaded" not in st.session_state:
    st.session_state.loaded = False
if "status_message" not in st.session_state:
    st.session_state.status_message = None
if "selected" not in st.session_state:
    st.session_state.selected = None


def get_client() -> InventoryClient:
    return InventoryClient(API_URL)


def load_records() -> None:
    """Fetch the collection once and keep it as the baseline."""
    try:
        with get_client() as client:
            st.session_state.controller.load(client.list_assessments())
        st.session_state.status_message = None
    except ApiError as e:
        st.session_state.status_message = f"Failed to load assessments: {e.message}"
    st.session_state.loaded = True


def run_action(action: str, record_id: str) -> None:
    """Dispatch a row action and persist it when it carries a patch."""
    controller: TableController = st.session_state.controller
    try:
        result = controller.dispatch(action, record_id)
    except (KeyError, ValueError) as e:
        st.session_state.status_message = str(e)
        return

    if result.patch is None:
        st.session_state.selected = (action, result.record)
        return

    try:
        with get_client() as client:
            updated = client.update_assessment(record_id, result.patch)
        controller.upsert(updated)
        st.session_state.status_message = None
        st.toast(result.message)
    except ApiError as e:
        st.session_state.status_message = f"Submit failed: {e.message}"


def render_sidebar() -> None:
    with st.sidebar:
        st.header("Server")
        with get_client() as client:
            if client.health():
                st.success("API Connected")
            else:
                st.error("API not available")
                st.caption("Start server: `inventory serve`")

        if st.button("Reload", use_container_width=True):
            load_records()

        st.divider()
        st.header("New Assessment")
        with st.form("create_form", clear_on_submit=True):
            process_name = st.text_input("Process Name")
            content = st.text_area("Content")
            location = st.text_input("Location")
            pib = st.selectbox("PIB", ["No", "Yes"])
            status = st.selectbox("Status", STATUS_OPTIONS)
            if st.form_submit_button("Create", type="primary"):
                payload = {
                    "processName": process_name,
                    "content": content,
                    "location": location,
                    "pib": pib,
                    "status": status,
                }
                try:
                    with get_client() as client:
                        created = client.create_assessment(payload)
                    st.session_state.controller.upsert(created)
                    st.success(f"Created {created['id']}")
                except ApiError as e:
                    st.error(e.message)


def render_selected() -> None:
    action, record = st.session_state.selected
    with st.expander(f"{action.capitalize()}: {record.get('processName', '')}", expanded=True):
        if action == "view":
            st.json(record)
            return

        with st.form("edit_form"):
            edits = {
                "processName": st.text_input("Process Name", record.get("processName", "")),
                "content": st.text_area("Content", record.get("content", "")),
                "location": st.text_input("Location", record.get("location", "")),
            }
            if st.form_submit_button("Save"):
                edits["status"] = record.get("status")
                try:
                    with get_client() as client:
                        updated = client.update_assessment(record["id"], edits)
                    st.session_state.controller.upsert(updated)
                    st.session_state.selected = None
                    st.rerun()
                except ApiError as e:
                    st.error(e.message)


def main():
    st.title("🗂️ Content Inventory")
    st.caption("Assessment tracking")

    render_sidebar()

    if not st.session_state.loaded:
        load_records()

    controller: TableController = st.session_state.controller

    query = st.text_input("Search", placeholder="Process name, content or location")
    controller.search(query)

    if st.session_state.status_message:
        st.error(st.session_state.status_message)

    rows = controller.rows()
    st.caption(f"{len(rows)} of {len(controller.all_records)} record(s)")

    header = st.columns([3, 4, 2, 2, 3])
    for col, label in zip(header, ["Process Name", "Content", "Location", "Status", "Actions"]):
        col.markdown(f"**{label}**")

    labels = {name: i for i, (name, _) in enumerate(controller.columns)}
    for row in rows:
        cols = st.columns([3, 4, 2, 2, 3])
        for col, name in zip(cols, ["processName", "content", "location", "status"]):
            cell = row.cells[labels[name]]
            col.text(cell.text, help=cell.title)
        action_cols = cols[4].columns(len(row.actions))
        for action_col, action in zip(action_cols, row.actions):
            action_col.button(
                action.name.capitalize(),
                key=f"{action.name}_{row.record_id}",
                disabled=not action.enabled,
                on_click=run_action,
                args=(action.name, row.record_id),
            )

    if st.session_state.selected:
        st.divider()
        render_selected()

    # RFIs
    st.divider()
    st.header("RFIs")
    try:
        with get_client() as client:
            st.dataframe(client.list_rfis(), use_container_width=True)
    except ApiError as e:
        st.error(f"Failed to load RFIs: {e.message}")

    # Footer
    st.divider()
    st.caption("Content Inventory v0.1.0")


if __name__ == "__main__":
    main()
