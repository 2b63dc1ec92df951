"""
Streamlit client for the form builder API.

Run with:  streamlit run formbuilder/ui/app.py

Tabs:
- Builder: title, description and an add-only list of fields -> POST /forms
- Responses: submissions of the current share token -> GET /forms/<token>/submissions
"""
from typing import Any, Dict, List
import logging

import streamlit as st

from formbuilder.config import get_client_settings
from formbuilder.ui.api_client import FormBuilderAPIError, FormBuilderClient

logger = logging.getLogger(__name__)

FIELD_TYPES = ["text", "number"]


def _init_state():
    st.session_state.setdefault("builder_fields", [])
    st.session_state.setdefault("share_token", "")
    st.session_state.setdefault("share_link", "")
    st.session_state.setdefault("forms_cache", {})
    st.session_state.setdefault("submissions_cache", {})


def _collect_fields() -> List[Dict[str, Any]]:
    """Read the current widget values of every field row."""
    fields = []
    for i in range(len(st.session_state.builder_fields)):
        fields.append({
            "name": st.session_state.get(f"field_name_{i}", ""),
            "type": st.session_state.get(f"field_type_{i}", "text"),
            "required": bool(st.session_state.get(f"field_required_{i}", False)),
        })
    return fields


def render_builder(client: FormBuilderClient, creator_id: str):
    st.subheader("Create a Form")

    title = st.text_input("Form Title", placeholder="Enter form title")
    description = st.text_area("Form Description", placeholder="Enter form description")

    if st.button("Add Field"):
        st.session_state.builder_fields.append({"name": "", "type": "text", "required": False})

    for i, field in enumerate(st.session_state.builder_fields):
        cols = st.columns([3, 2, 1])
        with cols[0]:
            st.text_input("Field Name", value=field["name"], key=f"field_name_{i}", placeholder="Enter field name")
        with cols[1]:
            st.selectbox(
                "Field Type",
                FIELD_TYPES,
                index=FIELD_TYPES.index(field["type"]),
                key=f"field_type_{i}",
                format_func=str.capitalize,
            )
        with cols[2]:
            st.checkbox("Required", value=field["required"], key=f"field_required_{i}")

    if st.button("Create Form", type="primary", use_container_width=True):
        fields = _collect_fields()
        st.session_state.builder_fields = fields
        try:
            result = client.create_form(title, description, fields, creator_id)
        except FormBuilderAPIError as e:
            logger.error(f"Error creating form: {e.message}")
            st.error(f"Error creating form: {e.message}")
            return

        st.session_state.share_token = result["form"]["shareToken"]
        st.session_state.share_link = result["link"]
        st.session_state.forms_cache.pop(creator_id, None)

    if st.session_state.share_link:
        st.success(f"Form Created! Share this link: {st.session_state.share_link}")
        st.code(st.session_state.share_token, language=None)


def _cached_forms(client: FormBuilderClient, creator_id: str) -> List[Dict[str, Any]]:
    cache = st.session_state.forms_cache
    if creator_id not in cache:
        try:
            cache[creator_id] = client.list_forms(created_by=creator_id)
        except FormBuilderAPIError as e:
            logger.error(f"Error fetching forms: {e.message}")
            st.warning(f"Could not load your forms: {e.message}")
            return []
    return cache[creator_id]


def render_responses(client: FormBuilderClient, creator_id: str):
    st.subheader("Responses")

    # Loads are cached per creator and token so reruns from the Builder tab stay offline
    if st.button("Refresh"):
        st.session_state.forms_cache.clear()
        st.session_state.submissions_cache.clear()

    my_forms = _cached_forms(client, creator_id)

    if my_forms:
        labels = {f["shareToken"]: f"{f.get('title') or 'Untitled'} ({f['shareToken']})" for f in my_forms}
        tokens = list(labels)
        current = st.session_state.share_token
        chosen = st.selectbox(
            "Your forms",
            tokens,
            index=tokens.index(current) if current in tokens else 0,
            format_func=labels.get,
        )
        token = st.text_input("Share token", value=chosen)
    else:
        token = st.text_input("Share token", value=st.session_state.share_token)

    token = token.strip()
    if not token:
        st.info("Create a form or enter a share token to see its submissions.")
        return

    cache = st.session_state.submissions_cache
    if token not in cache:
        try:
            cache[token] = client.list_submissions(token)
        except FormBuilderAPIError as e:
            logger.error(f"Error fetching submissions: {e.message}")
            st.error(f"Error fetching submissions: {e.message}")
            return
    submissions = cache[token]

    st.caption(f"{len(submissions)} submission(s)")
    for sub in submissions:
        with st.container(border=True):
            st.markdown(f"**{sub.get('userId') or 'anonymous'}**")
            st.json(sub.get("responses") or {})


def main():
    settings = get_client_settings()
    st.set_page_config(page_title="Form Builder", layout="centered")
    st.title("📝 Form Builder")
    _init_state()

    creator_id = st.sidebar.text_input("Creator ID", value=settings.creator_id)

    client = FormBuilderClient(settings.api_url, timeout=settings.timeout)
    try:
        builder_tab, responses_tab = st.tabs(["Builder", "Responses"])
        with builder_tab:
            render_builder(client, creator_id)
        with responses_tab:
            render_responses(client, creator_id)
    finally:
        client.close()


main()
