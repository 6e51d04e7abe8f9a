"""
Widgets shared by the dashboard table and the farmers grid
Search, category filter, sort toggles, pagination and export
"""
from dataclasses import replace
from typing import Dict, List

import streamlit as st

from .constants import SORT_ASC, SORT_CREATED_AT, SORT_FARM_SIZE, SORT_LABELS, SORT_NAME
from .export import CSV_MIME, export_csv, log_download
from .query import QueryResult, farm_types, page_window, suggestions, toggle_sort
from .utils import commit_search, get_query, set_query

SORT_BUTTON_ORDER = (SORT_CREATED_AT, SORT_NAME, SORT_FARM_SIZE)


def show_search(prefix: str, farmers: List[Dict], show_suggestions: bool = False) -> str:
    """Search box; returns the raw text and commits the debounced value"""
    raw = st.text_input(
        "Search",
        key=f"{prefix}_search_input",
        placeholder="Search name, farm, subcity or email...",
        label_visibility="collapsed",
    )
    committed = commit_search(prefix, raw)

    state = get_query(prefix)
    if committed != state.search:
        set_query(prefix, replace(state, search=committed, page=1))

    if show_suggestions and raw.strip():
        hits = suggestions(farmers, raw)
        if hits:
            with st.container(border=True):
                st.caption("Suggestions")
                for idx, farmer in enumerate(hits):
                    label = f"**{farmer.get('name', '')}** · {farmer.get('farmName', '')} ({farmer.get('farmType', '')})"
                    if st.button(label, key=f"{prefix}_suggest_{idx}", width='stretch'):
                        st.session_state[f"{prefix}_selected"] = farmer
                        st.rerun()
    return raw


def show_category_filter(prefix: str, farmers: List[Dict], as_chips: bool = False):
    options = farm_types(farmers)
    state = get_query(prefix)
    current = state.category if state.category in options else options[0]

    if as_chips:
        choice = st.radio(
            "Farm type", options, index=options.index(current),
            horizontal=True, key=f"{prefix}_category_chips", label_visibility="collapsed",
        )
    else:
        choice = st.selectbox(
            "Farm type", options, index=options.index(current),
            key=f"{prefix}_category_select", label_visibility="collapsed",
        )

    if choice != state.category:
        set_query(prefix, replace(state, category=choice, page=1))


def show_sort_controls(prefix: str):
    state = get_query(prefix)
    cols = st.columns([1, 1, 1, 3])
    cols[0].markdown("**Sort:**")
    for col, key in zip(cols[1:], SORT_BUTTON_ORDER):
        active = state.sort_key == key
        arrow = ("↑" if state.sort_dir == SORT_ASC else "↓") if active else ""
        if col.button(f"{SORT_LABELS[key]} {arrow}".strip(), key=f"{prefix}_sort_{key}",
                      type="primary" if active else "secondary", width='stretch'):
            set_query(prefix, toggle_sort(state, key))
            st.rerun()


def show_pagination(prefix: str, result: QueryResult):
    state = get_query(prefix)
    if result.page != state.page:
        set_query(prefix, replace(state, page=result.page))

    first, last = page_window(result.page, state.page_size, result.total)
    col1, col2, col3, col4, col5 = st.columns([1, 1, 2, 1, 1])

    with col1:
        if st.button("⏮", disabled=(result.page == 1), key=f"{prefix}_first_page"):
            set_query(prefix, replace(state, page=1))
            st.rerun()
    with col2:
        if st.button("⬅️ Previous", disabled=(result.page == 1), key=f"{prefix}_prev_page"):
            set_query(prefix, replace(state, page=result.page - 1))
            st.rerun()
    with col3:
        st.markdown(f"**Page {result.page} of {result.total_pages}** "
                    f"(showing {first} to {last} of {result.total})")
    with col4:
        if st.button("Next ➡️", disabled=(result.page == result.total_pages), key=f"{prefix}_next_page"):
            set_query(prefix, replace(state, page=result.page + 1))
            st.rerun()
    with col5:
        if st.button("⏭", disabled=(result.page == result.total_pages), key=f"{prefix}_last_page"):
            set_query(prefix, replace(state, page=result.total_pages))
            st.rerun()


def show_export_button(prefix: str, rows: List[Dict]):
    """Export the filtered view (not just the current page)"""
    result = export_csv(rows)
    if result.ok:
        st.download_button(
            label="📥 Export CSV",
            data=result.data,
            file_name=result.file_name,
            mime=CSV_MIME,
            key=f"{prefix}_export",
            on_click=log_download,
            args=(len(rows), result.file_name),
            width='stretch',
        )
    elif st.button("📥 Export CSV", key=f"{prefix}_export_empty", width='stretch'):
        st.warning(result.notice)
