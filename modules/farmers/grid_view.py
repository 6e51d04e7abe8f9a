"""
Farmers Grid
Card view of registered farmers with the same query controls as the dashboard
"""
import streamlit as st

from .controls import (
    show_category_filter,
    show_export_button,
    show_pagination,
    show_search,
    show_sort_controls,
)
from .query import run
from .utils import (
    avatar_color,
    avatar_initials,
    farmer_key,
    format_registered,
    get_query,
    get_repository,
    init_view_state,
)

PREFIX = "grid"
COLUMNS_PER_ROW = 3


def show_grid_view(page_size: int, on_register=None):
    init_view_state(PREFIX, page_size)
    repo = get_repository()

    st.markdown("## 🌾 Farmers")
    st.caption("Manage registered farmers, review details and export data.")

    col_search, col_type, col_export, col_refresh, col_new = st.columns([4, 2, 1, 1, 1])
    with col_search:
        show_search(PREFIX, repo.farmers)
    with col_type:
        show_category_filter(PREFIX, repo.farmers)

    result = run(repo.farmers, get_query(PREFIX))

    with col_export:
        show_export_button(PREFIX, result.filtered)
    with col_refresh:
        if st.button("🔄", help="Refresh", width='stretch', key="grid_refresh"):
            with st.spinner("Refreshing..."):
                repo.refresh()
            st.rerun()
    with col_new:
        if on_register and st.button("➕", help="Register New Farmer", width='stretch', key="grid_register"):
            on_register()

    show_sort_controls(PREFIX)

    if repo.error:
        st.error(repo.error)

    if not result.rows:
        st.info("No farmers found.")
    else:
        for start in range(0, len(result.rows), COLUMNS_PER_ROW):
            cols = st.columns(COLUMNS_PER_ROW)
            for offset, farmer in enumerate(result.rows[start:start + COLUMNS_PER_ROW]):
                with cols[offset]:
                    show_farmer_card(farmer, start + offset)

    show_pagination(PREFIX, result)


def show_farmer_card(farmer, idx: int):
    name = str(farmer.get('name', ''))
    with st.container(border=True):
        st.markdown(
            f'<div style="width:48px;height:48px;border-radius:50%;background:{avatar_color(name)};'
            f'color:white;display:grid;place-items:center;font-weight:600;">{avatar_initials(name)}</div>',
            unsafe_allow_html=True,
        )
        st.markdown(f"**{name}**")
        st.caption(f"{farmer.get('farmName', '')} · {farmer.get('subcity', '') or 'N/A'}")
        st.write(f"🏷️ {farmer.get('farmType', '')} | 📐 {farmer.get('farmSize', '')}")
        st.caption(f"Registered {format_registered(farmer.get('createdAt'))}")
        with st.expander("Details"):
            st.write(f"**Email:** {farmer.get('email', '')}")
            st.write(f"**Phone:** {farmer.get('phone', '') or 'N/A'}")
            st.write(f"**Registered:** {format_registered(farmer.get('createdAt'), with_time=True)}")
            st.caption(f"ID: {farmer_key(farmer, idx)}")
