"""
Admin Dashboard (table view)
Farm statistics, searchable and sortable farmer table, CSV export

VERSION HISTORY:
1.0.0 - Superadmin-only dashboard
      - Stat cards and farms-by-type chart over the full collection
      - Search with top-6 suggestions, farm type chips, sort toggles
      - Paginated table with detail view
"""
import pandas as pd
import streamlit as st

from .constants import CHART_COLORS
from .controls import (
    show_category_filter,
    show_export_button,
    show_pagination,
    show_search,
    show_sort_controls,
)
from .query import run, summarize
from .utils import format_registered, get_query, get_repository, init_view_state

PREFIX = "dash"

TABLE_COLUMNS = {
    'name': 'Name',
    'email': 'Email',
    'subcity': 'Subcity',
    'phone': 'Phone',
    'farmName': 'Farm',
    'farmType': 'Type',
    'farmSize': 'Size',
    'createdAt': 'Registered',
}


def show_dashboard_view(page_size: int):
    """Superadmin dashboard; the caller has already applied the role guard"""
    init_view_state(PREFIX, page_size)
    repo = get_repository()

    col_title, col_refresh = st.columns([5, 1])
    with col_title:
        st.markdown("## 📊 Farmers Dashboard")
    with col_refresh:
        if st.button("🔄 Refresh", width='stretch', key="dash_refresh"):
            with st.spinner("Refreshing..."):
                repo.refresh()
            st.rerun()

    if repo.error:
        st.error(f"❌ {repo.error}")

    farmers = repo.farmers

    show_search(PREFIX, farmers, show_suggestions=True)
    show_selected_farmer()

    show_stats(farmers)
    st.markdown("---")

    st.markdown("### 🔎 Filters")
    show_category_filter(PREFIX, farmers, as_chips=True)
    show_sort_controls(PREFIX)

    result = run(farmers, get_query(PREFIX))
    show_table(result.rows)
    show_pagination(PREFIX, result)

    st.markdown("---")
    show_export_button(PREFIX, result.filtered)


def show_stats(farmers):
    stats = summarize(farmers)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric(label="👥 Total Farmers", value=stats['total_farmers'])
    with col2:
        st.metric(label="🌾 Total Farm Size", value=f"{stats['total_farm_size']:.2f} ha")
    with col3:
        st.metric(label="🏷️ Farm Types", value=len(stats['farms_by_type']))

    if stats['farms_by_type']:
        chart_df = pd.DataFrame(
            sorted(stats['farms_by_type'].items()),
            columns=['Farm Type', 'Farms'],
        ).set_index('Farm Type')
        st.bar_chart(chart_df, color=CHART_COLORS[0])


def show_table(rows):
    if not rows:
        st.info("No farmers found.")
        return

    df = pd.DataFrame(rows)
    display_cols = [col for col in TABLE_COLUMNS if col in df.columns]
    display_df = df[display_cols].copy()

    if 'createdAt' in display_df.columns:
        display_df['createdAt'] = display_df['createdAt'].apply(format_registered)

    display_df.rename(columns=TABLE_COLUMNS, inplace=True)
    st.dataframe(display_df, width='stretch', hide_index=True)

    names = [f"{r.get('name', '')} ({r.get('email', '')})" for r in rows]
    col_pick, col_view = st.columns([4, 1])
    with col_pick:
        picked = st.selectbox("View details", range(len(rows)), format_func=lambda i: names[i],
                              key="dash_detail_pick", label_visibility="collapsed")
    with col_view:
        if st.button("View", width='stretch', key="dash_detail_view"):
            st.session_state.dash_selected = rows[picked]
            st.rerun()


def show_selected_farmer():
    farmer = st.session_state.get('dash_selected')
    if not farmer:
        return

    with st.container(border=True):
        st.markdown(f"### 👤 {farmer.get('name', '')}")
        col1, col2 = st.columns(2)
        with col1:
            st.write(f"**Email:** {farmer.get('email', '')}")
            st.write(f"**Phone:** {farmer.get('phone', '') or 'N/A'}")
            st.write(f"**Subcity:** {farmer.get('subcity', '') or 'N/A'}")
        with col2:
            st.write(f"**Farm:** {farmer.get('farmName', '')}")
            st.write(f"**Type:** {farmer.get('farmType', '')}")
            st.write(f"**Size:** {farmer.get('farmSize', '')}")
            st.write(f"**Registered:** {format_registered(farmer.get('createdAt'), with_time=True)}")
        if st.button("✖ Close", key="dash_close_detail"):
            st.session_state.dash_selected = None
            st.rerun()
