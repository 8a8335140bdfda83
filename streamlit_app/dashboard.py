"""Streamlit staff dashboard: traffic, the live menu and opening hours."""

import streamlit as st

from restaurant_cms.core.config import settings
from restaurant_cms.services.analytics_service import get_analytics
from restaurant_cms.services.restaurant_service import DAY_NAMES, get_restaurant_data
from restaurant_cms.services.result import Failed, Loaded, load
from restaurant_cms.services.wine_service import get_popular_wines
from streamlit_app.common import get_session, now_string

st.set_page_config(page_title=f"{settings.site_name} dashboard", layout="wide")
st.title(f"{settings.site_name} / Staff dashboard")
st.caption(f"Last refresh: {now_string()}")

days = st.sidebar.slider("Analytics window (days)", min_value=1, max_value=365, value=30)

with get_session() as db:
    analytics = load(lambda: get_analytics(db, days=days), label="analytics")
    restaurant = load(lambda: get_restaurant_data(db, settings.restaurant_slug), label="restaurant data")

    st.subheader("Traffic")
    if isinstance(analytics, Failed):
        st.error(analytics.error)
    elif isinstance(analytics, Loaded):
        summary = analytics.data
        views_col, visitors_col, today_col = st.columns(3)
        views_col.metric("Page views", summary.total_page_views)
        visitors_col.metric("Unique visitors", summary.unique_visitors)
        today_col.metric("Views today", summary.today_page_views, help=f"{summary.today_unique_visitors} visitors")
        st.line_chart({stat.date: stat.views for stat in summary.daily_stats})
        st.write([{"path": page.path, "views": page.views} for page in summary.top_pages])
        if summary.wine_events:
            st.write("Wine interactions", summary.wine_events)

    st.subheader("Live menu")
    if isinstance(restaurant, Failed):
        st.error(restaurant.error)
    elif isinstance(restaurant, Loaded) and restaurant.data is None:
        st.info(f"No restaurant with slug '{settings.restaurant_slug}' yet.")
    elif isinstance(restaurant, Loaded):
        data = restaurant.data
        if not data.menus:
            st.warning("No active menu; the public menu page is empty.")
        for menu in data.menus:
            st.markdown(f"**{menu.name}**")
            for section in menu.sections:
                st.write(
                    section.name,
                    [{"item": item.name, "price": item.price} for item in section.items],
                )

        st.subheader("Opening hours")
        st.write(
            [
                {
                    "day": DAY_NAMES[row.day_of_week],
                    "hours": "Closed" if row.is_closed else f"{row.open_time} - {row.close_time}",
                }
                for row in data.hours
            ]
        )

        popular = load(lambda: get_popular_wines(db, data.id), label="popular wines")
        if isinstance(popular, Loaded) and popular.data:
            st.subheader("Most viewed wines (30 days)")
            st.write([{"name": wine.name, "producer": wine.producer} for wine in popular.data])
