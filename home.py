from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st

from core.config import get_settings
from core.services.analytics import dashboard_stats
from core.store import get_store
from core.utils import format_currency

st.title("👕 Sales Dashboard")
st.caption("Today, this week and this month at a glance, with best sellers and breakdowns.")

settings = get_settings()
store = get_store(settings.db_path)

with st.sidebar:
    st.subheader("Environment")
    st.write(f"**Data directory:** `{settings.data_dir}`")
    st.write(f"**Database:** `{settings.db_path.name}`")

stats = dashboard_stats(store, date.today())

c1, c2, c3 = st.columns(3)
c1.metric("Today", format_currency(stats.today, settings.currency))
c2.metric("This week", format_currency(stats.week, settings.currency))
c3.metric("This month", format_currency(stats.month, settings.currency))

if st.button("➕ New Sale", type="primary"):
    st.switch_page("pages/1_➕_Add_Sale.py")

st.divider()

left, right = st.columns(2, gap="large")

with left:
    st.subheader("Top selling items")
    if stats.top_items:
        st.dataframe(pd.DataFrame(stats.top_items), use_container_width=True, hide_index=True)
    else:
        st.info("No sales yet. Add a sale or load demo data in 🧪 Data Management.")

    st.subheader("Sales by payment method")
    if stats.by_payment_method:
        st.dataframe(pd.DataFrame(stats.by_payment_method), use_container_width=True, hide_index=True)

with right:
    st.subheader("Sales by category")
    if stats.by_category:
        df = pd.DataFrame(stats.by_category)
        st.bar_chart(df.set_index("category")[["total"]])
        st.dataframe(df, use_container_width=True, hide_index=True)

st.divider()
st.subheader("Recent sales")
if stats.recent_sales:
    df = pd.DataFrame([s.to_dict() for s in stats.recent_sales])
    st.dataframe(
        df[["date", "item_name", "category", "quantity", "total_amount", "payment_method", "customer_name"]],
        use_container_width=True,
        hide_index=True,
    )
else:
    st.caption("No sales recorded yet.")
