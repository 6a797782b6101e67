from __future__ import annotations

import logging

import streamlit as st

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

st.set_page_config(page_title="Clothing Sales Tracker", page_icon="👕", layout="wide")

pages = [
    st.Page("home.py", title="Dashboard", icon="📊"),
    st.Page("pages/1_➕_Add_Sale.py", title="Add Sale", icon="➕"),
    st.Page("pages/2_📋_Sales_List.py", title="Sales List", icon="📋"),
    st.Page("pages/3_📈_Reports.py", title="Reports", icon="📈"),
    st.Page("pages/4_🧪_Data_Management.py", title="Data Management", icon="🧪"),
]

st.navigation(pages).run()
