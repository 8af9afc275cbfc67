import streamlit as st
from loguru import logger

from services.api_client import get_api_client
from components.bill_forms import (
    apply_response,
    render_dishes_section,
    render_people_section,
    render_taxes_section,
)
from components.summary import render_summary_section
import dotenv

dotenv.load_dotenv()

# Configure logging
logger.add("frontend.log", rotation="1 MB", level="DEBUG")

# Page config
st.set_page_config(
    page_title="Bill Splitter",
    layout="centered",
    page_icon="🧾",
    initial_sidebar_state="collapsed"
)

# Custom CSS
st.markdown("""
<style>
    .stButton > button {
        width: 100%;
        border-radius: 10px;
        border: 2px solid #f0f2f6;
        background-color: white;
        color: #262730;
        font-weight: 500;
    }
    .stButton > button:hover {
        border-color: #ff6b6b;
        color: #ff6b6b;
    }
</style>
""", unsafe_allow_html=True)

st.title("🧾 Bill Splitter")

# Initialize API client
api_client = get_api_client()

# Check backend health
if not api_client.health_check():
    st.error("🚨 Backend API is not available. Please make sure the backend server is running.")
    st.stop()

# Session state initialization
if "last_error" not in st.session_state:
    st.session_state.last_error = None
if "bill_data" not in st.session_state:
    apply_response(api_client.get_bill())

if st.session_state.last_error:
    st.error(f"❌ {st.session_state.last_error}")

bill_data = st.session_state.get("bill_data")
if not bill_data:
    st.stop()

bill = bill_data["bill"]

render_people_section(api_client, bill["people"])
st.markdown("---")
render_dishes_section(api_client, bill["dishes"], bill["people"])
st.markdown("---")
render_taxes_section(api_client, bill["taxes"])
st.markdown("---")
render_summary_section(bill_data["summary"], bill["taxes"])

# Start over button
st.markdown("---")
if st.button("🔄 Split Another Bill"):
    apply_response(api_client.reset_bill())
    for key in list(st.session_state.keys()):
        if key not in ("bill_data", "last_error"):
            del st.session_state[key]
    st.rerun()
