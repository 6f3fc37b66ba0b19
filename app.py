# app.py

"""
Main application entry point
Menu Forecast Dashboard
"""

import streamlit as st
from datetime import datetime
import logging

# Configure page
st.set_page_config(
    page_title="Menu Forecast Dashboard",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

from utils.config import config
from utils.api_client import BackendAPIError, get_backend_client
from utils.forecast import VERSION, ENDPOINTS

# Setup logging
logging.basicConfig(level=config.log_level)
logger = logging.getLogger(__name__)


def check_backend() -> str:
    """Ping the branches endpoint to report backend status"""
    if not config.backend_url:
        return "⚠️ Not configured"
    try:
        get_backend_client().get(ENDPOINTS['branches'])
        return "✅ Connected"
    except BackendAPIError as e:
        logger.warning(f"Backend check failed: {e}")
        return "❌ Unreachable"


def main():
    """Main application entry point"""

    st.sidebar.markdown(f"### 🍽️ {config.business_name}")
    st.sidebar.caption(f"Version {VERSION}")

    # Main content
    st.title("Welcome to Menu Forecast Dashboard")

    st.info("""
    👈 **Select a page from the sidebar** to begin:
    - **Menu Forecast**: Real vs forecast sales, ingredient shortages and supplier contact
    """)

    # Basic info
    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Today", datetime.now().strftime('%d %b %Y'))

    with col2:
        st.metric("Business", config.business_name)

    with col3:
        st.metric("Backend", check_backend())


if __name__ == "__main__":
    main()
