"""Streamlit dashboard for SmartServe food preparation forecasting."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st

# ==========================================
# Configuration & Constants
# ==========================================
# Point this to your local FastAPI server
API_BASE_URL = "http://127.0.0.1:8080"

EVENT_TYPES = ["Holiday Party", "Corporate Lunch", "Weekend Brunch", "Birthday Celebration", "Other"]
AUDIENCE_PROFILES = ["Mixed", "Families", "Professionals", "Young Adults", "Students"]

st.set_page_config(
    page_title="SmartServe Dashboard",
    page_icon="🍽️",
    layout="wide",
)


# ==========================================
# API Helper Functions
# ==========================================
def fetch_forecast(event_details: Dict[str, Any], use_stored_history: bool) -> Optional[Dict[str, Any]]:
    """Calls the backend forecasting endpoint."""
    payload: Dict[str, Any] = {"eventDetails": event_details}
    if not use_stored_history:
        payload["historicalData"] = []
    try:
        response = requests.post(f"{API_BASE_URL}/api/forecast", json=payload, timeout=5)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return None


def fetch_history() -> List[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/api/history", timeout=5)
        response.raise_for_status()
        return response.json().get("records", [])
    except requests.exceptions.RequestException as e:
        st.error(f"Could not load historical data: {e}")
        return []


def fetch_history_summary() -> Optional[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/api/history/summary", timeout=5)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Could not load history summary: {e}")
        return None


def submit_history_record(record: Dict[str, Any]) -> bool:
    try:
        response = requests.post(f"{API_BASE_URL}/api/history", json=record, timeout=5)
        response.raise_for_status()
        return True
    except requests.exceptions.RequestException as e:
        st.error(f"Could not store record: {e}")
        return False


# ==========================================
# UI Page Functions
# ==========================================
def render_forecast_page() -> None:
    st.header("📈 Food Preparation Forecast")
    st.markdown("Estimate how much food to prepare for an upcoming event.")

    col1, col2 = st.columns(2)
    with col1:
        event_type = st.selectbox("Event Type", EVENT_TYPES)
        audience_profile = st.selectbox("Audience Profile", AUDIENCE_PROFILES)
        footfall = st.number_input("Expected Footfall", min_value=0, value=100, step=1)
    with col2:
        event_date = st.date_input("Event Date", datetime.date.today())
        item_name = st.text_input("Menu Item (optional, stores the recommendation)")
        use_stored_history = st.checkbox("Tune with stored history", value=True)

    if st.button("Get Forecast", type="primary"):
        event_details: Dict[str, Any] = {
            "eventType": event_type,
            "audienceProfile": audience_profile,
            "footfall": int(footfall),
            "date": str(event_date),
        }
        if item_name.strip():
            event_details["itemName"] = item_name.strip()

        with st.spinner("Forecasting..."):
            result = fetch_forecast(event_details, use_stored_history)

        if result:
            st.subheader("Forecast Results")
            metric_col1, metric_col2 = st.columns(2)
            metric_col1.metric("Recommended Quantity", f"{result['predictedFoodQuantity']} units")
            metric_col2.metric("Waste Reduction Potential", f"{result['wasteReductionPotential']} units")


def render_history_page() -> None:
    st.header("🗂️ Historical Events")
    st.markdown("Past events tune the forecast toward observed consumption.")

    records = fetch_history()
    if records:
        st.dataframe(pd.DataFrame(records), use_container_width=True)
    else:
        st.info("No historical records stored yet.")

    summary = fetch_history_summary()
    if summary and summary.get("byEventType"):
        st.write("### Consumption by Event Type")
        frame = pd.DataFrame(summary["byEventType"]).set_index("eventType")
        st.bar_chart(frame[["totalPrepared", "totalConsumed"]])
        st.dataframe(frame[["events", "meanConsumptionRatio", "wastePercentage"]], use_container_width=True)
        st.metric("Current Feedback Factor", f"{summary['overall']['feedbackFactor']:.3f}")

    with st.expander("Add a past event"):
        with st.form("add_history"):
            record_date = st.date_input("Date", datetime.date.today())
            event_type = st.selectbox("Event Type", EVENT_TYPES, key="history_event_type")
            audience_profile = st.selectbox("Audience Profile", AUDIENCE_PROFILES, key="history_audience")
            footfall = st.number_input("Footfall", min_value=0, value=50, step=1)
            prepared = st.number_input("Food Prepared", min_value=0, value=60, step=1)
            consumed = st.number_input("Food Consumed", min_value=0, value=50, step=1)
            if st.form_submit_button("Save"):
                stored = submit_history_record(
                    {
                        "date": str(record_date),
                        "eventType": event_type,
                        "audienceProfile": audience_profile,
                        "footfall": int(footfall),
                        "foodPrepared": int(prepared),
                        "foodConsumed": int(consumed),
                    }
                )
                if stored:
                    st.success("Record stored.")


# ==========================================
# Main App Router
# ==========================================
def main() -> None:
    st.sidebar.title("SmartServe")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation Module",
        ["Forecasting", "Historical Data"],
    )

    st.sidebar.markdown("---")
    st.sidebar.caption("Estimator: rule-based with historical feedback")

    if page == "Forecasting":
        render_forecast_page()
    elif page == "Historical Data":
        render_history_page()


if __name__ == "__main__":
    main()
