"""Streamlit harness for browsing and growing a campaign's places of interest."""
