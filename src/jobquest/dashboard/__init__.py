"""Dashboard core: HTTP client, flows and aggregation (Streamlit-free)."""
