"""JobQuest: personal job application tracker (FastAPI API + Streamlit dashboard)."""

__version__ = "1.0.0"
