"""Front ends: terminal and Streamlit."""
