"""Web interface: the FastAPI app and the static page it serves."""
