"""FastAPI server of the Compliance-AI backend."""
