"""
Backend package for the contact and AI proxy API.

This package provides a FastAPI application with a message store
abstraction and a thin proxy to the Gemini text model.
"""
