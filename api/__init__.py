"""
API module - FastAPI routes
"""
