"""
Application Layer

FastAPI application, HTTP API and the catalog services behind it.
"""
