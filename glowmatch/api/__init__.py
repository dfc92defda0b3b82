"""FastAPI application module for GlowMatch.

This module contains the FastAPI application, route handlers, and API
endpoints for the recommendation service.
"""
