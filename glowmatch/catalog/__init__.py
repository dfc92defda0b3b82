"""Catalog storage for GlowMatch.

SQLAlchemy tables for seller products and product views, the session
factory, and helpers to read catalog snapshots and seed the database.
"""
