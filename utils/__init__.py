"""
Module: __init__.py
Description:
    Shared helpers for AniSync: `.env` settings, URL building and string formatting.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env`.
    - Required/used env vars:
        * None
"""
