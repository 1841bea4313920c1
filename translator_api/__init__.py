"""
Top‑level package for the Translator API.

All functionality lives in submodules under ``app``; the ASGI
application is ``translator_api.app.main:app``.
"""

__all__ = []
