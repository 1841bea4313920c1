"""
Application package initializer.

The API manages languages, tags and messages, where a message is
either an original written in English or a translation of one.  The
code is split into layers: ``api`` (HTTP routes, grouped by version),
``schemas`` (request and response models), ``services`` (SQL and
business rules) and ``core`` (configuration, database, logging and
exceptions).
"""

from .main import app  # noqa: F401
