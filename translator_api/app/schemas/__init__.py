"""
Pydantic schema definitions for API payloads.

Each entity (languages, tags, messages) defines a ``*Details`` model
for request bodies and a ``*Read`` model for responses.  Schemas are
separated from database rows to decouple API representation from
persistence.
"""
