"""
Service layer abstraction.

Each service owns the SQL for one entity (languages, tags, messages)
and enforces that entity's rules, so API handlers never touch the
database directly.
"""
