"""Configuration, database access, logging setup and domain exceptions."""
