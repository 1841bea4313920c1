"""HTTP layer of the Translator API, grouped by API version."""
