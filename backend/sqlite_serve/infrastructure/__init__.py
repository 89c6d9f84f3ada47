"""Infrastructure Layer — capability adapters (SQLite, filesystem, chevron, HTTP variables) and logging."""
