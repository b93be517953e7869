"""Blog REST API: registration, JWT login and ownership-checked post CRUD."""

__version__ = "0.1.0"
