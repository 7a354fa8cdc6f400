"""softcrud — generic REST CRUD layer for soft-deletable entities."""

__version__ = "1.0.0"
