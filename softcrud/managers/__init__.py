"""Entity managers — soft-delete-aware reads and logical deletion."""

from softcrud.managers.base import EntityManager

__all__ = ["EntityManager"]
