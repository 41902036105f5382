"""ORM model registry — import all models so metadata.create_all discovers them."""

from pharmacy_finder.models.base import Base
from pharmacy_finder.models.key_value_entry import KeyValueEntry

__all__ = [
    "Base",
    "KeyValueEntry",
]
