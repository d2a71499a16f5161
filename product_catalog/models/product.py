"""Product models for catalog documents and image uploads."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Product:
    """Product data model representing a catalog document.

    Field names match the stored JSON document, including ``imageUrl``.
    """

    id: str
    name: str
    description: str
    price: float
    category: str
    imageUrl: str = ""

    def to_document(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Product":
        """Build a Product from a stored document, dropping system fields."""
        return cls(
            id=document["id"],
            name=document["name"],
            description=document.get("description") or "",
            price=document["price"],
            category=document["category"],
            imageUrl=document.get("imageUrl") or "",
        )


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image held in memory until it is stored."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
