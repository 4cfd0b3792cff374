"""Data models for storefront and vendor products."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

__all__ = [
    "Color",
    "Product",
    "VendorOption",
    "VendorVariant",
    "VendorProduct",
]


@dataclass(frozen=True)
class Color:
    """A colour entry: display name plus normalized lowercase value."""

    name: str
    value: str

    @classmethod
    def from_name(cls, name: str) -> "Color":
        return cls(name=name, value=name.lower())

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}


@dataclass
class Product:
    """A product in the storefront's shape.

    Attributes are snake_case; ``to_dict``/``from_dict`` use the camelCase
    keys the storefront JSON carries (``imageUrl``, ``inStock``, ...).
    """

    # Required fields
    id: str
    name: str
    price: float

    description: str = ""
    image_url: str = ""
    image_urls: List[str] = field(default_factory=list)
    category: str = ""
    tags: List[str] = field(default_factory=list)
    sizes: List[str] = field(default_factory=list)
    colors: List[Color] = field(default_factory=list)
    in_stock: bool = True
    is_new: bool = False
    is_limited: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "imageUrl": self.image_url,
            "imageUrls": list(self.image_urls),
            "category": self.category,
            "tags": list(self.tags),
            "sizes": list(self.sizes),
            "colors": [c.to_dict() for c in self.colors],
            "inStock": self.in_stock,
            "isNew": self.is_new,
            "isLimited": self.is_limited,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build a Product from its storefront JSON representation."""
        colors = []
        for entry in data.get("colors") or []:
            name = entry.get("name", "")
            colors.append(Color(name=name, value=entry.get("value", name.lower())))
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            price=float(data.get("price", 0)),
            description=data.get("description") or "",
            image_url=data.get("imageUrl") or "",
            image_urls=list(data.get("imageUrls") or []),
            category=data.get("category") or "",
            tags=list(data.get("tags") or []),
            sizes=list(data.get("sizes") or []),
            colors=colors,
            in_stock=bool(data.get("inStock", True)),
            is_new=bool(data.get("isNew", False)),
            is_limited=bool(data.get("isLimited", False)),
        )


@dataclass
class VendorOption:
    id: str
    value: str


@dataclass
class VendorVariant:
    """One purchasable variant of a vendor product."""

    retail_price: str
    preview_urls: List[str] = field(default_factory=list)
    options: List[VendorOption] = field(default_factory=list)
    id: Optional[str] = None

    def option(self, option_id: str) -> Optional[str]:
        """Return the value of the first option with ``option_id``, if any."""
        for opt in self.options:
            if opt.id == option_id:
                return opt.value
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VendorVariant":
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            retail_price=data.get("retail_price"),
            preview_urls=[f.get("preview_url") for f in data.get("files") or []],
            options=[
                VendorOption(id=o.get("id"), value=o.get("value"))
                for o in data.get("options") or []
            ],
        )


@dataclass
class VendorProduct:
    """A product record as returned by the vendor's catalog API."""

    id: str
    name: str
    variants: List[VendorVariant] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VendorProduct":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            variants=[VendorVariant.from_dict(v) for v in data.get("variants") or []],
        )
