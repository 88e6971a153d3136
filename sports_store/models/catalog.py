from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ProductCategory:
    id: str
    name: str
    description: str
    icon: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SportType:
    id: str
    name: str
    description: str
    icon: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductType:
    """Detailed product type; `category` links to a ProductCategory id."""
    id: str
    name: str
    description: str
    icon: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
