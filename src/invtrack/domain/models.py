from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Optional


BUILTIN_ADMIN_EMAIL = "admin"
STOCK_DIRECTIONS = ("in", "out")
LOG_ACTIONS = ("CREATE", "UPDATE", "DELETE")


def _int(value, default: int = 0) -> int:
    if value is None or value == "":
        return default
    return int(float(value))


def _opt_int(value) -> Optional[int]:
    if value is None or value == "" or value == 0:
        return None
    return int(value)


def _nested_name(data: dict, key: str) -> Optional[str]:
    nested = data.get(key)
    if isinstance(nested, dict):
        return nested.get("name") or None
    return None


@dataclass(frozen=True)
class Product:
    id: int
    sku: str
    name: str
    description: str = ""
    price: float = 0.0
    stock: int = 0
    min_stock: int = 0
    supplier_id: Optional[int] = None
    category_id: Optional[int] = None
    image_url: Optional[str] = None
    supplier_name: Optional[str] = None
    category_name: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock < self.min_stock

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls(
            id=_int(data.get("id")),
            sku=str(data.get("sku") or ""),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            price=float(data.get("price") or 0),
            stock=_int(data.get("stock")),
            min_stock=_int(data.get("min_stock")),
            supplier_id=_opt_int(data.get("supplier_id")),
            category_id=_opt_int(data.get("category_id")),
            image_url=data.get("image_url") or None,
            supplier_name=_nested_name(data, "supplier"),
            category_name=_nested_name(data, "category"),
        )


@dataclass(frozen=True)
class Supplier:
    id: int
    name: str
    contact_name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Supplier":
        return cls(
            id=_int(data.get("id")),
            name=str(data.get("name") or ""),
            contact_name=str(data.get("contact_name") or ""),
            phone=str(data.get("phone") or ""),
            email=str(data.get("email") or ""),
            address=str(data.get("address") or ""),
        )


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=_int(data.get("id")),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
        )


@dataclass(frozen=True)
class StockMovement:
    id: int
    product_id: int
    type: str
    quantity: int
    stock_before: int
    stock_after: int
    note: Optional[str]
    created_at: str

    @classmethod
    def from_dict(cls, data: dict) -> "StockMovement":
        return cls(
            id=_int(data.get("id")),
            product_id=_int(data.get("product_id")),
            type=str(data.get("type") or ""),
            quantity=_int(data.get("quantity")),
            stock_before=_int(data.get("stock_before")),
            stock_after=_int(data.get("stock_after")),
            note=data.get("note") or None,
            created_at=str(data.get("created_at") or ""),
        )


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    role: str = "staff"
    is_active: bool = True

    @property
    def is_builtin_admin(self) -> bool:
        return self.email == BUILTIN_ADMIN_EMAIL

    @property
    def is_pending(self) -> bool:
        return not self.is_active

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        # auth responses omit is_active; only active users can hold a token
        return cls(
            id=_int(data.get("id")),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            role=str(data.get("role") or "staff"),
            is_active=bool(data.get("is_active", True)),
        )


@dataclass(frozen=True)
class ActivityLogEntry:
    id: int
    user_id: int
    user_name: str
    action: str
    entity: str
    entity_id: Optional[int]
    details: str
    created_at: str

    @classmethod
    def from_dict(cls, data: dict) -> "ActivityLogEntry":
        return cls(
            id=_int(data.get("id")),
            user_id=_int(data.get("user_id")),
            user_name=_nested_name(data, "user") or "",
            action=str(data.get("action") or "").upper(),
            entity=str(data.get("entity") or ""),
            entity_id=_opt_int(data.get("entity_id")),
            details=str(data.get("details") or ""),
            created_at=str(data.get("created_at") or ""),
        )


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    limit: int = 0
    total: int = 0
    total_pages: int = 0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Pagination":
        data = data or {}
        return cls(
            page=_int(data.get("page"), 1),
            limit=_int(data.get("limit")),
            total=_int(data.get("total")),
            total_pages=_int(data.get("total_pages")),
        )


@dataclass(frozen=True)
class ProductPage:
    products: list[Product] = field(default_factory=list)
    pagination: Optional[Pagination] = None

    @property
    def total(self) -> int:
        if self.pagination is not None:
            return self.pagination.total
        return len(self.products)


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User
    message: str = ""
