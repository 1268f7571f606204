from .auth_service import SessionStore
from .product_service import ProductService
from .supplier_service import SupplierService
from .category_service import CategoryService
from .admin_service import AdminService
from .profile_service import ProfileService
from .export_service import ExportService

__all__ = [
    "SessionStore",
    "ProductService",
    "SupplierService",
    "CategoryService",
    "AdminService",
    "ProfileService",
    "ExportService",
]
