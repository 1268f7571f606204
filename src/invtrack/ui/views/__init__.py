from .login_view import LoginView
from .products_view import ProductsView

__all__ = ["LoginView", "ProductsView"]
