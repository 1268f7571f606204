from __future__ import annotations

from dataclasses import dataclass

from invtrack.config import ApiSettings, AppPaths
from invtrack.repositories.rest_repo import RestRepository
from invtrack.repositories.session_file import SessionFileStore
from invtrack.services.admin_service import AdminService
from invtrack.services.auth_service import SessionStore
from invtrack.services.category_service import CategoryService
from invtrack.services.export_service import ExportService
from invtrack.services.product_service import ProductService
from invtrack.services.profile_service import ProfileService
from invtrack.services.supplier_service import SupplierService


@dataclass(frozen=True)
class AppContainer:
    paths: AppPaths
    settings: ApiSettings
    repo: RestRepository
    session: SessionStore
    products: ProductService
    suppliers: SupplierService
    categories: CategoryService
    admin: AdminService
    profile: ProfileService
    exports: ExportService


def build_container(paths: AppPaths, settings: ApiSettings, repo=None) -> AppContainer:
    if repo is None:
        repo = RestRepository(settings)
    session = SessionStore(repo, SessionFileStore(paths.session_path))
    # bearer token for every request comes from the session
    repo.token_provider = lambda: session.token

    return AppContainer(
        paths=paths,
        settings=settings,
        repo=repo,
        session=session,
        products=ProductService(repo),
        suppliers=SupplierService(repo),
        categories=CategoryService(repo),
        admin=AdminService(repo),
        profile=ProfileService(repo),
        exports=ExportService(repo),
    )
