import threading

from conftest import FakeRepo, RecordingPrompter, make_session
from invtrack.application.dashboard import DashboardController
from invtrack.domain.errors import NetworkError
from invtrack.services.product_service import ProductService
from invtrack.services.supplier_service import SupplierService


class FakeBackend:
    """Server-side state behind the product/supplier routes."""

    def __init__(self, products=None, suppliers=None, limit=12):
        self.products = list(products or [])
        self.suppliers = list(suppliers or [{"id": 1, "name": "Acme"}])
        self.limit = limit
        self.next_id = 100
        self.repo = FakeRepo({
            ("GET", "/suppliers"): lambda **_kw: {"suppliers": list(self.suppliers)},
            ("GET", "/products/low-stock"): self._low,
            ("GET", "/products"): self._page,
            ("POST", "/products"): self._create,
        })

    def _low(self, **_kw):
        return {"products": [p for p in self.products if p["stock"] < p["min_stock"]]}

    def _page(self, params=None):
        params = params or {}
        page, limit = params.get("page", 1), params.get("limit", self.limit)
        rows = [p for p in self.products if params.get("search", "").lower() in p["name"].lower()]
        total_pages = (len(rows) + limit - 1) // limit
        start = (page - 1) * limit
        return {
            "products": rows[start:start + limit],
            "pagination": {"page": page, "limit": limit, "total": len(rows), "total_pages": total_pages},
        }

    def _create(self, files=None, **_kw):
        row = {k: v[1] for k, v in files.items()}
        product = {
            "id": self.next_id, "sku": row["sku"], "name": row["name"],
            "stock": int(row["stock"]), "min_stock": int(row["min_stock"]), "price": float(row["price"]),
        }
        self.next_id += 1
        self.products.append(product)
        return {"product": product}

    def delete_route(self, product_id):
        def _delete(**_kw):
            self.products = [p for p in self.products if p["id"] != product_id]
            return {"message": "deleted"}
        self.repo.routes[("DELETE", f"/products/{product_id}")] = _delete


def _item(pid, name="Item", stock=10, min_stock=2):
    return {"id": pid, "sku": f"SKU-{pid}", "name": name, "stock": stock, "min_stock": min_stock, "price": 1}


def _dashboard(backend, prompter=None, role="staff"):
    session = make_session(backend.repo, role=role)
    return DashboardController(
        ProductService(backend.repo), SupplierService(backend.repo), session, prompter or RecordingPrompter(),
    )


def test_refresh_fills_lists_and_counters():
    backend = FakeBackend([_item(1, "Bolt"), _item(2, "Nut", stock=1, min_stock=5)])
    dash = _dashboard(backend)

    assert dash.refresh() is True
    assert [p.name for p in dash.products] == ["Bolt", "Nut"]
    assert dash.stats.total_products == 2
    assert dash.stats.low_stock_count == 1
    assert dash.stats.total_suppliers == 1
    assert backend.repo.calls_to("GET", "/products")[0]["params"] == {"page": 1, "limit": 12}


def test_total_products_comes_from_pagination_total():
    backend = FakeBackend([_item(i) for i in range(1, 31)])
    dash = _dashboard(backend)

    dash.refresh()
    assert len(dash.products) == 12
    assert dash.stats.total_products == 30
    assert dash.show_pagination
    assert dash.total_pages == 3


def test_create_product_refreshes_counters():
    backend = FakeBackend([_item(1)])
    dash = _dashboard(backend)
    dash.refresh()

    ok = dash.save_product({
        "sku": "NEW-1", "name": "Gear", "price": "9.5", "stock": "0", "min_stock": "3", "supplier_id": 1,
    })

    assert ok is True
    assert dash.stats.total_products == 2
    assert dash.stats.low_stock_count == 1
    assert "Gear" in [p.name for p in dash.products]


def test_missing_required_fields_alert_without_request():
    backend = FakeBackend()
    prompter = RecordingPrompter()
    dash = _dashboard(backend, prompter)

    assert dash.save_product({"sku": "", "name": "X"}) is False
    assert backend.repo.calls_to("POST", "/products") == []
    assert prompter.alerts and prompter.alerts[0][1].startswith("Required:")


def test_delete_confirms_resets_page_and_refreshes():
    backend = FakeBackend([_item(i) for i in range(1, 26)])
    dash = _dashboard(backend)
    dash.set_page(3)
    assert dash.page == 3
    backend.delete_route(25)

    target = dash.products[0]
    assert target.id == 25
    assert dash.delete_product(target) is True
    assert dash.page == 1
    assert dash.stats.total_products == 24


def test_delete_declined_sends_nothing():
    backend = FakeBackend([_item(1)])
    dash = _dashboard(backend, RecordingPrompter(confirm_answer=False))
    dash.refresh()
    backend.delete_route(1)

    assert dash.delete_product(dash.products[0]) is False
    assert backend.repo.calls_to("DELETE", "/products/1") == []


def test_partial_failure_applies_nothing():
    backend = FakeBackend([_item(1, "Bolt")])
    dash = _dashboard(backend)
    dash.refresh()
    before = (list(dash.products), dash.stats)

    backend.products.append(_item(2, "Nut"))
    backend.repo.routes[("GET", "/suppliers")] = NetworkError("down")

    assert dash.refresh() is False
    assert (dash.products, dash.stats) == before
    assert dash.last_error


def test_search_and_filter_reset_to_first_page():
    backend = FakeBackend([_item(i, name=f"Bolt {i}") for i in range(1, 40)])
    dash = _dashboard(backend)
    dash.set_page(3)

    dash.submit_search("  bolt ")
    assert dash.page == 1
    assert backend.repo.calls_to("GET", "/products")[-1]["params"] == {"page": 1, "limit": 12, "search": "bolt"}

    dash.set_page(2)
    dash.set_low_stock_only(True)
    assert dash.page == 1
    assert not dash.show_pagination


def test_pagination_hidden_for_single_page():
    backend = FakeBackend([_item(1)])
    dash = _dashboard(backend)
    dash.refresh()
    assert not dash.show_pagination
    assert dash.next_page() is False


def test_stale_refresh_result_is_discarded():
    backend = FakeBackend()
    entered = threading.Event()
    release = threading.Event()
    lock = threading.Lock()
    seen = []

    def page(params=None):
        with lock:
            first = not seen
            seen.append(1)
        if first:
            entered.set()
            release.wait(5)
            return {"products": [_item(1, "OLD")], "pagination": {"page": 1, "limit": 12, "total": 1, "total_pages": 1}}
        return {"products": [_item(2, "NEW")], "pagination": {"page": 1, "limit": 12, "total": 1, "total_pages": 1}}

    backend.repo.routes[("GET", "/products")] = page
    dash = _dashboard(backend)
    results = []
    t = threading.Thread(target=lambda: results.append(dash.refresh()))
    t.start()
    assert entered.wait(5)

    assert dash.refresh() is True
    release.set()
    t.join(5)

    assert results == [False]
    assert [p.name for p in dash.products] == ["NEW"]
    dash.close()


def test_listeners_notified_after_refresh():
    backend = FakeBackend([_item(1)])
    dash = _dashboard(backend)
    seen = []
    dash.listeners.append(lambda d: seen.append(d.stats.total_products))

    dash.refresh()
    assert seen == [1]


def test_unreadable_image_alerts_without_request(tmp_path):
    backend = FakeBackend()
    prompter = RecordingPrompter()
    dash = _dashboard(backend, prompter)

    ok = dash.save_product(
        {"sku": "G-1", "name": "Gear", "price": "1", "stock": "0", "min_stock": "1", "supplier_id": 1},
        image=tmp_path / "gone.png",
    )

    assert ok is False
    assert backend.repo.calls_to("POST", "/products") == []
    assert prompter.alerts == [("Product", "Cannot read image gone.png")]


def test_malformed_payload_fails_the_cycle_cleanly():
    backend = FakeBackend([_item(1, "Bolt")])
    dash = _dashboard(backend)
    dash.refresh()

    backend.repo.routes[("GET", "/products")] = {
        "products": [{"id": 2, "sku": "X", "name": "Broken", "stock": "lots", "min_stock": 1}],
        "pagination": {"page": 1, "limit": 12, "total": 1, "total_pages": 1},
    }

    assert dash.refresh() is False
    assert not dash.loading
    assert dash.last_error == "Server returned an invalid response."
    assert [p.name for p in dash.products] == ["Bolt"]
