from __future__ import annotations

import logging
from typing import Callable, Optional

from invtrack.application.prompter import Prompter
from invtrack.domain.errors import AppError, ValidationError, error_message
from invtrack.domain.models import Product, STOCK_DIRECTIONS

log = logging.getLogger(__name__)

IDLE = "idle"
SUBMITTING = "submitting"


def parse_quantity(text: str) -> int:
    s = (str(text) if text is not None else "").strip()
    try:
        qty = int(s)
    except ValueError:
        raise ValidationError("Quantity must be a whole number.") from None
    if qty <= 0:
        raise ValidationError("Quantity must be greater than 0.")
    return qty


def project_balance(current_stock: int, direction: str, quantity: int) -> int:
    # not clamped: a stock-out beyond the current balance is left to the server
    if direction == "in":
        return current_stock + quantity
    return current_stock - quantity


class StockMutationForm:
    """Stock in/out entry for one product.

    Two states, idle and submitting. The projected balance is display only;
    the server computes the real one.
    """

    def __init__(self, product: Product, product_service, prompter: Prompter, on_success: Callable[[], None] | None = None):
        self.product = product
        self.products = product_service
        self.prompter = prompter
        self.on_success = on_success

        self.direction = "in"
        self.quantity_text = ""
        self.note = ""
        self.state = IDLE
        self.closed = False

    def set_direction(self, direction: str) -> None:
        if direction not in STOCK_DIRECTIONS:
            raise ValidationError(f"Unknown stock direction '{direction}'.")
        self.direction = direction

    def projected_balance(self) -> Optional[int]:
        try:
            qty = parse_quantity(self.quantity_text)
        except ValidationError:
            return None
        return project_balance(int(self.product.stock), self.direction, qty)

    def can_submit(self) -> bool:
        return self.state == IDLE and not self.closed and bool(str(self.quantity_text).strip())

    def payload(self) -> dict:
        return {"type": self.direction, "quantity": parse_quantity(self.quantity_text), "note": self.note.strip()}

    def submit(self) -> bool:
        if self.state == SUBMITTING or self.closed:
            return False

        try:
            body = self.payload()
        except ValidationError as e:
            self.prompter.alert("Update stock", str(e))
            return False

        self.state = SUBMITTING
        try:
            self.products.update_stock(self.product.id, body["type"], body["quantity"], body["note"])
        except AppError as e:
            log.warning("stock_update_failed product_id=%s error=%s", self.product.id, e)
            self.state = IDLE
            self.prompter.alert("Update stock", error_message(e, "Failed to update stock"))
            return False

        self.state = IDLE
        self.closed = True
        if self.on_success is not None:
            self.on_success()
        return True

    def close(self) -> None:
        if self.state == IDLE:
            self.closed = True
