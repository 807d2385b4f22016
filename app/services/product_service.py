"""Product catalog service."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from sqlalchemy import or_

from app.core.exceptions import InvalidAmount, ProductNotFound, ValidationError
from app.ledger import ProductSnapshot
from app.models import Product
from app.services.base_service import BaseService
from app.utils.money import to_decimal, to_money
from app.utils.validators import LIKE_ESCAPE, contains_pattern, optional_text, require_text

logger = logging.getLogger(__name__)

DEFAULT_GST_RATE = Decimal("18.00")
UPDATABLE_FIELDS = ("name", "description", "price", "gst_rate", "stock", "unit", "hsn_code")


def _non_negative(value, label: str, places: Decimal = Decimal("0.01")) -> Decimal:
    try:
        amount = to_decimal(value).quantize(places)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise InvalidAmount(f"{label} must be a number, got {value!r}.") from exc
    if amount < 0:
        raise InvalidAmount(f"{label} must not be negative.")
    return amount


class ProductService(BaseService):
    """Service for product CRUD and line-item snapshots."""

    def _clean(self, field: str, value):
        if field == "name":
            return require_text(value, "Product name")
        if field == "price":
            return to_money(_non_negative(value, "Price"))
        if field == "gst_rate":
            return _non_negative(value, "GST rate")
        if field == "stock":
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError("Stock must be a non-negative integer.")
            return value
        if field == "unit":
            return require_text(value, "Unit", max_len=16)
        if field == "hsn_code":
            return optional_text(value, max_len=16)
        return optional_text(value, max_len=4000)

    def create_product(
        self,
        name: str,
        price: Decimal | int | float | str,
        gst_rate: Decimal | int | float | str = DEFAULT_GST_RATE,
        stock: int = 0,
        unit: str = "pcs",
        description: str | None = None,
        hsn_code: str | None = None,
    ) -> Product:
        product = Product(
            name=self._clean("name", name),
            price=self._clean("price", price),
            gst_rate=self._clean("gst_rate", gst_rate),
            stock=self._clean("stock", stock),
            unit=self._clean("unit", unit),
            description=self._clean("description", description),
            hsn_code=self._clean("hsn_code", hsn_code),
        )
        product = self.save(product)
        logger.info("product.created", extra={"event": "product.created", "product_id": product.id})
        return product

    def get_product(self, product_id: int) -> Product | None:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def require_product(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found.")
        return product

    def snapshot(self, product_id: int) -> ProductSnapshot:
        """Capture the product's current name, price and GST rate for a new line."""
        product = self.require_product(product_id)
        return ProductSnapshot.of(
            product_id=product.id,
            name=product.name,
            price=product.price,
            tax_rate=product.gst_rate,
        )

    def list_products(self, search: str | None = None) -> list[Product]:
        query = self.db.query(Product)
        term = optional_text(search, max_len=255)
        if term:
            pattern = contains_pattern(term)
            query = query.filter(
                or_(
                    Product.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Product.hsn_code.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        return query.order_by(Product.name.asc(), Product.id.asc()).all()

    def update_product(self, product_id: int, **fields) -> Product:
        product = self.require_product(product_id)
        cleaned = {
            field: self._clean(field, value)
            for field, value in fields.items()
            if field in UPDATABLE_FIELDS
        }
        for field, value in cleaned.items():
            setattr(product, field, value)
        self.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> None:
        """Delete a product. Existing invoice lines keep their snapshot."""
        product = self.require_product(product_id)
        self.db.delete(product)
        self.commit()
        logger.info("product.deleted", extra={"event": "product.deleted", "product_id": product_id})
