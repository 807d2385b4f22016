import logging
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from app.database.db import get_db_session
from app.database.init_db import init_db
from app.services.customer_service import CustomerService
from app.services.invoice_service import InvoiceService, LineInput
from app.services.product_service import ProductService

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = (
    {"name": "Steel Water Bottle", "price": Decimal("100.00"), "gst_rate": Decimal("18"), "stock": 120, "hsn_code": "7323"},
    {"name": "Notebook A5", "price": Decimal("45.50"), "gst_rate": Decimal("12"), "stock": 400, "hsn_code": "4820"},
    {"name": "Rice (per kg)", "price": Decimal("62.00"), "gst_rate": Decimal("5"), "stock": 250, "unit": "kg", "hsn_code": "1006"},
)


def seed_demo_data() -> None:
    with get_db_session() as db:
        products = ProductService(db=db)
        if products.list_products():
            logger.info("seed.skipped", extra={"event": "seed.skipped"})
            return

        created = [products.create_product(**fields) for fields in DEMO_PRODUCTS]
        customer = CustomerService(db=db).create_customer(
            name="Sharma Traders",
            phone="+91 98200 00000",
            email="accounts@sharmatraders.example",
        )
        invoice = InvoiceService(db=db).create_invoice(
            customer_id=customer.id,
            lines=[
                LineInput(product_id=created[0].id, quantity=3),
                LineInput(product_id=created[1].id, quantity=10),
            ],
            notes="Demo invoice",
        )
        logger.info(
            "seed.completed",
            extra={"event": "seed.completed", "invoice_number": invoice.invoice_number},
        )


if __name__ == "__main__":
    init_db()
    seed_demo_data()
