import os

# Clé factice avant l'import de la config (la vraie clé n'est jamais utilisée en tests)
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ["DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS"] = "1"

import pytest
from decimal import Decimal
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

from licenseshop.app_setup.factory import create_app
from licenseshop.checkout.models import Plan, ProcessorCustomer, Product, Subscription

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)


class FakeGateway:
    """Double de StripeGateway: état en mémoire + journal des appels."""

    api_version = "2019-03-14"

    def __init__(
        self,
        customers: Optional[List[ProcessorCustomer]] = None,
        products: Optional[List[Product]] = None,
        plans: Optional[Dict[str, List[Plan]]] = None,
        subscription_status: str = "active",
        payment_intent_status: Optional[str] = "succeeded",
    ):
        self.customers = list(customers or [])
        self.products = products if products is not None else [
            Product(id="prod_cores", name="logary_license_cores"),
            Product(id="prod_devs", name="logary_license_devs"),
        ]
        self.plans = plans if plans is not None else {
            "prod_cores": [Plan(id="logary_cores_1"), Plan(id="logary_cores_3"), Plan(id="logary_cores_2")],
            "prod_devs": [Plan(id="logary_devs_5"), Plan(id="logary_devs_10")],
        }
        self.subscription_status = subscription_status
        self.payment_intent_status = payment_intent_status
        self.calls: List[tuple] = []

    @property
    def writes(self) -> List[tuple]:
        return [c for c in self.calls if c[0] in ("create_customer", "update_customer", "create_subscription")]

    def list_customers_by_email(self, email: str, limit: int = 1):
        self.calls.append(("list_customers_by_email", email, limit))
        return [c for c in self.customers if c.email == email][:limit]

    def create_customer(self, *, name, email, description, source, metadata):
        self.calls.append(("create_customer", dict(name=name, email=email, description=description, source=source, metadata=metadata)))
        created = ProcessorCustomer(
            id=f"cus_{len(self.customers) + 1}", email=email, default_source=source, metadata=metadata
        )
        self.customers.append(created)
        return created

    def update_customer(self, customer_id, *, source, metadata):
        self.calls.append(("update_customer", customer_id, dict(source=source, metadata=metadata)))
        updated = None
        for i, c in enumerate(self.customers):
            if c.id == customer_id:
                updated = c.model_copy(update={"default_source": source, "metadata": metadata})
                self.customers[i] = updated
        return updated

    def list_products(self, *, active=True, product_type="service", limit=10):
        self.calls.append(("list_products", active, product_type, limit))
        return self.products[:limit]

    def list_plans(self, product_id, limit=50):
        self.calls.append(("list_plans", product_id, limit))
        return self.plans.get(product_id, [])[:limit]

    def create_subscription(self, *, customer_id, items, metadata, tax_percent):
        self.calls.append(("create_subscription", dict(customer_id=customer_id, items=items, metadata=metadata, tax_percent=tax_percent)))
        return Subscription(
            id="sub_1", status=self.subscription_status, payment_intent_status=self.payment_intent_status
        )


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()

@pytest.fixture()
def app(gateway):
    return create_app(gateway=gateway)

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture()
def order_body() -> Dict[str, Any]:
    """Commande valide: 1 core + 1 dev, 1 an, TVA 25 % (pas de numéro de TVA) = 156.25 EUR."""
    return {
        "customer": {
            "companyName": "  Acme AB ",
            "name": " Jane Doe ",
            "email": "Jane Doe <jane@example.com>",
        },
        "cores": 1,
        "devs": 1,
        "years": 1,
        "price": {"total": {"amount": "156.25", "currency": "EUR"}, "vatRate": "0.25"},
        "token": {"id": "tok_visa"},
    }

@pytest.fixture()
def expected_total() -> Decimal:
    return Decimal("156.25")
