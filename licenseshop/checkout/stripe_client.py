"""
Adaptateur Stripe: centralise les appels du checkout.
- Instance explicite (clé + version d'API) construite au démarrage, jamais de `stripe.api_key` global.
- Chaque appel passe api_key/stripe_version; les erreurs Stripe deviennent ProcessorError.
- Les objets Stripe sont convertis en modèles (ProcessorCustomer, Product, Plan, Subscription).
"""
import logging
from typing import Any, Dict, List, Optional

import stripe

from .errors import ProcessorError
from .models import Plan, ProcessorCustomer, Product, Subscription

logger = logging.getLogger(__name__)

# module licenseshop.checkout.stripe_client
def _to_dict(obj: Any) -> Dict[str, Any]:
    """StripeObject -> dict (to_dict selon les versions du SDK, sinon mapping)."""
    if obj is None:
        return {}
    if isinstance(obj, dict):
        return dict(obj)
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)

def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)

def _customer(obj: Any) -> ProcessorCustomer:
    source = _field(obj, "default_source")
    return ProcessorCustomer(
        id=str(_field(obj, "id")),
        email=_field(obj, "email"),
        # default_source peut être un id ou un objet déjà développé
        default_source=source if isinstance(source, str) or source is None else _field(source, "id"),
        metadata={str(k): str(v) for k, v in _to_dict(_field(obj, "metadata")).items()},
    )

def _subscription(obj: Any) -> Subscription:
    invoice = _field(obj, "latest_invoice")
    intent = _field(invoice, "payment_intent") if not isinstance(invoice, str) else None
    return Subscription(
        id=str(_field(obj, "id")),
        status=str(_field(obj, "status") or ""),
        payment_intent_status=_field(intent, "status") if not isinstance(intent, str) else None,
    )


class StripeGateway:
    """Accès distant à l'annuaire clients, au catalogue et aux abonnements Stripe."""

    def __init__(self, api_key: str, api_version: Optional[str] = None):
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.api_version = api_version

    def _opts(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {"api_key": self.api_key}
        if self.api_version:
            opts["stripe_version"] = self.api_version
        return opts

    def _call(self, operation: str, fn, *args, **params):
        try:
            return fn(*args, **params, **self._opts())
        except stripe.StripeError as e:
            raise ProcessorError(operation, e) from e

    def list_customers_by_email(self, email: str, limit: int = 1) -> List[ProcessorCustomer]:
        res = self._call("customers.list", stripe.Customer.list, email=email, limit=limit)
        return [_customer(c) for c in _field(res, "data") or []]

    def create_customer(
        self,
        *,
        name: str,
        email: str,
        description: str,
        source: str,
        metadata: Dict[str, str],
    ) -> ProcessorCustomer:
        created = self._call(
            "customers.create",
            stripe.Customer.create,
            name=name,
            email=email,
            description=description,
            source=source,
            metadata=metadata,
        )
        return _customer(created)

    def update_customer(self, customer_id: str, *, source: str, metadata: Dict[str, str]) -> ProcessorCustomer:
        updated = self._call(
            "customers.update",
            stripe.Customer.modify,
            customer_id,
            source=source,
            metadata=metadata,
        )
        return _customer(updated)

    def list_products(self, *, active: bool = True, product_type: str = "service", limit: int = 10) -> List[Product]:
        res = self._call("products.list", stripe.Product.list, active=active, type=product_type, limit=limit)
        return [Product(id=str(_field(p, "id")), name=str(_field(p, "name") or "")) for p in _field(res, "data") or []]

    def list_plans(self, product_id: str, limit: int = 50) -> List[Plan]:
        res = self._call("plans.list", stripe.Plan.list, product=product_id, limit=limit)
        return [Plan(id=str(_field(p, "id")), product=product_id) for p in _field(res, "data") or []]

    def create_subscription(
        self,
        *,
        customer_id: str,
        items: List[Dict[str, Any]],
        metadata: Dict[str, str],
        tax_percent: float,
    ) -> Subscription:
        created = self._call(
            "subscriptions.create",
            stripe.Subscription.create,
            customer=customer_id,
            items=items,
            billing="charge_automatically",
            metadata=metadata,
            expand=["latest_invoice.payment_intent"],
            tax_percent=tax_percent,
        )
        logger.debug("checkout.stripe_client.create_subscription id=%s", _field(created, "id"))
        return _subscription(created)
