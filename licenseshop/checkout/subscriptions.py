"""Construction et création de l'abonnement Stripe (deux lignes: devs et cores)."""
import logging
from typing import Any, Dict, List, Protocol

from .catalog import CatalogSource, resolve_catalog, resolve_plan
from .models import ProcessorCustomer, Subscription
from .pricing import PriceBreakdown, stringify

logger = logging.getLogger(__name__)


class SubscriptionSink(CatalogSource, Protocol):
    def create_subscription(
        self,
        *,
        customer_id: str,
        items: List[Dict[str, Any]],
        metadata: Dict[str, str],
        tax_percent: float,
    ) -> Subscription: ...


# module licenseshop.checkout.subscriptions
def create_subscription(
    gateway: SubscriptionSink,
    cores: int,
    devs: int,
    price: PriceBreakdown,
    customer: ProcessorCustomer,
) -> Subscription:
    """
    Résout le catalogue et les plans courants puis crée l'abonnement:
    - items: plan devs x devs, plan cores x cores
    - metadata: détail du prix sérialisé (stringify)
    - tax_percent: 100 x taux de TVA du prix calculé
    Pas de clé d'idempotence: un second appel crée un second abonnement.
    """
    catalog = resolve_catalog(gateway)
    plan_cores = resolve_plan(gateway, catalog.cores)
    plan_devs = resolve_plan(gateway, catalog.devs)

    subscription = gateway.create_subscription(
        customer_id=customer.id,
        items=[
            {"plan": plan_devs.id, "quantity": devs},
            {"plan": plan_cores.id, "quantity": cores},
        ],
        metadata=stringify(price),
        tax_percent=float(price.vat_rate * 100),
    )
    logger.info(
        "checkout.subscriptions.create id=%s customer=%s status=%s",
        subscription.id, customer.id, subscription.status,
    )
    return subscription
