"""
Résolution du catalogue Stripe: deux produits "service" actifs (cores, devs) et leur plan courant.
Le plan courant est celui dont l'identifiant porte le plus grand suffixe numérique
(ex: "logary_devs_5" l'emporte sur "logary_devs_1").
"""
import logging
import re
from typing import List, Protocol

from licenseshop import config
from .errors import CatalogConfigurationError, PlanSuffixError
from .models import Catalog, Plan, Product

logger = logging.getLogger(__name__)

_SUFFIX_RE = re.compile(r"_(\d+)$")


class CatalogSource(Protocol):
    def list_products(self, *, active: bool = True, product_type: str = "service", limit: int = 10) -> List[Product]: ...

    def list_plans(self, product_id: str, limit: int = 50) -> List[Plan]: ...


def plan_suffix(plan_id: str) -> int:
    """Suffixe numérique final de l'identifiant; PlanSuffixError s'il est absent."""
    m = _SUFFIX_RE.search(plan_id or "")
    if not m:
        raise PlanSuffixError(plan_id)
    return int(m.group(1))

def latest_first(plans: List[Plan]) -> List[Plan]:
    """Tri décroissant par suffixe (tri stable: en cas d'égalité, l'ordre Stripe est conservé)."""
    return sorted(plans, key=lambda p: plan_suffix(p.id), reverse=True)

# module licenseshop.checkout.catalog
def resolve_catalog(source: CatalogSource) -> Catalog:
    products = source.list_products(active=True, product_type="service", limit=10)
    if len(products) != 2:
        raise CatalogConfigurationError(
            f"Expected two active=true, type=service products, got {len(products)}"
        )

    by_name = {p.name: p for p in products}
    missing = [n for n in (config.CORES_PRODUCT_NAME, config.DEVS_PRODUCT_NAME) if n not in by_name]
    if missing:
        raise CatalogConfigurationError(f"Missing catalog products: {', '.join(missing)}")

    return Catalog(cores=by_name[config.CORES_PRODUCT_NAME], devs=by_name[config.DEVS_PRODUCT_NAME])

def resolve_plan(source: CatalogSource, product: Product) -> Plan:
    plans = source.list_plans(product.id, limit=50)
    if not plans:
        raise CatalogConfigurationError(f"No plan for product {product.name} ({product.id})")
    current = latest_first(plans)[0]
    logger.info("checkout.catalog.resolve_plan product=%s plans=%s current=%s", product.name, len(plans), current.id)
    return current
