"""
Réconciliation client Stripe: retrouver par e-mail, sinon créer; mettre à jour la source si le token change.
Pas de cache local: l'annuaire Stripe est interrogé à chaque checkout.
"""
import logging
import time
from typing import Callable, Dict, Protocol

from .emails import NormalizedEmail
from .models import CustomerProfile, ProcessorCustomer

logger = logging.getLogger(__name__)


class CustomerDirectory(Protocol):
    def list_customers_by_email(self, email: str, limit: int = 1): ...

    def create_customer(self, *, name, email, description, source, metadata) -> ProcessorCustomer: ...

    def update_customer(self, customer_id: str, *, source, metadata) -> ProcessorCustomer: ...


def _now_ms() -> str:
    return str(int(time.time() * 1000))

def _identity_metadata(profile: CustomerProfile, email: NormalizedEmail) -> Dict[str, str]:
    meta = {"companyName": (profile.company_name or "").strip()}
    # Stripe supprime une clé de metadata vide: on n'envoie le nom affiché que s'il existe
    if email.name:
        meta["emailName"] = email.name
    return meta

# module licenseshop.checkout.customers
def reconcile_customer(
    directory: CustomerDirectory,
    token: str,
    profile: CustomerProfile,
    email: NormalizedEmail,
    now: Callable[[], str] = _now_ms,
) -> ProcessorCustomer:
    """
    Retourne le client Stripe à facturer.
    1) Recherche par e-mail exact (limit 1)
    2) Trouvé + même source par défaut: réutilisé tel quel (aucune écriture)
    3) Trouvé + token différent: source remplacée, metadata étendues (clés existantes conservées)
    4) Introuvable: création avec nom, e-mail, description, source et metadata
    Non transactionnel: deux checkouts simultanés pour le même e-mail peuvent créer deux clients.
    """
    logger.debug("checkout.customers.reconcile listing email=%s", email.address)
    found = directory.list_customers_by_email(email.address, limit=1)
    if found:
        existing = found[0]
        if token == existing.default_source:
            logger.info("checkout.customers.reconcile reuse id=%s (same token)", existing.id)
            return existing

        logger.info("checkout.customers.reconcile update id=%s (new source)", existing.id)
        metadata = {**existing.metadata, **_identity_metadata(profile, email), "updated": now()}
        return directory.update_customer(existing.id, source=token, metadata=metadata)

    name = profile.name.strip()
    logger.info("checkout.customers.reconcile create email=%s", email.address)
    return directory.create_customer(
        name=name,
        email=email.address,
        description=f'Customer for "{name}" <{email.address}>',
        source=token,
        metadata={**_identity_metadata(profile, email), "created": now()},
    )
