"""
Cas d'usage 'checkout': orchestre pricing, e-mail, client Stripe, abonnement et classement.
Ordre: prix -> e-mail -> société -> client -> abonnement -> issue.
Les rejets d'entrée (InputRejected) surviennent avant tout appel Stripe.
"""
import logging
from typing import Tuple

from starlette.concurrency import run_in_threadpool

from . import pricing
from .customers import reconcile_customer
from .emails import NormalizedEmail, normalize_email
from .errors import InputRejected
from .models import ChargeOutcome, ChargeRequest
from .outcomes import classify, outcome_key
from .stripe_client import StripeGateway
from .subscriptions import create_subscription

logger = logging.getLogger(__name__)

BAD_AMOUNT = "Bad amount or not same currency"
BAD_EMAIL = "Bad e-mail"
BAD_COMPANY = "Bad company name"

# module licenseshop.checkout.service
def validate_order(order: ChargeRequest) -> Tuple[pricing.PriceBreakdown, NormalizedEmail]:
    """
    Valide la commande sans appel externe.
    Retourne (prix calculé côté serveur, e-mail normalisé); lève InputRejected sinon.
    Le prix calculé remplace toujours celui du client pour la suite.
    """
    expected = pricing.calculate_price(
        order.cores,
        order.devs,
        order.years,
        pricing.continuous_rebate,
        order.customer.charge_vat,
    )
    logger.info("checkout.service.validate calculated total=%s", pricing.format_money(expected.total))

    if not pricing.equal(expected.total, order.price.total):
        logger.error(
            "checkout.service.validate client price %s but calculated %s",
            pricing.format_money(order.price.total), pricing.format_money(expected.total),
        )
        raise InputRejected(BAD_AMOUNT)

    email = normalize_email(order.customer.email)
    if email is None:
        raise InputRejected(BAD_EMAIL)

    if not (order.customer.company_name or "").strip():
        raise InputRejected(BAD_COMPANY)

    return expected, email

async def process_charge(gateway: StripeGateway, order: ChargeRequest) -> ChargeOutcome:
    """
    Exécute le checkout complet et retourne l'issue classée.
    Les appels Stripe (SDK synchrone) passent par le threadpool, un à la fois.
    Exceptions possibles après validation: CatalogConfigurationError, ProcessorError,
    UnsupportedOutcomeError (aucune compensation: un client créé reste créé).
    """
    price, email = validate_order(order)

    customer = await run_in_threadpool(
        reconcile_customer, gateway, order.token.id, order.customer, email
    )
    subscription = await run_in_threadpool(
        create_subscription, gateway, order.cores, order.devs, price, customer
    )

    outcome = outcome_key(subscription)
    logger.info("checkout.service.process_charge outcome for %s: %s", customer.id, outcome)
    return classify(outcome)
