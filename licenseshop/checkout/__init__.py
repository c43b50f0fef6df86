"""
Module 'checkout' (feature-first): point d'entrée public.
Réunit calcul de prix, normalisation e-mail, passerelle Stripe, réconciliation client,
catalogue, abonnement et classement de l'issue.
"""

from .pricing import Money, PriceBreakdown, calculate_price, continuous_rebate, equal, format_money, stringify
from .emails import NormalizedEmail, normalize_email
from .errors import (
    CheckoutError,
    InputRejected,
    CatalogConfigurationError,
    PlanSuffixError,
    ProcessorError,
    UnsupportedOutcomeError,
)
from .stripe_client import StripeGateway
from .customers import reconcile_customer
from .catalog import resolve_catalog, resolve_plan, plan_suffix, latest_first
from .subscriptions import create_subscription
from .outcomes import classify, outcome_key
from .service import validate_order, process_charge

__all__ = [
    # pricing
    "Money",
    "PriceBreakdown",
    "calculate_price",
    "continuous_rebate",
    "equal",
    "format_money",
    "stringify",
    # e-mail
    "NormalizedEmail",
    "normalize_email",
    # errors
    "CheckoutError",
    "InputRejected",
    "CatalogConfigurationError",
    "PlanSuffixError",
    "ProcessorError",
    "UnsupportedOutcomeError",
    # stripe
    "StripeGateway",
    # flow
    "reconcile_customer",
    "resolve_catalog",
    "resolve_plan",
    "plan_suffix",
    "latest_first",
    "create_subscription",
    "classify",
    "outcome_key",
    "validate_order",
    "process_charge",
]
