"""
Erreurs typées du checkout.
Chaque erreur porte un `kind` qui distingue:
- input: rejet de l'entrée client (400, message lisible)
- configuration: catalogue Stripe incohérent (produits, suffixes de plans)
- processor: échec d'un appel Stripe (réseau, API)
- defect: état non géré par l'implémentation (ex: outcome inconnu)
Seul `input` est visible du client; tout le reste devient un 500 sans corps.
"""
from typing import Optional


class CheckoutError(Exception):
    kind = "defect"


class InputRejected(CheckoutError):
    """Rejet d'entrée: le message est renvoyé tel quel au client."""

    kind = "input"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CatalogConfigurationError(CheckoutError):
    kind = "configuration"


class PlanSuffixError(CatalogConfigurationError):
    """Identifiant de plan sans suffixe numérique exploitable (ex: 'logary_devs')."""

    def __init__(self, plan_id: str):
        super().__init__(f"Plan id without numeric suffix: {plan_id!r}")
        self.plan_id = plan_id


class ProcessorError(CheckoutError):
    kind = "processor"

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        detail = getattr(cause, "user_message", None) or str(cause or "")
        super().__init__(f"{operation} failed: {detail}" if detail else f"{operation} failed")
        self.operation = operation


class UnsupportedOutcomeError(CheckoutError):
    """Couple (statut abonnement, statut paiement) non pris en charge (ex: 'trialing|')."""

    kind = "defect"

    def __init__(self, outcome: str):
        super().__init__(f"Impl error: outcome: {outcome}")
        self.outcome = outcome
