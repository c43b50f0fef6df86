"""
Classement du résultat Stripe en issue client.
Clé composite "<statut abonnement>|<statut payment_intent>":
- active|succeeded -> success "Thanks!"
- incomplete|requires_payment_method -> failure "Payment failed"
- tout le reste (dont "trialing|", pas de période d'essai) -> UnsupportedOutcomeError
"""
from .errors import UnsupportedOutcomeError
from .models import ChargeOutcome, OutcomePayload, Subscription

ACTIVE_SUCCEEDED = "active|succeeded"
INCOMPLETE_REQUIRES_PAYMENT_METHOD = "incomplete|requires_payment_method"

_OUTCOMES = {
    ACTIVE_SUCCEEDED: ("success", "Thanks!"),
    INCOMPLETE_REQUIRES_PAYMENT_METHOD: ("failure", "Payment failed"),
}


def outcome_key(subscription: Subscription) -> str:
    return f"{subscription.status}|{subscription.payment_intent_status or ''}"

def classify(outcome: str) -> ChargeOutcome:
    known = _OUTCOMES.get(outcome)
    if known is None:
        raise UnsupportedOutcomeError(outcome)
    kind, title = known
    return ChargeOutcome(type=kind, payload=OutcomePayload(code=outcome, title=title))
