import pytest

from licenseshop.checkout.errors import UnsupportedOutcomeError
from licenseshop.checkout.models import Subscription
from licenseshop.checkout.outcomes import classify, outcome_key


def test_active_succeeded_is_success():
    outcome = classify("active|succeeded")
    assert outcome.model_dump() == {"type": "success", "payload": {"code": "active|succeeded", "title": "Thanks!"}}

def test_incomplete_requires_payment_method_is_failure():
    outcome = classify("incomplete|requires_payment_method")
    assert outcome.type == "failure"
    assert outcome.payload.title == "Payment failed"

@pytest.mark.parametrize("key", ["trialing|", "active|", "incomplete|requires_action", "past_due|succeeded", ""])
def test_other_keys_are_unsupported(key):
    with pytest.raises(UnsupportedOutcomeError) as exc:
        classify(key)
    assert exc.value.outcome == key
    assert exc.value.kind == "defect"

def test_outcome_key_without_payment_intent():
    assert outcome_key(Subscription(id="sub_1", status="trialing")) == "trialing|"
    assert outcome_key(Subscription(id="sub_1", status="active", payment_intent_status="succeeded")) == "active|succeeded"
