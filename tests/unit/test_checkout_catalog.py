import pytest

from licenseshop.checkout.catalog import latest_first, plan_suffix, resolve_catalog, resolve_plan
from licenseshop.checkout.errors import CatalogConfigurationError, PlanSuffixError
from licenseshop.checkout.models import Plan, Product

from conftest import FakeGateway

CORES = Product(id="prod_cores", name="logary_license_cores")
DEVS = Product(id="prod_devs", name="logary_license_devs")


def test_resolve_catalog_partitions_by_name():
    gw = FakeGateway(products=[DEVS, CORES])
    catalog = resolve_catalog(gw)
    assert catalog.cores == CORES
    assert catalog.devs == DEVS
    assert gw.calls == [("list_products", True, "service", 10)]

@pytest.mark.parametrize("products", [
    [],
    [CORES],
    [CORES, DEVS, Product(id="prod_x", name="something_else")],
])
def test_resolve_catalog_requires_exactly_two_products(products):
    with pytest.raises(CatalogConfigurationError):
        resolve_catalog(FakeGateway(products=products))

def test_resolve_catalog_requires_expected_names():
    with pytest.raises(CatalogConfigurationError) as exc:
        resolve_catalog(FakeGateway(products=[CORES, Product(id="prod_y", name="logary_license_ops")]))
    assert "logary_license_devs" in str(exc.value)

def test_plan_suffix_parses_trailing_number():
    assert plan_suffix("logary_devs_5") == 5
    assert plan_suffix("logary_devs_2019_12") == 12

@pytest.mark.parametrize("plan_id", ["logary_devs", "logary_devs_", "plan_5a", ""])
def test_plan_suffix_missing_is_a_data_error(plan_id):
    with pytest.raises(PlanSuffixError):
        plan_suffix(plan_id)

def test_latest_first_is_numeric_not_lexicographic():
    plans = [Plan(id="logary_devs_9"), Plan(id="logary_devs_10"), Plan(id="logary_devs_1")]
    assert [p.id for p in latest_first(plans)] == ["logary_devs_10", "logary_devs_9", "logary_devs_1"]

def test_latest_first_keeps_listing_order_on_ties():
    plans = [Plan(id="a_2"), Plan(id="b_2"), Plan(id="c_1")]
    assert [p.id for p in latest_first(plans)] == ["a_2", "b_2", "c_1"]

def test_resolve_plan_picks_greatest_suffix():
    gw = FakeGateway()
    plan = resolve_plan(gw, DEVS)
    assert plan.id == "logary_devs_10"
    assert ("list_plans", "prod_devs", 50) in gw.calls

def test_resolve_plan_without_plans_fails():
    with pytest.raises(CatalogConfigurationError):
        resolve_plan(FakeGateway(plans={}), CORES)
