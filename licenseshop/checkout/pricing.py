"""
Calcul de prix pur (pas de Stripe, pas d'I/O).
- Tarif annuel par core et par développeur, remise selon la durée, TVA optionnelle.
- Montants en Decimal (arrondi au centime, ROUND_HALF_UP); comparaison exacte via `equal`.
- `stringify` prépare le détail du prix pour les metadata Stripe (valeurs str uniquement).
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CURRENCY = "EUR"
CORE_YEARLY_PRICE = Decimal("25.00")
DEV_YEARLY_PRICE = Decimal("100.00")
VAT_RATE = Decimal("0.25")

_CENT = Decimal("0.01")

RebateStrategy = Callable[[int], Decimal]


class Money(BaseModel):
    amount: Decimal
    currency: str = Field(min_length=3, max_length=3)

    model_config = ConfigDict(frozen=True)

    @field_validator("amount", mode="before")
    @classmethod
    def _float_as_text(cls, value):
        # 12.3 (JSON) -> Decimal("12.3"), pas Decimal(12.300000000000000710...)
        if isinstance(value, float):
            return repr(value)
        return value

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()


class PriceBreakdown(BaseModel):
    """
    Détail d'un prix. Seul `total` est obligatoire côté client;
    le calcul serveur renseigne tous les champs.
    """

    cores: Optional[Money] = None
    devs: Optional[Money] = None
    subtotal: Optional[Money] = None
    rebate: Optional[Decimal] = None
    discount: Optional[Money] = None
    net: Optional[Money] = None
    vat_rate: Decimal = Field(default=Decimal("0"), alias="vatRate")
    vat: Optional[Money] = None
    total: Money

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


def _round(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)

def _money(amount: Decimal) -> Money:
    return Money(amount=_round(amount), currency=CURRENCY)

def continuous_rebate(years: int) -> Decimal:
    """5 % par année au-delà de la première, plafonné à 25 %."""
    if years < 1:
        raise ValueError("years must be >= 1")
    return min(Decimal("0.05") * (years - 1), Decimal("0.25"))

def no_rebate(years: int) -> Decimal:
    return Decimal("0")

def calculate_price(
    cores: int,
    devs: int,
    years: int,
    rebate: RebateStrategy = continuous_rebate,
    charge_vat: bool = True,
) -> PriceBreakdown:
    """
    Calcule le prix faisant foi pour une commande de licences.
    - cores/devs: quantités (>= 0), years: durée en années (>= 1)
    - rebate: stratégie de remise selon la durée
    - charge_vat: False pour une société avec numéro de TVA (autoliquidation)
    """
    if cores < 0 or devs < 0:
        raise ValueError("cores and devs must be >= 0")
    if years < 1:
        raise ValueError("years must be >= 1")

    cores_amount = _round(CORE_YEARLY_PRICE * cores * years)
    devs_amount = _round(DEV_YEARLY_PRICE * devs * years)
    subtotal = cores_amount + devs_amount
    rate = rebate(years)
    discount = _round(subtotal * rate)
    net = subtotal - discount
    vat_rate = VAT_RATE if charge_vat else Decimal("0")
    vat = _round(net * vat_rate)

    return PriceBreakdown(
        cores=_money(cores_amount),
        devs=_money(devs_amount),
        subtotal=_money(subtotal),
        rebate=rate,
        discount=_money(discount),
        net=_money(net),
        vat_rate=vat_rate,
        vat=_money(vat),
        total=_money(net + vat),
    )

def equal(a: Money, b: Money) -> bool:
    """Égalité stricte: même devise et même montant (pas de tolérance)."""
    return a.currency == b.currency and a.amount == b.amount

def format_money(m: Money) -> str:
    return f"{m.amount:,.2f} {m.currency}"

def stringify(price: PriceBreakdown) -> Dict[str, str]:
    """
    Sérialise le détail du prix pour les metadata Stripe.
    - Money -> "1,234.50 EUR", scalaires -> str(value)
    - Clés en camelCase (vocabulaire client), champs absents ignorés
    """
    out: Dict[str, str] = {}
    for name, field in PriceBreakdown.model_fields.items():
        value = getattr(price, name)
        if value is None:
            continue
        key = field.alias or name
        out[key] = format_money(value) if isinstance(value, Money) else str(value)
    return out
