"""Modèles du checkout: corps de requête /charge et vues normalisées des objets Stripe."""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pricing import PriceBreakdown


class CustomerProfile(BaseModel):
    # companyName/email restent des chaînes brutes: vérifiés par le service (ordre des rejets)
    company_name: Optional[str] = Field(default=None, alias="companyName")
    name: str = ""
    email: str = ""
    vat_no: Optional[str] = Field(default=None, alias="vatNo")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def charge_vat(self) -> bool:
        """TVA facturée sauf si un numéro de TVA est fourni (autoliquidation)."""
        return not (self.vat_no or "").strip()


class PaymentToken(BaseModel):
    id: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class ChargeRequest(BaseModel):
    """Corps JSON de POST /charge."""

    customer: CustomerProfile
    cores: int = Field(ge=0)
    devs: int = Field(ge=0)
    years: int = Field(ge=1)
    price: PriceBreakdown
    token: PaymentToken

    model_config = ConfigDict(frozen=True)


class ProcessorCustomer(BaseModel):
    id: str
    email: Optional[str] = None
    default_source: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Product(BaseModel):
    id: str
    name: str

    model_config = ConfigDict(frozen=True)


class Plan(BaseModel):
    id: str
    product: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Catalog(BaseModel):
    cores: Product
    devs: Product

    model_config = ConfigDict(frozen=True)


class Subscription(BaseModel):
    id: str
    status: str
    # statut du payment_intent de la dernière facture (expand) si présent
    payment_intent_status: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class OutcomePayload(BaseModel):
    code: str
    title: str


class ChargeOutcome(BaseModel):
    """Réponse 200 de /charge: {type: success|failure, payload: {code, title}}."""

    type: str
    payload: OutcomePayload
