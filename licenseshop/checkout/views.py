import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from licenseshop import config
from licenseshop.utils.rate_limit import optional_rate_limit
from .errors import CheckoutError, InputRejected
from .models import ChargeRequest
from .service import process_charge
from .stripe_client import StripeGateway

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Checkout"])

def get_gateway(request: Request) -> StripeGateway:
    """Passerelle Stripe construite au démarrage (lifespan); remplaçable en tests via dependency_overrides."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("Stripe gateway not initialised")
    return gateway

# module licenseshop.checkout.views
@router.post(
    "/charge",
    dependencies=[Depends(optional_rate_limit(times=config.CHARGE_RATE_LIMIT_TIMES, seconds=config.CHARGE_RATE_LIMIT_SECONDS))],
)
async def charge(request: Request, gateway: StripeGateway = Depends(get_gateway)):
    """
    Crée l'abonnement Stripe correspondant à la commande de licences.
    - Entrée JSON: {customer: {companyName, name, email, vatNo?}, cores, devs, years, price, token: {id}}
    - 200: {type: "success"|"failure", payload: {code, title}}
    - 400: corps invalide, prix différent, e-mail invalide, société manquante (detail lisible)
    - 500 sans corps: toute autre erreur (Stripe, catalogue, issue non gérée)
    """
    try:
        body = await request.json()
        order = ChargeRequest.model_validate(body)
    except (ValueError, ValidationError):
        # JSONDecodeError est un ValueError
        raise HTTPException(status_code=400, detail="Bad request")

    try:
        outcome = await process_charge(gateway, order)
        return JSONResponse(outcome.model_dump())
    except InputRejected as e:
        raise HTTPException(status_code=400, detail=e.message)
    except CheckoutError as e:
        logger.exception("checkout.views.charge failed kind=%s", e.kind)
    except Exception:
        logger.exception("checkout.views.charge failed kind=defect")
    return Response(status_code=500)
