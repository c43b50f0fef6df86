from fastapi import APIRouter, Request

from licenseshop import config
from licenseshop.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/stripe")
def health_stripe(request: Request):
    # Pas d'appel réseau: état de la configuration uniquement
    gateway = getattr(request.app.state, "gateway", None)
    return {
        "configured": bool(config.STRIPE_SECRET_KEY),
        "gateway_ready": gateway is not None,
        "api_version": getattr(gateway, "api_version", None) or config.STRIPE_API_VERSION,
        "products": [config.CORES_PRODUCT_NAME, config.DEVS_PRODUCT_NAME],
    }

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
