"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Construit la passerelle Stripe (app.state.gateway); sans clé secrète, le démarrage échoue.
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis).
- Variables d'environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback local si l'init échoue
"""
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from licenseshop import config
from licenseshop.checkout.stripe_client import StripeGateway

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None

logger = logging.getLogger("uvicorn.error")

def build_gateway() -> StripeGateway:
    """Passerelle Stripe depuis la configuration; RuntimeError si la clé est absente."""
    if not config.STRIPE_SECRET_KEY:
        raise RuntimeError("Missing env var STRIPE_SECRET_KEY (or LOGARY_STRIPE_SECRET_KEY)")
    return StripeGateway(config.STRIPE_SECRET_KEY, config.STRIPE_API_VERSION)

async def init_rate_limiter(app: FastAPI) -> None:
    """
    Configure le rate limiting et gère les fallbacks.
    - En cas d'échec de Redis et sans fallback, le rate limiting est désactivé proprement.
    - Les logs indiquent l'état effectif (enabled/disabled) pour observabilité.
    """
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return
    try:
        from fastapi_limiter import FastAPILimiter

        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            if not FakeRedis:
                raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")
            r = FakeRedis(decode_responses=True)
        else:
            import redis.asyncio as aioredis
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)

        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning(f"Rate limiting falling back to local in-memory due to init error: {e}")
        else:
            app.state.rate_limit_enabled = False
            logger.warning(f"Rate limiting disabled due to init error: {e}")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Une passerelle injectée (tests) est conservée
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = build_gateway()
    logger.info("Stripe gateway ready (api_version=%s)", app.state.gateway.api_version)

    await init_rate_limiter(app)
    yield
