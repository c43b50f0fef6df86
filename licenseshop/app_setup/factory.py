"""
Factory d'application pour les entrypoints (ex: licenseshop.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers
from licenseshop.checkout.stripe_client import StripeGateway

def create_app(gateway: Optional[StripeGateway] = None) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base (CORS, TrustedHost) et en-têtes de sécurité
      - gestionnaires d'exceptions
      - routers (checkout, health)
    gateway: passerelle Stripe déjà construite (sinon créée au démarrage depuis la config).
    """
    app = FastAPI(title="License checkout", lifespan=lifespan)
    app.state.gateway = gateway
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
