"""
Registre central des routers.
- Checkout: POST /charge
- Health: /health, /health/stripe, /health/rate-limit
"""
from fastapi import FastAPI
from licenseshop.checkout import views as checkout_views
from licenseshop.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(checkout_views.router)
    # Health & monitoring
    app.include_router(health_router)
