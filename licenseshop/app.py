# module licenseshop.app
import logging

from licenseshop.app_setup.factory import create_app

logging.basicConfig(level=logging.INFO)

# App globale (la clé Stripe est vérifiée au démarrage, dans le lifespan)
app = create_app()
