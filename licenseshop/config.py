# licenseshop.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale du service de checkout.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env) sans écraser l'environnement
- Normalise et expose la clé secrète Stripe et la version d'API épinglée
- Expose les noms des produits du catalogue (licences cores/devs)
- Sécurité HTTP (CORS/hosts/HSTS) et limitation de débit sur /charge
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _int_env(name: str, default: int) -> int:
    raw = _clean_env(os.getenv(name) or "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default

# Stripe: clé secrète (obligatoire au démarrage) et version d'API
# - LOGARY_STRIPE_SECRET_KEY reste accepté comme nom historique
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or os.getenv("LOGARY_STRIPE_SECRET_KEY") or "")
# Les paramètres billing/tax_percent/source du flux d'abonnement dépendent de cette version
STRIPE_API_VERSION = _clean_env(os.getenv("STRIPE_API_VERSION") or "2019-03-14")

# Catalogue: exactement deux produits actifs de type "service"
CORES_PRODUCT_NAME = _clean_env(os.getenv("LICENSE_CORES_PRODUCT") or "logary_license_cores")
DEVS_PRODUCT_NAME = _clean_env(os.getenv("LICENSE_DEVS_PRODUCT") or "logary_license_devs")

# Sécurité HTTP
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Limitation de débit sur POST /charge (par client)
CHARGE_RATE_LIMIT_TIMES = _int_env("CHARGE_RATE_LIMIT_TIMES", 10)
CHARGE_RATE_LIMIT_SECONDS = _int_env("CHARGE_RATE_LIMIT_SECONDS", 60)
