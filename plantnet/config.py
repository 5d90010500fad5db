import logging
import os
from datetime import timedelta
from typing import Dict, List, Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
]


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name, str(default))
    try:
        return max(minimum, int(raw))
    except (TypeError, ValueError):
        return default


def allowed_origins() -> List[str]:
    origins = list(DEV_ORIGINS)
    extra = os.getenv("CORS_ALLOWED_ORIGINS", "")
    for origin in extra.split(","):
        trimmed = origin.strip()
        if trimmed:
            origins.append(trimmed)
    return origins


def load_config(overrides: Optional[Dict] = None) -> Dict:
    """Build the application settings from the environment.

    Values from a local ``.env`` file are loaded first; ``overrides`` win over
    anything found in the environment.
    """
    load_dotenv()

    production = os.getenv("APP_ENV", "development").strip().lower() == "production"

    config: Dict[str, object] = {
        "PRODUCTION": production,
        # --- Session ---
        "JWT_SECRET_KEY": os.getenv("ACCESS_TOKEN_SECRET", "change-me-in-production"),
        "JWT_ACCESS_TOKEN_EXPIRES": timedelta(days=365),
        "JWT_TOKEN_LOCATION": ["cookies"],
        "JWT_ACCESS_COOKIE_NAME": "token",
        "JWT_COOKIE_SECURE": production,
        "JWT_COOKIE_SAMESITE": "None" if production else "Strict",
        "JWT_COOKIE_CSRF_PROTECT": False,
        # --- Storage ---
        "MONGO_URI": os.getenv("MONGO_URI", "mongodb://localhost:27017/plantNet"),
        # --- HTTP ---
        "CORS_ALLOWED_ORIGINS": allowed_origins(),
        "TRUSTED_PROXY_HOPS": _int_env("TRUSTED_PROXY_HOPS", 1),
        # --- Payments ---
        "PAYMENT_SECRET_KEY": (os.getenv("PAYMENT_SECRET_KEY") or "").strip(),
        "PAYMENT_API_BASE": os.getenv("PAYMENT_API_BASE", "https://api.stripe.com"),
        "PAYMENT_CURRENCY": os.getenv("PAYMENT_CURRENCY", "usd").strip().lower() or "usd",
        # --- Email ---
        "RESEND_API_KEY": (os.getenv("RESEND_API_KEY") or "").strip(),
        "MAIL_SENDER": os.getenv("MAIL_SENDER", "PlantNet <orders@plantnet.example>"),
        "NOTIFICATION_WORKERS": _int_env("NOTIFICATION_WORKERS", 2, minimum=1),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    }
    if overrides:
        config.update(overrides)
    return config


def configure_logging(level_name: str):
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("plantnet").setLevel(level)
