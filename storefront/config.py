# storefront/config.py
import logging
import os

# === CONFIGURACIÓN: variables de entorno ===
DEFAULT_CURRENCY = os.getenv("STOREFRONT_CURRENCY", "EUR").strip().upper() or "EUR"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
# Un nivel desconocido (p. ej. VERBOSE) haría fallar basicConfig al arrancar
if LOG_LEVEL not in logging.getLevelNamesMapping():
    LOG_LEVEL = "INFO"

# Valor crudo; lo interpreta core.dashboard.should_use_mock_dashboard
ADMIN_DASHBOARD_MOCK = os.getenv("ADMIN_DASHBOARD_MOCK")


def _get_int(key: str, default: int) -> int:
    raw = os.getenv(key, "")
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


ADMIN_PRODUCTS_LIMIT = _get_int("ADMIN_PRODUCTS_LIMIT", 20)
