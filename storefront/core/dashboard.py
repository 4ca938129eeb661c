import copy
from collections.abc import Mapping

from storefront.config import ADMIN_DASHBOARD_MOCK
from storefront.core.errors import is_unauthorized_admin_error
from storefront.utils.parsing import is_number, parse_float, parse_int

METRIC_KEYS = ("total_orders", "pending_payment", "paid", "cancelled")
RECENT_ORDER_TEXT_KEYS = ("id", "number", "status", "currency", "created_at")
MOCK_OFF_VALUES = {"false", "0", "off", "no"}

UNAUTHORIZED_MESSAGE = "Unauthorized. Check ADMIN_USER and ADMIN_PASS server credentials."
GENERIC_ERROR_MESSAGE = "Failed to load dashboard metrics. Please retry."

# Datos de demostración para el panel cuando no hay backend de métricas
ADMIN_DASHBOARD_MOCK_DATA = {
    "metrics": {
        "total_orders": 1428,
        "pending_payment": 37,
        "paid": 1332,
        "cancelled": 59,
    },
    "recent_orders": [
        {
            "id": "ord_01jz85r9gg0f7",
            "number": "ORD-2026-1024",
            "status": "paid",
            "total_cents": 18990,
            "currency": "usd",
            "created_at": "2026-02-17T17:22:00Z",
        },
        {
            "id": "ord_01jz84vq8j5t2",
            "number": "ORD-2026-1023",
            "status": "pending_payment",
            "total_cents": 7999,
            "currency": "usd",
            "created_at": "2026-02-17T16:59:00Z",
        },
    ],
}


def empty_dashboard() -> dict:
    return {"metrics": {k: 0 for k in METRIC_KEYS}, "recent_orders": []}


def mock_dashboard() -> dict:
    return copy.deepcopy(ADMIN_DASHBOARD_MOCK_DATA)


def _non_negative_int(value) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < 0:
        return 0
    return parsed


def _is_recent_order(value) -> bool:
    if not isinstance(value, Mapping):
        return False
    if not all(isinstance(value.get(k), str) for k in RECENT_ORDER_TEXT_KEYS):
        return False
    total = value.get("total_cents")
    return is_number(total) or (isinstance(total, str) and parse_float(total) is not None)


def normalize_dashboard_data(payload) -> dict:
    """Sanea la respuesta del dashboard: métricas >= 0 y solo órdenes bien formadas."""
    source = payload if isinstance(payload, Mapping) else {}
    metrics = source.get("metrics") if isinstance(source.get("metrics"), Mapping) else {}
    recent = source.get("recent_orders") if isinstance(source.get("recent_orders"), list) else []
    return {
        "metrics": {k: _non_negative_int(metrics.get(k)) for k in METRIC_KEYS},
        "recent_orders": [dict(o) for o in recent if _is_recent_order(o)],
    }


def resolve_dashboard_error_message(error) -> str:
    if is_unauthorized_admin_error(error):
        return UNAUTHORIZED_MESSAGE
    return GENERIC_ERROR_MESSAGE


def should_use_mock_dashboard(raw=ADMIN_DASHBOARD_MOCK) -> bool:
    """Activado por defecto; solo false/0/off/no lo apagan."""
    return str(raw or "").strip().lower() not in MOCK_OFF_VALUES
