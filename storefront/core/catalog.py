import math
from dataclasses import dataclass
from datetime import datetime, timezone

from storefront.config import ADMIN_PRODUCTS_LIMIT
from storefront.utils.parsing import parse_int

DEFAULT_ADMIN_PRODUCTS_PAGE = 1
DEFAULT_ADMIN_PRODUCTS_LIMIT = ADMIN_PRODUCTS_LIMIT
LOW_STOCK_THRESHOLD = 5

SORT_VALUES = ("newest", "oldest", "name_asc", "name_desc", "price_asc", "price_desc")
STOCK_VALUES = ("all", "in_stock", "out_of_stock", "low_stock")


# ----------------------------------------------------------------------
# 1️⃣ PARÁMETROS DE BÚSQUEDA DEL LISTADO ADMIN
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class AdminProductsState:
    page: int = DEFAULT_ADMIN_PRODUCTS_PAGE
    limit: int = DEFAULT_ADMIN_PRODUCTS_LIMIT
    category: str = ""
    sort: str = "newest"
    stock: str = "all"

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "category": self.category,
            "sort": self.sort,
            "stock": self.stock,
        }


def first_search_param(value) -> str | None:
    """Los query params pueden llegar repetidos (lista): se usa el primero."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value if isinstance(value, str) else None


def parse_positive_int_param(value, fallback: int) -> int:
    parsed = parse_int(first_search_param(value))
    if parsed is None or parsed <= 0:
        return fallback
    return parsed


def parse_admin_products_search_params(params) -> AdminProductsState:
    params = params if isinstance(params, dict) else {}
    category = first_search_param(params.get("category")) or ""
    sort = first_search_param(params.get("sort")) or "newest"
    stock = first_search_param(params.get("stock")) or "all"
    return AdminProductsState(
        page=parse_positive_int_param(params.get("page"), DEFAULT_ADMIN_PRODUCTS_PAGE),
        limit=parse_positive_int_param(params.get("limit"), DEFAULT_ADMIN_PRODUCTS_LIMIT),
        category=category.strip(),
        sort=sort if sort in SORT_VALUES else "newest",
        stock=stock if stock in STOCK_VALUES else "all",
    )


# ----------------------------------------------------------------------
# 2️⃣ DATOS DERIVADOS DE UN PRODUCTO (nunca se guardan)
# ----------------------------------------------------------------------
def _number(value, default: float | None = 0.0) -> float | None:
    """Coerción al estilo de la API: None -> default, texto numérico -> float."""
    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return parsed if math.isfinite(parsed) else None


def _variants(product) -> list:
    variants = product.get("variants") if isinstance(product, dict) else None
    return variants if isinstance(variants, list) else []


def total_stock(product) -> float:
    """Suma de stock de las variantes; stock negativo cuenta como 0."""
    total = 0.0
    for variant in _variants(product):
        stock = _number(variant.get("stock") if isinstance(variant, dict) else None)
        if stock is None:
            continue
        total += max(0.0, stock)
    return total


def stock_state(product) -> str:
    stock = total_stock(product)
    if stock <= 0:
        return "out_of_stock"
    if stock <= LOW_STOCK_THRESHOLD:
        return "low_stock"
    return "in_stock"


def _selected_variant(product) -> dict | None:
    variants = _variants(product)
    if not variants:
        return None
    for variant in variants:
        stock = _number(variant.get("stock") if isinstance(variant, dict) else None)
        if stock is not None and stock > 0:
            return variant
    first = variants[0]
    return first if isinstance(first, dict) else {}


def selected_price(product) -> float:
    """Precio de la variante con stock (o la primera); sin precio -> infinito."""
    variant = _selected_variant(product)
    if variant is None:
        return math.inf
    price = _number(variant.get("priceCents"), default=math.inf)
    return math.inf if price is None else price


def display_price(product) -> float | None:
    """Precio a mostrar: prioriza compareAtPriceCents y si no, priceCents."""
    variant = _selected_variant(product)
    if variant is None:
        return None
    compare = _number(variant.get("compareAtPriceCents"), default=None)
    if compare is not None and compare > 0:
        return compare
    return _number(variant.get("priceCents"), default=None)


def created_timestamp(product) -> float:
    """createdAt en milisegundos; si no se puede interpretar cuenta como 0 (el más viejo)."""
    raw = product.get("createdAt") if isinstance(product, dict) else None
    if not isinstance(raw, str) or not raw.strip():
        return 0.0
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp() * 1000


def _title(product) -> str:
    title = product.get("title") if isinstance(product, dict) else None
    return str(title if title is not None else "")


# ----------------------------------------------------------------------
# 3️⃣ FILTRO + ORDEN + PAGINACIÓN
# ----------------------------------------------------------------------
def _keep(product, stock: str) -> bool:
    total = total_stock(product)
    if stock == "in_stock":
        return total > 0
    if stock == "out_of_stock":
        return total <= 0
    if stock == "low_stock":
        return 0 < total <= LOW_STOCK_THRESHOLD
    return True


def apply_admin_products_state(products, state) -> list:
    """
    Filtra por estado de stock y ordena (orden estable). No modifica la lista
    original ni sus elementos. `state` puede ser AdminProductsState o dict.
    """
    if isinstance(state, AdminProductsState):
        sort, stock = state.sort, state.stock
    else:
        state = state if isinstance(state, dict) else {}
        sort, stock = state.get("sort") or "newest", state.get("stock") or "all"

    items = list(products) if isinstance(products, (list, tuple)) else []
    filtered = [p for p in items if _keep(p, stock)]

    if sort in ("name_asc", "name_desc"):
        key = lambda p: (_title(p).casefold(), _title(p))  # noqa: E731
        return sorted(filtered, key=key, reverse=sort == "name_desc")
    if sort in ("price_asc", "price_desc"):
        return sorted(filtered, key=selected_price, reverse=sort == "price_desc")
    return sorted(filtered, key=created_timestamp, reverse=sort != "oldest")


def paginate_products(products, page: int = DEFAULT_ADMIN_PRODUCTS_PAGE, limit: int = DEFAULT_ADMIN_PRODUCTS_LIMIT) -> dict:
    """Misma forma que la respuesta de listado de productos: items/total/page/limit."""
    items = list(products) if isinstance(products, (list, tuple)) else []
    page = page if isinstance(page, int) and page > 0 else DEFAULT_ADMIN_PRODUCTS_PAGE
    limit = limit if isinstance(limit, int) and limit > 0 else DEFAULT_ADMIN_PRODUCTS_LIMIT
    start = (page - 1) * limit
    return {
        "items": items[start:start + limit],
        "total": len(items),
        "page": page,
        "limit": limit,
    }


def select_product_grid_image(images) -> str | None:
    if not isinstance(images, list) or not images:
        return None
    explicit = next(
        (img for img in images if isinstance(img, dict) and img.get("isDefault") is True),
        None,
    )
    if explicit and explicit.get("url"):
        return explicit["url"]
    first = images[0]
    return first.get("url") if isinstance(first, dict) else None
