# storefront/routers/admin.py
from typing import Any

from fastapi import APIRouter, Body

from storefront.core.catalog import (
    apply_admin_products_state,
    display_price,
    paginate_products,
    parse_admin_products_search_params,
    select_product_grid_image,
    stock_state,
    total_stock,
)
from storefront.core.custom_options import build_custom_option_payload, validate_select_values
from storefront.core.dashboard import mock_dashboard, normalize_dashboard_data, should_use_mock_dashboard
from storefront.core.pricing import calculate_discount_preview, format_money, parse_discount_draft
from storefront.core.selection import (
    is_every_product_selected,
    normalize_selected_product_ids,
    toggle_product_selection,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/products/view")
def products_view(payload: dict):
    """
    Listado admin derivado: filtro de stock, orden y paginación.
    Cada fila se devuelve con sus datos derivados (stock, estado, precio, imagen).
    """
    state = parse_admin_products_search_params(payload.get("params"))
    products = payload.get("products")
    ordered = apply_admin_products_state(products if isinstance(products, list) else [], state)
    page = paginate_products(ordered, state.page, state.limit)
    page["items"] = [
        {
            "product": p,
            "total_stock": total_stock(p),
            "stock_state": stock_state(p),
            "display_price_cents": display_price(p),
            "image_url": select_product_grid_image(p.get("images") if isinstance(p, dict) else None),
        }
        for p in page["items"]
    ]
    page["state"] = state.to_dict()
    return page


@router.post("/discounts/preview")
def discount_preview(payload: dict):
    draft = parse_discount_draft(payload.get("mode"), payload.get("value"))
    base = payload.get("base_price_cents")
    preview = calculate_discount_preview(base, draft.mode, draft.value)
    currency = payload.get("currency")
    message = "Select a product with a valid base price and discount value to preview."
    if preview.valid:
        message = f"{format_money(base, currency)} -> {format_money(preview.discounted_price_cents, currency)}"
    return {"draft": draft.to_dict(), "preview": preview.to_dict(), "message": message}


@router.post("/selection/toggle")
def selection_toggle(payload: dict):
    selected = toggle_product_selection(
        payload.get("selected"), payload.get("id"), bool(payload.get("checked"))
    )
    all_ids = normalize_selected_product_ids(payload.get("all"))
    return {"selected": selected, "all_selected": is_every_product_selected(all_ids, selected)}


@router.post("/custom-options/payload")
def custom_option_payload(payload: dict):
    option = build_custom_option_payload(payload)
    values_valid = option["type_group"] != "select" or validate_select_values(option["values"])
    return {"payload": option, "values_valid": values_valid}


@router.post("/dashboard")
def dashboard(payload: Any = Body(None)):
    """Normaliza las métricas del dashboard; sin payload usa los datos demo si están activos."""
    if payload is None and should_use_mock_dashboard():
        return mock_dashboard()
    return normalize_dashboard_data(payload)
