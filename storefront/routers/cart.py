# storefront/routers/cart.py
from fastapi import APIRouter, HTTPException

from storefront.core.carts.models import Cart
from storefront.core.carts.reconcile import (
    optimistic_remove_item,
    optimistic_update_quantity,
    recalculate_totals,
)

router = APIRouter(prefix="/cart", tags=["Cart"])


def _load_cart(payload: dict) -> Cart:
    try:
        return Cart.from_dict(payload.get("cart"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _item_id(payload: dict) -> str:
    item_id = payload.get("item_id")
    if not isinstance(item_id, str) or not item_id:
        raise HTTPException(status_code=400, detail="Debes enviar item_id.")
    return item_id


@router.post("/totals")
def cart_totals(payload: dict):
    """Recalcula Totals a partir de Items."""
    return recalculate_totals(_load_cart(payload)).to_dict()


@router.post("/quantity")
def cart_quantity(payload: dict):
    """
    Vista optimista tras cambiar la cantidad de un item.
    La cantidad no se valida aquí (el backend sigue siendo la autoridad).
    """
    cart = _load_cart(payload)
    item_id = _item_id(payload)
    quantity = payload.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise HTTPException(status_code=400, detail="quantity debe ser un entero.")
    return optimistic_update_quantity(cart, item_id, quantity).to_dict()


@router.post("/remove")
def cart_remove(payload: dict):
    cart = _load_cart(payload)
    return optimistic_remove_item(cart, _item_id(payload)).to_dict()
