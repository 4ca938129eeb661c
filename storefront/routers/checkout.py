# storefront/routers/checkout.py
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from storefront.core.checkout import InvalidCheckoutResponse, parse_checkout_response

router = APIRouter(prefix="/checkout", tags=["Checkout"])


@router.post("/validate")
def validate_checkout(payload: Any = Body(...)):
    """
    Valida la respuesta del backend de checkout antes de redirigir al usuario.
    Sin order_id, checkout_url y status no hay sesión de pago: 502.
    """
    try:
        result = parse_checkout_response(payload)
    except InvalidCheckoutResponse as e:
        raise HTTPException(status_code=502, detail=str(e))
    return result.model_dump()
