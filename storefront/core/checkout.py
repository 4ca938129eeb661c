import logging
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from storefront.core.catalog import first_search_param

log = logging.getLogger(__name__)

INVALID_CHECKOUT_MESSAGE = "Invalid checkout response payload"


class InvalidCheckoutResponse(ValueError):
    """La respuesta de checkout no trae order_id, checkout_url y status válidos."""

    def __init__(self, message: str = INVALID_CHECKOUT_MESSAGE):
        super().__init__(message)


class CheckoutResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    order_id: StrictStr = Field(min_length=1)
    checkout_url: StrictStr = Field(min_length=1)
    status: StrictStr = Field(min_length=1)


def parse_checkout_response(raw) -> CheckoutResult:
    """
    Valida la respuesta de checkout. Nunca devuelve un resultado parcial:
    sin sesión de pago completa no se redirige al usuario.
    """
    if not isinstance(raw, Mapping):
        log.error(f"Respuesta de checkout no es un objeto: {type(raw).__name__}")
        raise InvalidCheckoutResponse()
    try:
        return CheckoutResult.model_validate(dict(raw))
    except ValidationError as err:
        fields = sorted({str(e["loc"][0]) for e in err.errors() if e.get("loc")})
        log.error(f"Respuesta de checkout inválida, campos: {', '.join(fields)}")
        raise InvalidCheckoutResponse() from err


def order_id_from_query(value) -> str | None:
    """order_id de la página de éxito (?order_id=...), que puede venir repetido."""
    order_id = (first_search_param(value) or "").strip()
    return order_id or None
