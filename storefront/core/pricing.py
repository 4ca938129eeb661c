from dataclasses import dataclass

from storefront.config import DEFAULT_CURRENCY
from storefront.utils.parsing import is_number, parse_float, round_half_up

DISCOUNT_MODES = ("percent", "price")


@dataclass(frozen=True)
class DiscountDraft:
    mode: str
    value: float

    def to_dict(self) -> dict:
        return {"mode": self.mode, "value": self.value}


@dataclass(frozen=True)
class DiscountPreview:
    valid: bool
    discounted_price_cents: int | None = None
    savings_cents: int | None = None
    percent_off: float | None = None

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "discountedPriceCents": self.discounted_price_cents,
            "savingsCents": self.savings_cents,
            "percentOff": self.percent_off,
        }


INVALID_PREVIEW = DiscountPreview(valid=False)


def parse_discount_draft(mode, raw_value) -> DiscountDraft:
    """
    Normaliza lo que el admin escribe en el formulario de descuento masivo.
    Nunca falla: modo desconocido -> "percent", valor no numérico -> 0.
    """
    normalized_mode = str(mode if mode is not None else "").strip().lower()
    if normalized_mode not in DISCOUNT_MODES:
        normalized_mode = "percent"
    value = parse_float(raw_value)
    return DiscountDraft(mode=normalized_mode, value=0 if value is None else value)


def calculate_discount_preview(base_price_cents, mode, value) -> DiscountPreview:
    """
    Vista previa del precio con descuento, en unidades menores (centavos).

    - mode="price": el valor es el precio final deseado.
    - mode="percent": el valor es el porcentaje a descontar, en (0, 100).

    El resultado solo es válido si el precio final queda >= 0 y estrictamente
    por debajo del precio base. Entradas inválidas devuelven valid=False.
    """
    if not is_number(base_price_cents) or base_price_cents <= 0:
        return INVALID_PREVIEW
    if not is_number(value):
        return INVALID_PREVIEW

    if mode == "price":
        discounted = int(round_half_up(value))
    elif mode == "percent":
        if value <= 0 or value >= 100:
            return INVALID_PREVIEW
        discounted = int(round_half_up(base_price_cents * (1 - value / 100)))
    else:
        return INVALID_PREVIEW

    if discounted < 0 or discounted >= base_price_cents:
        return INVALID_PREVIEW

    savings = int(round_half_up(base_price_cents - discounted))
    percent_off = round_half_up(savings / base_price_cents * 100, 2)
    return DiscountPreview(
        valid=True,
        discounted_price_cents=discounted,
        savings_cents=savings,
        percent_off=percent_off,
    )


def format_money(amount_minor, currency: str = DEFAULT_CURRENCY) -> str:
    amount = (amount_minor if is_number(amount_minor) else 0) / 100
    return f"{amount:,.2f} {(currency or DEFAULT_CURRENCY).upper()}"
