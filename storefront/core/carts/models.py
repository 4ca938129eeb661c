from collections.abc import Mapping
from dataclasses import dataclass, field
import logging

from storefront.config import DEFAULT_CURRENCY

log = logging.getLogger(__name__)

# Claves del snapshot que devuelve la API (PascalCase, tal como las serializa el backend)
ITEM_KEYS = ("ID", "ProductVariantID", "UnitPriceCents", "Currency", "Quantity")
TOTALS_KEYS = ("ItemCount", "SubtotalCents", "Currency")
CART_KEYS = ("ID", "Items", "Totals")


def _int_field(data: Mapping, key: str, default: int = 0) -> int:
    raw = data.get(key, default)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    # Solo enteros: 12.7 centavos o "3" no se truncan ni se convierten en silencio
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    raise ValueError(f"Campo {key} inválido: {raw!r}")


def _extra(data: Mapping, known: tuple) -> dict:
    return {k: v for k, v in data.items() if k not in known}


@dataclass(frozen=True)
class CartItem:
    id: str
    product_variant_id: str
    unit_price_cents: int
    quantity: int
    currency: str = DEFAULT_CURRENCY
    extra: dict = field(default_factory=dict)

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("ID de item inválido")

    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity

    @classmethod
    def from_dict(cls, data: Mapping) -> "CartItem":
        if not isinstance(data, Mapping):
            raise ValueError("Item de carrito inválido")
        return cls(
            id=str(data.get("ID") or ""),
            product_variant_id=str(data.get("ProductVariantID") or ""),
            unit_price_cents=_int_field(data, "UnitPriceCents"),
            quantity=_int_field(data, "Quantity"),
            currency=str(data.get("Currency") or DEFAULT_CURRENCY),
            extra=_extra(data, ITEM_KEYS),
        )

    def to_dict(self) -> dict:
        return {
            "ID": self.id,
            **self.extra,
            "ProductVariantID": self.product_variant_id,
            "UnitPriceCents": self.unit_price_cents,
            "Currency": self.currency,
            "Quantity": self.quantity,
        }


@dataclass(frozen=True)
class CartTotals:
    item_count: int = 0
    subtotal_cents: int = 0
    currency: str = DEFAULT_CURRENCY
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping | None, currency: str = DEFAULT_CURRENCY) -> "CartTotals":
        data = data if isinstance(data, Mapping) else {}
        return cls(
            item_count=_int_field(data, "ItemCount"),
            subtotal_cents=_int_field(data, "SubtotalCents"),
            currency=str(data.get("Currency") or currency),
            extra=_extra(data, TOTALS_KEYS),
        )

    def to_dict(self) -> dict:
        return {
            **self.extra,
            "SubtotalCents": self.subtotal_cents,
            "Currency": self.currency,
            "ItemCount": self.item_count,
        }


@dataclass(frozen=True)
class Cart:
    """
    Snapshot del carrito. Totals es siempre función de Items:
    nunca se modifica por separado (ver core.carts.reconcile).
    """
    id: str
    items: tuple[CartItem, ...] = ()
    totals: CartTotals = field(default_factory=CartTotals)
    extra: dict = field(default_factory=dict)

    def find(self, item_id: str) -> CartItem | None:
        return next((i for i in self.items if i.id == item_id), None)

    @classmethod
    def from_dict(cls, data) -> "Cart":
        """Construye el carrito desde la última respuesta del servidor."""
        if not isinstance(data, Mapping):
            raise ValueError("Snapshot de carrito inválido: se esperaba un objeto")
        if "Items" not in data:
            raise ValueError("Snapshot de carrito inválido: falta Items")
        # El backend serializa un carrito vacío como Items: null
        raw_items = data["Items"] or []
        if not isinstance(raw_items, list):
            raise ValueError("Snapshot de carrito inválido: Items debe ser una lista")
        items = tuple(CartItem.from_dict(i) for i in raw_items)
        currency = items[0].currency if items else DEFAULT_CURRENCY
        return cls(
            id=str(data.get("ID") or ""),
            items=items,
            totals=CartTotals.from_dict(data.get("Totals"), currency=currency),
            extra=_extra(data, CART_KEYS),
        )

    def to_dict(self) -> dict:
        return {
            "ID": self.id,
            **self.extra,
            "Items": [i.to_dict() for i in self.items],
            "Totals": self.totals.to_dict(),
        }
