from dataclasses import replace

from storefront.core.carts.models import Cart


def recalculate_totals(cart: Cart) -> Cart:
    """Recalcula ItemCount y SubtotalCents a partir de Items (Items no se toca)."""
    item_count = sum(i.quantity for i in cart.items)
    subtotal = sum(i.line_total_cents() for i in cart.items)
    totals = replace(cart.totals, item_count=item_count, subtotal_cents=subtotal)
    return replace(cart, totals=totals)


def optimistic_update_quantity(cart: Cart, item_id: str, quantity: int) -> Cart:
    """
    Cambia la cantidad del item indicado y recalcula totales.
    No valida la cantidad: eso le corresponde al servidor. Si el ID no existe
    el carrito queda igual (salvo totales recalculados).
    """
    items = tuple(
        replace(i, quantity=quantity) if i.id == item_id else i
        for i in cart.items
    )
    return recalculate_totals(replace(cart, items=items))


def optimistic_remove_item(cart: Cart, item_id: str) -> Cart:
    items = tuple(i for i in cart.items if i.id != item_id)
    return recalculate_totals(replace(cart, items=items))
