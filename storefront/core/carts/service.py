from collections.abc import Awaitable, Callable, Mapping
import logging

from storefront.core.carts.models import Cart
from storefront.core.carts.reconcile import optimistic_remove_item, optimistic_update_quantity

log = logging.getLogger(__name__)

CONFIRMED = "confirmed"
PENDING = "pending"

Snapshot = Cart | Mapping


def _as_cart(snapshot: Snapshot) -> Cart:
    return snapshot if isinstance(snapshot, Cart) else Cart.from_dict(snapshot)


class CartService:
    """
    Dueño único del carrito mostrado en la UI.

    Aplica los cambios optimistas sobre el último estado (confirmado u optimista),
    marca los items en vuelo como "pending" y resuelve con una sola regla:
    la última respuesta del servidor gana; si una llamada falla se descarta el
    carrito optimista y hay que recargar el snapshot completo.
    """

    def __init__(self, cart: Snapshot | None = None):
        self._cart = _as_cart(cart) if cart is not None else None
        self._pending: set[str] = set()
        self.needs_refresh = False
        self.last_error: str | None = None
        self.version = 0

    @property
    def cart(self) -> Cart | None:
        return self._cart

    @property
    def pending(self) -> frozenset[str]:
        return frozenset(self._pending)

    def status(self, item_id: str) -> str:
        return PENDING if item_id in self._pending else CONFIRMED

    def _set(self, cart: Cart | None) -> Cart | None:
        self._cart = cart
        self.version += 1
        return cart

    def replace(self, snapshot: Snapshot) -> Cart:
        """Snapshot autoritativo (refresh): reemplaza todo, sin mezclar."""
        cart = _as_cart(snapshot)
        dropped = len(self._pending)
        self._pending.clear()
        self.needs_refresh = False
        self._set(cart)
        log.info(f"Carrito {cart.id} reemplazado. Versión {self.version} (pendientes descartados: {dropped})")
        return cart

    def update_quantity(self, item_id: str, quantity: int) -> Cart | None:
        if self._cart is None:
            log.debug(f"update_quantity({item_id}) sin carrito cargado; se ignora")
            return None
        self._pending.add(item_id)
        log.debug(f"Item {item_id} -> cantidad {quantity} (optimista)")
        return self._set(optimistic_update_quantity(self._cart, item_id, quantity))

    def remove_item(self, item_id: str) -> Cart | None:
        if self._cart is None:
            log.debug(f"remove_item({item_id}) sin carrito cargado; se ignora")
            return None
        self._pending.add(item_id)
        log.debug(f"Item {item_id} eliminado (optimista)")
        return self._set(optimistic_remove_item(self._cart, item_id))

    def confirm(self, item_id: str, snapshot: Snapshot) -> Cart:
        """El servidor respondió: su snapshot sustituye la vista local."""
        cart = _as_cart(snapshot)
        self._pending.discard(item_id)
        self._set(cart)
        log.info(f"Item {item_id} confirmado en carrito {cart.id}. Versión {self.version}")
        return cart

    def reject(self, item_id: str, error: BaseException | str) -> None:
        """La llamada falló: no hay rollback parcial, se exige recargar."""
        self._pending.discard(item_id)
        self.last_error = str(error) or error.__class__.__name__
        self.needs_refresh = True
        log.warning(f"Cambio sobre item {item_id} rechazado ({self.last_error}). Se recargará el carrito.")

    async def sync_quantity(
        self,
        item_id: str,
        quantity: int,
        send: Callable[[str, int], Awaitable[Snapshot]],
        refetch: Callable[[], Awaitable[Snapshot]],
    ) -> Cart | None:
        self.update_quantity(item_id, quantity)
        return await self._settle(item_id, lambda: send(item_id, quantity), refetch)

    async def sync_remove(
        self,
        item_id: str,
        send: Callable[[str], Awaitable[Snapshot]],
        refetch: Callable[[], Awaitable[Snapshot]],
    ) -> Cart | None:
        self.remove_item(item_id)
        return await self._settle(item_id, lambda: send(item_id), refetch)

    async def _settle(self, item_id, call, refetch) -> Cart | None:
        try:
            snapshot = await call()
        except Exception as err:
            self.reject(item_id, err)
            # Si el refetch también falla, el error sube y needs_refresh queda activo
            return self.replace(await refetch())
        return self.confirm(item_id, snapshot)

    def to_summary(self) -> dict:
        return {
            "cart": self._cart.to_dict() if self._cart else None,
            "pending": sorted(self._pending),
            "needs_refresh": self.needs_refresh,
            "last_error": self.last_error,
            "version": self.version,
        }
