import asyncio

import pytest

from storefront.core.carts.reconcile import optimistic_update_quantity
from storefront.core.carts.service import CONFIRMED, PENDING, CartService
from storefront.core.errors import AdminRequestError


def test_service_without_cart_ignores_mutations():
    service = CartService()
    assert service.update_quantity("item-1", 3) is None
    assert service.remove_item("item-1") is None
    assert service.pending == frozenset()


def test_mutations_layer_on_latest_optimistic_state(snapshot):
    service = CartService(snapshot)
    service.update_quantity("item-2", 3)
    service.update_quantity("item-1", 2)
    cart = service.cart
    assert cart.totals.item_count == 5
    assert cart.totals.subtotal_cents == 2 * 1200 + 3 * 2500
    assert service.status("item-1") == PENDING
    assert service.status("item-2") == PENDING


def test_confirm_takes_server_snapshot(snapshot, cart):
    service = CartService(snapshot)
    service.update_quantity("item-2", 3)
    server = optimistic_update_quantity(cart, "item-2", 4)
    confirmed = service.confirm("item-2", server)
    assert confirmed is server
    assert service.cart.totals.item_count == 5
    assert service.status("item-2") == CONFIRMED
    assert not service.needs_refresh


def test_confirm_only_clears_its_own_item(snapshot):
    service = CartService(snapshot)
    service.update_quantity("item-1", 2)
    service.remove_item("item-2")
    service.confirm("item-1", snapshot)
    assert service.pending == frozenset({"item-2"})


def test_reject_requires_refresh_and_replace_clears_everything(snapshot):
    service = CartService(snapshot)
    service.update_quantity("item-1", 5)
    service.remove_item("item-2")
    service.reject("item-1", AdminRequestError("Failed to update item: 500", 500))
    assert service.needs_refresh
    assert service.last_error == "Failed to update item: 500"
    assert service.pending == frozenset({"item-2"})

    service.replace(snapshot)
    assert not service.needs_refresh
    assert service.pending == frozenset()
    assert service.cart.totals.subtotal_cents == 6200


def test_version_increases_on_every_change(snapshot):
    service = CartService(snapshot)
    service.update_quantity("item-1", 2)
    service.remove_item("item-1")
    service.replace(snapshot)
    assert service.version == 3
    assert service.to_summary()["version"] == 3


def test_sync_quantity_confirms_on_success(snapshot, cart):
    service = CartService(snapshot)
    calls = []

    async def send(item_id, quantity):
        calls.append((item_id, quantity))
        assert service.status(item_id) == PENDING
        assert service.cart.find(item_id).quantity == quantity
        return optimistic_update_quantity(cart, item_id, quantity).to_dict()

    async def refetch():
        raise AssertionError("refetch must not run on success")

    result = asyncio.run(service.sync_quantity("item-2", 3, send, refetch))
    assert calls == [("item-2", 3)]
    assert result.totals.subtotal_cents == 8700
    assert service.pending == frozenset()


def test_sync_remove_refetches_on_failure(snapshot):
    service = CartService(snapshot)

    async def send(item_id):
        raise AdminRequestError("Failed to remove item: 500", 500)

    async def refetch():
        return snapshot

    result = asyncio.run(service.sync_remove("item-1", send, refetch))
    assert result.find("item-1") is not None
    assert result.totals.item_count == 3
    assert service.last_error == "Failed to remove item: 500"
    assert not service.needs_refresh


def test_sync_propagates_refetch_failure(snapshot):
    service = CartService(snapshot)

    async def send(item_id, quantity):
        raise AdminRequestError("Failed to update item: 503", 503)

    async def refetch():
        raise ConnectionError("offline")

    with pytest.raises(ConnectionError):
        asyncio.run(service.sync_quantity("item-1", 4, send, refetch))
    assert service.needs_refresh
    assert service.cart.find("item-1").quantity == 4
