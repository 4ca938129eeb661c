import pytest

from storefront.core.carts.models import Cart


def cart_snapshot() -> dict:
    return {
        "ID": "cart-1",
        "Items": [
            {
                "ID": "item-1",
                "CartID": "cart-1",
                "ProductVariantID": "variant-1",
                "UnitPriceCents": 1200,
                "Currency": "EUR",
                "Quantity": 1,
            },
            {
                "ID": "item-2",
                "CartID": "cart-1",
                "ProductVariantID": "variant-2",
                "UnitPriceCents": 2500,
                "Currency": "EUR",
                "Quantity": 2,
            },
        ],
        "Totals": {"SubtotalCents": 6200, "Currency": "EUR", "ItemCount": 3},
    }


@pytest.fixture
def snapshot() -> dict:
    return cart_snapshot()


@pytest.fixture
def cart() -> Cart:
    return Cart.from_dict(cart_snapshot())


@pytest.fixture
def admin_products() -> list[dict]:
    return [
        {"title": "A", "createdAt": "2026-01-01T00:00:00Z", "variants": [{"stock": 1, "priceCents": 900}]},
        {"title": "B", "createdAt": "2026-01-02T00:00:00Z", "variants": [{"stock": 6, "priceCents": 700}]},
        {"title": "C", "createdAt": "2026-01-03T00:00:00Z", "variants": [{"stock": 2, "priceCents": 300}]},
    ]
