import asyncio

import pytest

from storefront.core.errors import AdminRequestError
from storefront.core.selection import (
    attach_custom_options_ignoring_conflicts,
    has_bulk_custom_option_payload,
    is_every_product_selected,
    normalize_selected_product_ids,
    resolve_custom_option_ids,
    toggle_product_selection,
)

UUID = "7e6e2f80-1306-4d48-b740-15068f2e7f77"


def test_normalize_trims_and_deduplicates():
    assert normalize_selected_product_ids([" a ", "b", "a", "", "   "]) == ["a", "b"]
    assert normalize_selected_product_ids(["a", None, 3, "b"]) == ["a", "b"]
    assert normalize_selected_product_ids(None) == []
    assert normalize_selected_product_ids("abc") == []


def test_toggle_adds_and_removes():
    assert toggle_product_selection(["a"], "b", True) == ["a", "b"]
    assert toggle_product_selection(["a", "b"], "a", False) == ["b"]


def test_toggle_select_is_idempotent():
    for selected in ([], ["a"], ["b", "a", "b"], [" x ", "y"]):
        for pid in ("a", "x", "z"):
            once = toggle_product_selection(selected, pid, True)
            assert toggle_product_selection(once, pid, True) == once


def test_toggle_with_empty_id_returns_normalized_copy():
    selected = ["a", " a ", "b"]
    result = toggle_product_selection(selected, "  ", True)
    assert result == ["a", "b"]
    assert result is not selected
    assert toggle_product_selection(selected, None, False) == ["a", "b"]


def test_is_every_product_selected():
    assert is_every_product_selected(["p1", "p2"], ["p2", "p1", "p1"]) is True
    assert is_every_product_selected(["p1", "p2"], ["p1"]) is False
    assert is_every_product_selected([], ["p1"]) is False
    assert is_every_product_selected(["  "], ["p1"]) is False


def test_resolve_custom_option_ids_prefers_explicit_ids():
    assert resolve_custom_option_ids([" opt-1 ", "opt-1", "opt-2"], f"ignored ({UUID})") == ["opt-1", "opt-2"]


def test_resolve_custom_option_ids_parses_picker_value():
    assert resolve_custom_option_ids([], f"Gift Wrap ({UUID})") == [UUID]
    assert resolve_custom_option_ids([], "opt-direct-id") == ["opt-direct-id"]
    assert resolve_custom_option_ids([], "   ") == []


def test_has_bulk_custom_option_payload():
    assert has_bulk_custom_option_payload([], ["opt-1"], "") is False
    assert has_bulk_custom_option_payload(["prod-1"], [], "") is False
    assert has_bulk_custom_option_payload(["prod-1"], [], f"Gift Wrap ({UUID})") is True


def test_attach_ignores_conflicts_and_continues():
    calls = []

    async def attach(product_id, payload):
        calls.append((product_id, payload["option_id"], payload["sort_order"]))
        if product_id == "prod-1" and payload["option_id"] == "opt-b":
            raise AdminRequestError("Admin custom option assignment request failed: 409 (conflict)")

    result = asyncio.run(
        attach_custom_options_ignoring_conflicts(
            ["prod-1", "prod-1", "prod-2"], ["opt-a", "opt-b", "opt-a"], attach, sort_order=7
        )
    )

    assert calls == [
        ("prod-1", "opt-a", 7),
        ("prod-1", "opt-b", 7),
        ("prod-2", "opt-a", 7),
        ("prod-2", "opt-b", 7),
    ]
    assert result == {"attached": 3, "ignored": 1, "attempted": 4}


def test_attach_raises_other_errors():
    async def attach(product_id, payload):
        raise AdminRequestError("Admin custom option assignment request failed: 500")

    with pytest.raises(AdminRequestError, match="500"):
        asyncio.run(attach_custom_options_ignoring_conflicts(["prod-1"], ["opt-a"], attach))
