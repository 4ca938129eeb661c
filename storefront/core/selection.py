import logging
import re
from collections.abc import Awaitable, Callable, Iterable

from storefront.core.errors import is_conflict_admin_error

log = logging.getLogger(__name__)

# "Gift Wrap (7e6e2f80-...)" -> el ID va entre paréntesis al final
_PICKER_ID = re.compile(r"\(([^()]+)\)\s*$")


def normalize_selected_product_ids(ids) -> list[str]:
    """Recorta, descarta vacíos / no-strings y deduplica conservando el primer orden."""
    if isinstance(ids, str) or not isinstance(ids, Iterable):
        return []
    seen = []
    for raw in ids:
        if not isinstance(raw, str):
            continue
        value = raw.strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def is_every_product_selected(all_ids, selected_ids) -> bool:
    """Para el checkbox "seleccionar todo": todos los IDs visibles están marcados."""
    everything = normalize_selected_product_ids(all_ids)
    if not everything:
        return False
    selected = set(normalize_selected_product_ids(selected_ids))
    return all(i in selected for i in everything)


def toggle_product_selection(selected_ids, product_id, checked: bool) -> list[str]:
    current = normalize_selected_product_ids(selected_ids)
    if not isinstance(product_id, str) or not product_id.strip():
        return current
    product_id = product_id.strip()
    if checked:
        return current if product_id in current else [*current, product_id]
    return [i for i in current if i != product_id]


def resolve_custom_option_ids(option_ids, picker_value) -> list[str]:
    """
    IDs de opciones personalizadas a asignar en bloque.
    Prioriza la selección múltiple explícita; si está vacía usa el texto del
    picker, que puede venir como "Titulo (id)" o solo el id.
    """
    explicit = normalize_selected_product_ids(option_ids)
    if explicit:
        return explicit
    raw = str(picker_value or "").strip()
    if not raw:
        return []
    m = _PICKER_ID.search(raw)
    if m and m.group(1).strip():
        return [m.group(1).strip()]
    return [raw]


def has_bulk_custom_option_payload(product_ids, option_ids, picker_value) -> bool:
    return bool(normalize_selected_product_ids(product_ids)) and bool(
        resolve_custom_option_ids(option_ids, picker_value)
    )


async def attach_custom_options_ignoring_conflicts(
    product_ids,
    option_ids,
    attach: Callable[[str, dict], Awaitable[object]],
    sort_order: int = 0,
) -> dict:
    """
    Asigna cada opción a cada producto, en orden. Un 409 (ya asignada) se
    cuenta como ignorado y se continúa; cualquier otro error se propaga.
    """
    products = normalize_selected_product_ids(product_ids)
    options = normalize_selected_product_ids(option_ids)
    attached = ignored = attempted = 0

    for product_id in products:
        for option_id in options:
            attempted += 1
            try:
                await attach(product_id, {"option_id": option_id, "sort_order": sort_order})
            except Exception as err:
                if not is_conflict_admin_error(err):
                    raise
                ignored += 1
                log.info(f"Opción {option_id} ya asignada a {product_id}; se ignora ({err})")
                continue
            attached += 1

    log.info(f"Asignación masiva: {attached} asignadas, {ignored} ignoradas, {attempted} intentos")
    return {"attached": attached, "ignored": ignored, "attempted": attempted}
