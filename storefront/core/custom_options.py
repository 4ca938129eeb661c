import json
import logging
import re
from collections.abc import Mapping

from storefront.utils.parsing import parse_float, parse_float_safe, parse_int_safe

log = logging.getLogger(__name__)

TEXT_TYPES = {"field", "area"}
SELECT_TYPES = {"dropdown", "radio", "checkbox", "multiple"}
DEFAULT_SWATCH_HEX = "#0072F5"
COLOR_BUTTONS = "color_buttons"

# Colores conocidos para cuando un valor no trae swatch_hex
COLOR_MAPPING = {
    "black": "#111827",
    "white": "#F9FAFB",
    "red": "#EF4444",
    "blue": "#3B82F6",
    "green": "#22C55E",
    "yellow": "#EAB308",
    "purple": "#A855F7",
    "pink": "#EC4899",
    "gray": "#9CA3AF",
    "grey": "#9CA3AF",
}

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _text(value) -> str:
    return str(value if value is not None else "").strip()


def _flag(value) -> bool:
    # Los formularios mandan "true"/"false" como texto
    return _text(value).lower() == "true"


def _price_type(value) -> str:
    return "percent" if _text(value).lower() == "percent" else "fixed"


# ----------------------------------------------------------------------
# GRUPO DE TIPO
# ----------------------------------------------------------------------
def type_group_from_type(option_type) -> str:
    normalized = _text(option_type).lower()
    if normalized in TEXT_TYPES:
        return "text"
    if normalized == "file":
        return "file"
    if normalized in SELECT_TYPES:
        return "select"
    return "date"


# ----------------------------------------------------------------------
# VALORES (values_json)
# ----------------------------------------------------------------------
def _parse_values(raw) -> list[dict]:
    """values_json malformado o que no es lista -> lista vacía (nunca falla)."""
    normalized = _text(raw)
    if not normalized:
        return []
    try:
        parsed = json.loads(normalized)
    # ValueError cubre JSONDecodeError y enteros por encima del límite de dígitos
    except (ValueError, RecursionError) as err:
        log.warning(f"values_json inválido, se ignoran los valores: {err}")
        return []
    if not isinstance(parsed, list):
        log.warning("values_json no es una lista, se ignoran los valores")
        return []

    values = []
    for row in parsed:
        row = row if isinstance(row, Mapping) else {}
        values.append({
            "title": _text(row.get("title")),
            "sku": _text(row.get("sku")) or None,
            "sort_order": parse_int_safe(row.get("sort_order")),
            "price_type": _price_type(row.get("price_type")),
            "price_value": parse_float_safe(row.get("price_value")),
            "is_default": bool(row.get("is_default")),
            "swatch_hex": _text(row.get("swatch_hex")) or None,
        })
    return values


def _apply_swatch_default(values: list[dict], display_mode: str) -> list[dict]:
    if display_mode != COLOR_BUTTONS:
        return values
    return [
        {**value, "swatch_hex": value.get("swatch_hex") or DEFAULT_SWATCH_HEX}
        for value in values
    ]


def build_custom_option_payload(form_input) -> dict:
    """
    Convierte la entrada del formulario admin (todo texto, valores en JSON)
    en el payload de la mutación de opciones personalizadas.

    - select: el precio vive en cada valor, price_type/price_value van en None.
    - resto: price_type es "fixed" salvo que venga explícitamente "percent".
    - display_mode color_buttons: todo valor sin swatch_hex recibe #0072F5.
    """
    form_input = form_input if isinstance(form_input, Mapping) else {}
    option_type = _text(form_input.get("type")).lower()
    type_group = type_group_from_type(option_type)
    display_mode = _text(form_input.get("display_mode")).lower() or "default"
    values = _apply_swatch_default(_parse_values(form_input.get("values_json")), display_mode)

    payload = {
        "code": _text(form_input.get("code")).lower(),
        "title": _text(form_input.get("title")),
        "type_group": type_group,
        "type": option_type,
        "required": _flag(form_input.get("required")),
        "is_active": _flag(form_input.get("is_active")),
        "sort_order": parse_int_safe(form_input.get("sort_order")),
        "display_mode": display_mode,
        "values": values,
    }

    if type_group == "select":
        payload["price_type"] = None
        payload["price_value"] = None
    else:
        payload["price_type"] = _price_type(form_input.get("price_type"))
        payload["price_value"] = parse_float_safe(form_input.get("price_value"))

    return payload


def validate_select_values(values) -> bool:
    """Al menos un valor, todos con título y precio finito >= 0."""
    if not isinstance(values, list) or not values:
        return False
    for row in values:
        row = row if isinstance(row, Mapping) else {}
        price = parse_float(row.get("price_value"))
        if not _text(row.get("title")) or price is None or price < 0:
            return False
    return True


# ----------------------------------------------------------------------
# SWATCHES DE COLOR
# ----------------------------------------------------------------------
def get_auto_swatch_color(label) -> str:
    if not label or not isinstance(label, str):
        return DEFAULT_SWATCH_HEX
    return COLOR_MAPPING.get(label.strip().lower(), DEFAULT_SWATCH_HEX)


def is_valid_hex_color(value) -> bool:
    return isinstance(value, str) and _HEX_COLOR.match(value) is not None


def get_swatch_color(swatch_hex, label) -> str:
    if is_valid_hex_color(swatch_hex):
        return swatch_hex
    return get_auto_swatch_color(label)
