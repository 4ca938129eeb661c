import re

from fastapi import HTTPException


class AdminRequestError(Exception):
    """Error de una llamada a la API de administración (lo lanzan los colaboradores HTTP)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def has_status_code(error, status_code: int) -> bool:
    """
    Clasifica errores por código HTTP. Solo cuentan excepciones: un dict con
    "message": "401" no es un error de la API.
    """
    if not isinstance(error, Exception):
        return False
    code = getattr(error, "status_code", None)
    if isinstance(error, (HTTPException, AdminRequestError)) and code is not None:
        return code == status_code
    return re.search(rf"\b{status_code}\b", str(error)) is not None


def is_unauthorized_admin_error(error) -> bool:
    return has_status_code(error, 401)


def is_not_found_admin_error(error) -> bool:
    return has_status_code(error, 404)


def is_conflict_admin_error(error) -> bool:
    return has_status_code(error, 409)
