from typing import Any, Iterable, Mapping

from fastapi import HTTPException, status

from app.core.errors import MISSING_FIELDS


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data: Mapping[str, Any], names: Iterable[str], *, detail: str = MISSING_FIELDS) -> None:
    """Lève une 400 si l'un des champs est absent, nul ou une chaîne vide."""
    missing = [name for name in names if _is_blank(data.get(name))]
    if missing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def present_changes(data: Mapping[str, Any]) -> dict:
    """
    Sémantique COALESCE : seuls les champs fournis ET non nuls sont modifiés.
    """
    return {key: value for key, value in data.items() if value is not None}
