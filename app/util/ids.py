import ulid
import uuid
from typing import Any


def new_id(prefix: str = "") -> str:
    """
    Genera un ID string ordenable (ULID), con prefijo opcional ("job_", "usr_", ...).
    Algunos paquetes exponen .str y otros no; fallback a str(...).
    """
    u = ulid.new()
    s = getattr(u, "str", None) or str(u)
    return prefix + s


def new_uuid() -> str:
    return str(uuid.uuid4())


def relation_id(value: Any) -> Any:
    """
    Normaliza un campo de relación que puede llegar como id o como documento
    expandido (dict u objeto con ``id``).
    """
    if value is None:
        return None
    if isinstance(value, dict):
        return value.get("id")
    return getattr(value, "id", value)
