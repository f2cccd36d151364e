from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}不能为空")
    return value.strip()


def require_present(value: Optional[str], field_name: str) -> str:
    """Reject missing/empty values but return the value untouched.

    Phone and name are matched by exact string equality, so no trimming here.
    """
    if value is None or value == "":
        raise ValidationError(f"{field_name}不能为空")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name}格式不正确")
    return value
