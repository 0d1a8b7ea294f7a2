"""
Field mapping from legacy encodings to current domain values.

Pure functions. Unknown input never raises; it falls back to the documented
default for the field.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from churchadmin.schemas.entities import Escolaridade, MaritalStatus, SituacaoFamiliar
from churchadmin.schemas.legacy_models import coerce_code

SCHOOLING_LEVELS: dict[int, Escolaridade] = {
    1: Escolaridade.FUNDAMENTAL_INCOMPLETO,
    2: Escolaridade.FUNDAMENTAL_COMPLETO,
    3: Escolaridade.FUNDAMENTAL_INCOMPLETO,  # same target as 1
    4: Escolaridade.MEDIO_INCOMPLETO,
    5: Escolaridade.MEDIO_COMPLETO,
    6: Escolaridade.SUPERIOR_INCOMPLETO,
    7: Escolaridade.SUPERIOR_COMPLETO,
    8: Escolaridade.POS_GRADUACAO,
}

FAMILY_STATUSES: dict[int, SituacaoFamiliar] = {
    1: SituacaoFamiliar.SOLTEIRO,
    2: SituacaoFamiliar.CASADO,
    3: SituacaoFamiliar.DIVORCIADO,
    4: SituacaoFamiliar.VIUVO,
    5: SituacaoFamiliar.UNIAO_ESTAVEL,
}

MEMBER_MARITAL_STATUSES: dict[int, MaritalStatus] = {
    1: MaritalStatus.SINGLE,
    2: MaritalStatus.MARRIED,
    3: MaritalStatus.DIVORCED,
    4: MaritalStatus.WIDOWED,
    # Stable union has no member equivalent; kept as divorced pending product review.
    5: MaritalStatus.DIVORCED,
}


def parse_legacy_date(value: Any) -> Optional[datetime]:
    """Parse a ``DD/MM/YYYY`` string into a naive local date at midnight.

    Impossible calendar dates (``31/02/2020``) are rejected rather than rolled
    over into the next month as the legacy admin page did.

    Args:
        value: Legacy date string

    Returns:
        The parsed datetime, or None for empty, malformed or impossible dates
    """
    if not value or not isinstance(value, str):
        return None

    parts = value.split("/")
    if len(parts) != 3:
        return None

    try:
        day, month, year = (int(part) for part in parts)
        return datetime(year, month, day)
    except (OverflowError, ValueError):
        return None


def map_schooling_level(code: Any) -> Escolaridade:
    """Map a legacy schooling code (1-8) to an education level."""
    return SCHOOLING_LEVELS.get(coerce_code(code), Escolaridade.FUNDAMENTAL_INCOMPLETO)


def map_family_status(code: Any) -> SituacaoFamiliar:
    """Map a legacy marital code (1-5) to a beneficiary family status."""
    return FAMILY_STATUSES.get(coerce_code(code), SituacaoFamiliar.SOLTEIRO)


def map_member_marital_status(code: Any) -> MaritalStatus:
    """Map a legacy marital code (1-5) to a member marital status."""
    return MEMBER_MARITAL_STATUSES.get(coerce_code(code), MaritalStatus.SINGLE)
