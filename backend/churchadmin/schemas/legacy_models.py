"""
Legacy Export Models

Lenient pydantic structures for records found in the predecessor system's
Realtime Database export. Every field is optional and degrades to a default
instead of failing validation, so ``from_raw`` accepts any input.
"""

import math
from collections.abc import Mapping
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_LEGACY_CODE = 9999


def coerce_text(value: Any) -> str:
    """Falsy values become ``""``; numbers are rendered as text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        if isinstance(value, float):
            if not math.isfinite(value):
                return ""
            if value.is_integer():
                value = int(value)
        try:
            return str(value) if value else ""
        except ValueError:
            # ints past the interpreter's digit limit
            return ""
    return ""


def coerce_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        if isinstance(value, str):
            value = float(value.strip().replace(",", "."))
        if isinstance(value, (int, float)):
            value = float(value)
            return value if math.isfinite(value) else 0
    except (OverflowError, ValueError):
        return 0
    return 0


def coerce_code(value: Any) -> Optional[int]:
    """Enum codes arrive as ints or numeric strings. Out-of-range codes read as missing."""
    code: Optional[int] = None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        code = value
    elif isinstance(value, float) and value.is_integer():
        code = int(value)
    elif isinstance(value, str) and value.strip().isdecimal():
        try:
            code = int(value.strip())
        except ValueError:
            return None
    if code is None or abs(code) > MAX_LEGACY_CODE:
        return None
    return code


def coerce_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    return {}


def coerce_text_list(value: Any) -> list[str]:
    # RTDB exports may store lists as {"0": ..., "1": ...}
    if isinstance(value, Mapping):
        value = list(value.values())
    if not isinstance(value, (list, tuple)):
        return []
    return [text for text in (coerce_text(item) for item in value) if text]


LegacyText = Annotated[str, BeforeValidator(coerce_text)]
LegacyNumber = Annotated[float, BeforeValidator(coerce_number)]
LegacyCode = Annotated[Optional[int], BeforeValidator(coerce_code)]
LegacyTextList = Annotated[list[str], BeforeValidator(coerce_text_list)]


class LegacyModel(BaseModel):
    """Base for legacy records; keys follow the export's camelCase names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def from_raw(cls, raw: Any):
        """Build from an arbitrary export value. Non-mappings read as empty records."""
        return cls.model_validate(coerce_mapping(raw))


class LegacyAddress(LegacyModel):
    logradouro: LegacyText = ""
    numero: LegacyText = ""
    complemento: LegacyText = ""
    bairro: LegacyText = ""
    cidade: LegacyText = ""
    estado: LegacyText = ""
    cep: LegacyText = ""


LegacyAddressField = Annotated[LegacyAddress, BeforeValidator(coerce_mapping)]


class LegacyAssistido(LegacyModel):
    """Beneficiary record from the ``assistidos`` export collection."""

    nome_completo: LegacyText = ""
    cpf: LegacyText = ""
    rg: LegacyText = ""
    data_nascimento: LegacyText = ""
    telefone: LegacyText = ""
    email: LegacyText = ""
    endereco: LegacyAddressField = Field(default_factory=LegacyAddress)
    estado_civil: LegacyCode = None
    escolaridade: LegacyCode = None
    profissao: LegacyText = ""
    renda_familiar: LegacyNumber = 0
    situacao: LegacyText = ""
    projetos: LegacyTextList = Field(default_factory=list)
    observacoes: LegacyText = ""


class LegacyMember(LegacyModel):
    """Member record from the ``membros`` export collection."""

    nome_completo: LegacyText = ""
    email: LegacyText = ""
    telefone: LegacyText = ""
    data_nascimento: LegacyText = ""
    data_batismo: LegacyText = ""
    membro_desde: LegacyText = ""
    endereco: LegacyAddressField = Field(default_factory=LegacyAddress)
    estado_civil: LegacyCode = None
    situacao: LegacyText = ""
    cpf: LegacyText = ""
    rg: LegacyText = ""
    profissao: LegacyText = ""


class LegacyEvent(LegacyModel):
    """Event record from the ``eventos`` export collection."""

    nome: LegacyText = ""
    observacoes: LegacyText = ""
    data: LegacyText = ""
    horario_inicio: LegacyText = ""
    local: LegacyAddressField = Field(default_factory=LegacyAddress)
    responsavel: LegacyText = ""
