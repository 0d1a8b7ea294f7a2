"""
Record transformation from legacy export records to domain entities.

Every builder accepts any value for ``raw`` and always returns a complete
entity: missing or malformed legacy data falls back to defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from churchadmin.schemas.entities import (
    Address,
    Assistido,
    EnderecoAssistido,
    Event,
    EventCategory,
    EventStatus,
    Member,
    MemberStatus,
    StatusAssistido,
    TipoMoradia,
)
from churchadmin.schemas.legacy_models import LegacyAssistido, LegacyEvent, LegacyMember
from churchadmin.services.field_mapper import (
    map_family_status,
    map_member_marital_status,
    map_schooling_level,
    parse_legacy_date,
)

MIGRATION_ACTOR = "migration"
ACTIVE_SITUATION = "Ativo"

DEFAULT_EVENT_CATEGORY = EventCategory(
    id="default",
    name="Geral",
    color="#3B82F6",
    priority=0,
)


def display_name(raw: Any, field: str = "nomeCompleto") -> str:
    """Best-effort name of a legacy record for diagnostics."""
    if isinstance(raw, Mapping):
        name = raw.get(field)
        if isinstance(name, str) and name:
            return name
    return "unknown"


def _or_na(value: str) -> str:
    return value or "N/A"


def transform_assistido(raw: Any, now: datetime) -> Assistido:
    legacy = LegacyAssistido.from_raw(raw)
    # Legacy calendar dates stay naive (stored as UTC midnight); only the
    # audit timestamps carry a timezone.
    birth_date = parse_legacy_date(legacy.data_nascimento)
    address = legacy.endereco

    return Assistido(
        nome=legacy.nome_completo,
        cpf=legacy.cpf,
        rg=legacy.rg,
        data_nascimento=birth_date or now,
        telefone=legacy.telefone,
        email=legacy.email,
        endereco=EnderecoAssistido(
            logradouro=address.logradouro,
            numero=address.numero,
            complemento=address.complemento,
            bairro=address.bairro,
            cidade=address.cidade,
            estado=address.estado,
            cep=address.cep,
        ),
        situacao_familiar=map_family_status(legacy.estado_civil),
        escolaridade=map_schooling_level(legacy.escolaridade),
        profissao=legacy.profissao,
        renda_familiar=legacy.renda_familiar,
        status=StatusAssistido.ATIVO if legacy.situacao == ACTIVE_SITUATION else StatusAssistido.INATIVO,
        necessidades=legacy.projetos,
        observacoes=legacy.observacoes,
        # Housing and benefit data did not exist in the legacy system
        tipo_moradia=TipoMoradia.ALUGADA,
        quantidade_comodos=1,
        possui_cad_unico=False,
        data_inicio_atendimento=birth_date or now,
        responsavel_atendimento="",
        familiares=[],
        atendimentos=[],
        created_at=now,
        updated_at=now,
        created_by=MIGRATION_ACTOR,
    )


def transform_member(raw: Any, now: datetime) -> Member:
    legacy = LegacyMember.from_raw(raw)
    address = legacy.endereco

    return Member(
        name=legacy.nome_completo,
        email=legacy.email,
        phone=legacy.telefone,
        birth_date=parse_legacy_date(legacy.data_nascimento) or now,
        address=Address(
            street=address.logradouro,
            number=address.numero,
            complement=address.complemento,
            neighborhood=address.bairro,
            city=address.cidade,
            state=address.estado,
            zip_code=address.cep,
        ),
        marital_status=map_member_marital_status(legacy.estado_civil),
        status=MemberStatus.ACTIVE if legacy.situacao == ACTIVE_SITUATION else MemberStatus.INACTIVE,
        baptism_date=parse_legacy_date(legacy.data_batismo),
        conversion_date=parse_legacy_date(legacy.membro_desde),
        ministries=[],
        observations=(
            f"CPF: {_or_na(legacy.cpf)} | RG: {_or_na(legacy.rg)} | "
            f"Profissão: {_or_na(legacy.profissao)}"
        ),
        created_at=now,
        updated_at=now,
        created_by=MIGRATION_ACTOR,
    )


def format_event_location(legacy: LegacyEvent) -> str:
    place = legacy.local
    parts = [place.logradouro, place.numero, place.bairro, place.cidade, place.estado]
    return ", ".join(part for part in parts if part)


def transform_event(raw: Any, now: datetime) -> Event:
    """Legacy status and category are ignored: every event is a fresh scheduled one."""
    legacy = LegacyEvent.from_raw(raw)

    return Event(
        title=legacy.nome,
        description=legacy.observacoes,
        date=parse_legacy_date(legacy.data) or now,
        time=legacy.horario_inicio,
        location=format_event_location(legacy),
        responsible=legacy.responsavel,
        status=EventStatus.SCHEDULED,
        is_public=True,
        requires_confirmation=False,
        category=DEFAULT_EVENT_CATEGORY.model_copy(),
        created_at=now,
        updated_at=now,
        created_by=MIGRATION_ACTOR,
    )
