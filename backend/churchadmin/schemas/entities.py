"""
Domain Entity Models

Pydantic models for the Firestore documents written by the legacy importer.
Attribute names are snake_case; documents are stored with the camelCase keys
the rest of the system reads (``dataNascimento``, ``createdAt``...).

Collections:
    assistidos/{id} - People assisted by the church's social work
    members/{id}    - Church members
    events/{id}     - Church events
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FirestoreModel(BaseModel):
    """Base model serialized with camelCase document keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_document(self) -> dict[str, Any]:
        """Return the Firestore document representation."""
        return self.model_dump(by_alias=True)


# =============================================================================
# Assistido (beneficiary)
# =============================================================================


class StatusAssistido(str, Enum):
    """Beneficiary status."""

    ATIVO = "ativo"
    INATIVO = "inativo"
    SUSPENSO = "suspenso"
    TRANSFERIDO = "transferido"


class SituacaoFamiliar(str, Enum):
    """Beneficiary marital/family status."""

    SOLTEIRO = "solteiro"
    CASADO = "casado"
    DIVORCIADO = "divorciado"
    VIUVO = "viuvo"
    UNIAO_ESTAVEL = "uniao_estavel"


class Escolaridade(str, Enum):
    """Beneficiary education level."""

    ANALFABETO = "analfabeto"
    FUNDAMENTAL_INCOMPLETO = "fundamental_incompleto"
    FUNDAMENTAL_COMPLETO = "fundamental_completo"
    MEDIO_INCOMPLETO = "medio_incompleto"
    MEDIO_COMPLETO = "medio_completo"
    SUPERIOR_INCOMPLETO = "superior_incompleto"
    SUPERIOR_COMPLETO = "superior_completo"
    POS_GRADUACAO = "pos_graduacao"


class TipoMoradia(str, Enum):
    """Beneficiary housing type."""

    ALUGADA = "alugada"
    PROPRIA = "propria"


class EnderecoAssistido(FirestoreModel):
    logradouro: str = ""
    numero: str = ""
    complemento: str = ""
    bairro: str = ""
    cidade: str = ""
    estado: str = ""
    cep: str = ""


class Assistido(FirestoreModel):
    """A person receiving assistance from the church."""

    nome: str
    cpf: str
    rg: str
    data_nascimento: datetime
    telefone: str
    email: str
    endereco: EnderecoAssistido
    situacao_familiar: SituacaoFamiliar
    escolaridade: Escolaridade
    profissao: str
    renda_familiar: float
    status: StatusAssistido
    necessidades: list[str] = Field(default_factory=list)
    observacoes: str
    tipo_moradia: TipoMoradia
    quantidade_comodos: int
    possui_cad_unico: bool
    data_inicio_atendimento: datetime
    responsavel_atendimento: str
    familiares: list[dict[str, Any]] = Field(default_factory=list)
    atendimentos: list[dict[str, Any]] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    created_by: str


# =============================================================================
# Member
# =============================================================================


class MaritalStatus(str, Enum):
    """Member marital status. Narrower than SituacaoFamiliar."""

    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"


class MemberStatus(str, Enum):
    """Member status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    TRANSFERRED = "transferred"
    DISCIPLINED = "disciplined"


class Address(FirestoreModel):
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class Member(FirestoreModel):
    """A church member."""

    name: str
    email: str
    phone: str
    birth_date: datetime
    address: Address
    marital_status: MaritalStatus
    status: MemberStatus
    baptism_date: Optional[datetime] = None
    conversion_date: Optional[datetime] = None
    ministries: list[str] = Field(default_factory=list)
    observations: str
    created_at: datetime
    updated_at: datetime
    created_by: str


# =============================================================================
# Event
# =============================================================================


class EventStatus(str, Enum):
    """Event status."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventCategory(FirestoreModel):
    id: str
    name: str
    color: str
    priority: int


class Event(FirestoreModel):
    """A church event."""

    title: str
    description: str
    date: datetime
    time: str
    location: str
    responsible: str
    status: EventStatus
    is_public: bool
    requires_confirmation: bool
    category: EventCategory
    created_at: datetime
    updated_at: datetime
    created_by: str
