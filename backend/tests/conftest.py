"""Pytest fixtures and configuration."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

# Set environment variables before importing app modules
os.environ["DEMO_MODE"] = "true"
os.environ["DOCUMENT_STORE"] = "local"

from churchadmin.repositories.local_store import LocalDocumentStore  # noqa: E402

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock returning a fixed instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def local_store(tmp_path: Path) -> LocalDocumentStore:
    """LocalDocumentStore rooted in a temporary directory."""
    return LocalDocumentStore(tmp_path / "data")


@pytest.fixture
def ana_record() -> dict[str, Any]:
    """Legacy beneficiary record."""
    return {
        "nomeCompleto": "Ana",
        "cpf": "111",
        "dataNascimento": "15/05/1990",
        "estadoCivil": 2,
        "escolaridade": 5,
        "situacao": "Ativo",
        "rendaFamiliar": 1200.5,
        "projetos": ["Cesta básica", "Reforço escolar"],
        "endereco": {
            "logradouro": "Rua das Flores",
            "numero": "10",
            "bairro": "Centro",
            "cidade": "Recife",
            "estado": "PE",
            "cep": "50000-000",
        },
    }


@pytest.fixture
def member_record() -> dict[str, Any]:
    """Legacy member record."""
    return {
        "nomeCompleto": "João Silva",
        "email": "joao@example.com",
        "telefone": "81999990000",
        "dataNascimento": "02/01/1985",
        "dataBatismo": "10/10/2005",
        "membroDesde": "",
        "estadoCivil": 3,
        "situacao": "Ativo",
        "cpf": "222",
        "rg": "",
        "profissao": "Professor",
    }


@pytest.fixture
def event_record() -> dict[str, Any]:
    """Legacy event record."""
    return {
        "nome": "Culto de Páscoa",
        "observacoes": "Trazer alimentos",
        "data": "31/03/2024",
        "horarioInicio": "19:00",
        "responsavel": "Pr. Marcos",
        "status": "realizado",
        "local": {
            "logradouro": "Av. Principal",
            "numero": "100",
            "bairro": "",
            "cidade": "Recife",
            "estado": "PE",
        },
    }


@pytest.fixture
def legacy_payload(ana_record, member_record, event_record) -> dict[str, Any]:
    """Export holding one record per recognized collection and an unrelated key."""
    return {
        "assistidos": {"-A1": ana_record},
        "membros": {"-M1": member_record},
        "eventos": {"-E1": event_record},
        "configuracoes": {"tema": "escuro"},
    }
