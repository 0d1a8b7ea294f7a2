"""
Legacy Migration Models

Pydantic models for migration progress, results and pre-flight checks.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MigrationStatus(str, Enum):
    """Lifecycle of a single legacy collection migration."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class MigrationProgress(BaseModel):
    """Progress of one legacy collection. Mutated only by its migrator."""

    collection: str
    total: int = 0
    processed: int = 0
    errors: int = 0
    status: MigrationStatus = MigrationStatus.PENDING
    error_messages: list[str] = Field(default_factory=list)

    def snapshot(self) -> "MigrationProgress":
        """Detached copy safe to hand to listeners."""
        return self.model_copy(deep=True)


class MigrationResult(BaseModel):
    """Aggregate outcome of a migration run."""

    model_config = ConfigDict(frozen=True)

    success: bool
    total_records: int
    migrated_records: int
    errors: int
    collections: list[MigrationProgress]
    duration: int = Field(..., description="Wall-clock duration of the run in milliseconds.")


class PayloadValidation(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)


class PayloadPreview(BaseModel):
    collections: dict[str, int] = Field(
        default_factory=dict,
        description="Record count per recognized legacy collection present in the export.",
    )
    ignored: list[str] = Field(
        default_factory=list,
        description="Top-level export keys that will not be migrated.",
    )
