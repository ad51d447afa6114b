from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class GenealogyORM(Base):
    __tablename__ = "genealogy"
    __table_args__ = (UniqueConstraint("farm_id", "animal_id", name="ux_genealogy_farm_animal"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    animal_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    # Weak references: no foreign keys, a removed ancestor renders as unknown
    father_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    mother_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    paternal_grandfather_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    paternal_grandmother_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    maternal_grandfather_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    maternal_grandmother_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
