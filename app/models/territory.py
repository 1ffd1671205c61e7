import enum
from sqlalchemy import ForeignKey, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base


class TerritoryStatus(str, enum.Enum):
    available = "Disponível"
    in_field = "Em campo"


class Territory(Base):
    __tablename__ = "territorios"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    numero: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    descricao: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    url_imagem: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tipo: Mapped[str | None] = mapped_column(String(128), nullable=True)
    observacoes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    # Written only by assignment_service
    status: Mapped[TerritoryStatus] = mapped_column(
        SAEnum(TerritoryStatus, values_callable=lambda e: [x.value for x in e], native_enum=False, length=32),
        default=TerritoryStatus.available,
        nullable=False,
        index=True,
    )
    grupo_id: Mapped[int | None] = mapped_column(
        ForeignKey("grupos.id", ondelete="SET NULL"), nullable=True, index=True
    )

    group: Mapped["Group | None"] = relationship(back_populates="territories")
    assignments: Mapped[list["Assignment"]] = relationship(
        back_populates="territory", order_by="Assignment.data_saida", passive_deletes=True
    )
