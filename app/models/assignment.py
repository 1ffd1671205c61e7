from datetime import date
from sqlalchemy import ForeignKey, Date, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base


class Assignment(Base):
    """Append-only once closed; only the open row of a territory is ever updated."""

    __tablename__ = "designacoes"

    __table_args__ = (
        # At most one open assignment per territory
        Index(
            "uq_designacao_ativa",
            "territorio_id",
            unique=True,
            sqlite_where=text("data_devolucao IS NULL"),
            postgresql_where=text("data_devolucao IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    territorio_id: Mapped[int] = mapped_column(
        ForeignKey("territorios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pessoa_id: Mapped[int | None] = mapped_column(
        ForeignKey("pessoas.id", ondelete="SET NULL"), nullable=True, index=True
    )
    campanha_id: Mapped[int | None] = mapped_column(ForeignKey("campanhas.id"), nullable=True, index=True)
    data_saida: Mapped[date] = mapped_column(Date, nullable=False)
    data_devolucao: Mapped[date | None] = mapped_column(Date, nullable=True)

    territory: Mapped["Territory"] = relationship(back_populates="assignments")
    person: Mapped["Person | None"] = relationship(back_populates="assignments")
    campaign: Mapped["Campaign | None"] = relationship(back_populates="assignments")
