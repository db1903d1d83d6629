from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from tournament_api.core.database import Base


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (UniqueConstraint("tournament_id", "title", name="uq_games_tournament_title"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(100), index=True)
    time: Mapped[datetime] = mapped_column(DateTime)
    tournament_id: Mapped[int] = mapped_column(ForeignKey("tournaments.id", ondelete="CASCADE"), index=True)
    tournament: Mapped["Tournament"] = relationship(back_populates="games")
