from datetime import datetime
from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, UniqueConstraint
from tournament_api.core.config import get_settings
from tournament_api.core.database import Base


class Tournament(Base):
    __tablename__ = "tournaments"
    __table_args__ = (UniqueConstraint("title", "start_date", name="uq_tournaments_title_start_date"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(100), index=True)
    start_date: Mapped[datetime] = mapped_column(DateTime)
    games: Mapped[list["Game"]] = relationship(
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="Game.title",
    )

    @property
    def end_date(self) -> datetime:
        return self.start_date + relativedelta(months=get_settings().TOURNAMENT_DURATION_MONTHS)

    def is_within_period(self, moment: datetime) -> bool:
        return self.start_date <= moment <= self.end_date
