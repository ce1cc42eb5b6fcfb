"""
Database models for user watchlists.

A watchlist is a named, user-owned collection of company references.
The (watchlist_id, company_id) pair is unique at the database level; the
constraint violation on insert is the duplicate signal.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import String, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

from src.core.database import Base


class Watchlist(Base):
    __tablename__ = "watchlists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    entries: Mapped[List["WatchlistCompany"]] = relationship(
        "WatchlistCompany",
        back_populates="watchlist",
        cascade="all, delete-orphan",
        order_by="WatchlistCompany.added_at.desc()",
    )

    def __repr__(self):
        return f"<Watchlist(id='{self.id}', name='{self.name}', user='{self.user_id}')>"


class WatchlistCompany(Base):
    __tablename__ = "watchlist_companies"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    watchlist_id: Mapped[str] = mapped_column(ForeignKey("watchlists.id"), nullable=False, index=True)
    company_id: Mapped[int] = mapped_column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, default="")
    added_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    watchlist: Mapped["Watchlist"] = relationship("Watchlist", back_populates="entries")
    company = relationship("CompanyModel", lazy="joined")

    __table_args__ = (
        UniqueConstraint("watchlist_id", "company_id", name="uq_watchlist_company"),
    )

    def __repr__(self):
        return f"<WatchlistCompany(watchlist='{self.watchlist_id}', company={self.company_id})>"
