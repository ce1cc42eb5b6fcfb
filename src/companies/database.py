"""
Database models for the company directory.

One ``companies`` row per corporate record plus the per-company
collections the detail page aggregates.
"""
from datetime import datetime, date
from typing import List, Optional

from sqlalchemy import (
    Integer, String, Boolean, DateTime, Date, BigInteger, Numeric,
    ForeignKey, Text, Index,
)
from sqlalchemy.orm import relationship, validates, Mapped, mapped_column

from src.core.database import Base
from src.core.models import CompanyStatus


class CompanyModel(Base):
    """
    Core company record.
    ``name_lowercase`` is kept in sync with ``name`` for case-insensitive search.
    """
    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name_lowercase: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    legal_name: Mapped[Optional[str]] = mapped_column(String(255))

    # Legal identifiers
    cin: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    gst: Mapped[Optional[str]] = mapped_column(String(50))
    pan: Mapped[Optional[str]] = mapped_column(String(20))

    # Classification
    sector: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    company_type: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    status: Mapped[str] = mapped_column(String(30), default=CompanyStatus.ACTIVE.value, index=True)
    is_listed: Mapped[bool] = mapped_column(Boolean, default=False)
    stock_exchange: Mapped[Optional[str]] = mapped_column(String(50))
    stock_symbol: Mapped[Optional[str]] = mapped_column(String(30))
    isin: Mapped[Optional[str]] = mapped_column(String(20))

    # Scale
    market_cap: Mapped[Optional[int]] = mapped_column(BigInteger)
    employee_count: Mapped[Optional[int]] = mapped_column(Integer)
    employee_range: Mapped[Optional[str]] = mapped_column(String(50))
    annual_revenue_range: Mapped[Optional[str]] = mapped_column(String(50))

    description: Mapped[Optional[str]] = mapped_column(Text)
    website: Mapped[Optional[str]] = mapped_column(String(500))
    linkedin_url: Mapped[Optional[str]] = mapped_column(String(500))
    logo_url: Mapped[Optional[str]] = mapped_column(String(500))

    founded_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    addresses: Mapped[List["CompanyAddress"]] = relationship(
        "CompanyAddress", back_populates="company", cascade="all, delete-orphan"
    )
    financial_statements: Mapped[List["FinancialStatement"]] = relationship(
        "FinancialStatement", back_populates="company", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_company_status_name", "status", "name"),
    )

    @validates("name")
    def _sync_lowercase(self, key, value):
        self.name_lowercase = (value or "").lower()
        return value

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sector": self.sector,
            "company_type": self.company_type,
            "is_listed": self.is_listed,
            "market_cap": self.market_cap,
            "annual_revenue_range": self.annual_revenue_range,
            "logo_url": self.logo_url,
            "founded_date": self.founded_date.isoformat() if self.founded_date else None,
            "status": self.status,
        }

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}', status='{self.status}')>"


class CompanyAddress(Base):
    __tablename__ = "company_addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    address_type: Mapped[Optional[str]] = mapped_column(String(30))  # REGISTERED, CORPORATE, BRANCH
    line1: Mapped[Optional[str]] = mapped_column(String(255))
    line2: Mapped[Optional[str]] = mapped_column(String(255))
    city: Mapped[Optional[str]] = mapped_column(String(100))
    state: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    country: Mapped[Optional[str]] = mapped_column(String(100))
    postal_code: Mapped[Optional[str]] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    company: Mapped["CompanyModel"] = relationship("CompanyModel", back_populates="addresses")


class CompanyContact(Base):
    __tablename__ = "company_contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    contact_type: Mapped[Optional[str]] = mapped_column(String(30))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    website: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class KeyOfficial(Base):
    __tablename__ = "key_officials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    designation: Mapped[Optional[str]] = mapped_column(String(100))
    din: Mapped[Optional[str]] = mapped_column(String(20))  # Director Identification Number
    appointment_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class FinancialStatement(Base):
    __tablename__ = "financial_statements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    financial_year: Mapped[Optional[str]] = mapped_column(String(10), index=True)
    period_start_date: Mapped[Optional[date]] = mapped_column(Date)
    period_end_date: Mapped[Optional[date]] = mapped_column(Date)
    currency: Mapped[str] = mapped_column(String(3), default="INR")
    total_revenue: Mapped[Optional[float]] = mapped_column(Numeric(20, 2), index=True)
    net_profit: Mapped[Optional[float]] = mapped_column(Numeric(20, 2), index=True)
    total_assets: Mapped[Optional[float]] = mapped_column(Numeric(20, 2))
    total_liabilities: Mapped[Optional[float]] = mapped_column(Numeric(20, 2))
    filed_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    company: Mapped["CompanyModel"] = relationship("CompanyModel", back_populates="financial_statements")


class Investor(Base):
    __tablename__ = "investors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    investor_type: Mapped[Optional[str]] = mapped_column(String(50))  # VC, PE, ANGEL, CORPORATE
    description: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class FundingRound(Base):
    __tablename__ = "funding_rounds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    round_type: Mapped[Optional[str]] = mapped_column(String(50))  # SEED, SERIES_A, ...
    amount: Mapped[Optional[float]] = mapped_column(Numeric(20, 2))
    currency: Mapped[str] = mapped_column(String(3), default="INR")
    valuation: Mapped[Optional[float]] = mapped_column(Numeric(20, 2))
    round_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    funding_investors: Mapped[List["FundingInvestor"]] = relationship(
        "FundingInvestor", back_populates="funding_round", cascade="all, delete-orphan"
    )


class FundingInvestor(Base):
    """Link row between a funding round and a participating investor."""
    __tablename__ = "funding_investors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    funding_round_id: Mapped[int] = mapped_column(ForeignKey("funding_rounds.id"), nullable=False, index=True)
    investor_id: Mapped[int] = mapped_column(ForeignKey("investors.id"), nullable=False, index=True)
    amount_invested: Mapped[Optional[float]] = mapped_column(Numeric(20, 2))
    is_lead: Mapped[bool] = mapped_column(Boolean, default=False)

    funding_round: Mapped["FundingRound"] = relationship("FundingRound", back_populates="funding_investors")
    investor: Mapped["Investor"] = relationship("Investor")


class CompanyInvestment(Base):
    """Stakes the company itself holds in other businesses."""
    __tablename__ = "company_investments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    investee_name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Optional[float]] = mapped_column(Numeric(20, 2))
    stake_percent: Mapped[Optional[float]] = mapped_column(Numeric(5, 2))
    investment_date: Mapped[Optional[date]] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class RegulatoryFiling(Base):
    __tablename__ = "regulatory_filings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    filing_type: Mapped[Optional[str]] = mapped_column(String(100))
    filing_date: Mapped[Optional[date]] = mapped_column(Date)
    authority: Mapped[Optional[str]] = mapped_column(String(100))
    reference_number: Mapped[Optional[str]] = mapped_column(String(100))
    document_url: Mapped[Optional[str]] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class LegalProceeding(Base):
    __tablename__ = "legal_proceedings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    case_number: Mapped[Optional[str]] = mapped_column(String(100))
    court: Mapped[Optional[str]] = mapped_column(String(255))
    status: Mapped[Optional[str]] = mapped_column(String(50))
    filed_date: Mapped[Optional[date]] = mapped_column(Date)
    description: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class CompanyNews(Base):
    __tablename__ = "company_news"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[Optional[str]] = mapped_column(String(500))
    source: Mapped[Optional[str]] = mapped_column(String(255))
    summary: Mapped[Optional[str]] = mapped_column(Text)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class CompanyRelationship(Base):
    """
    Parent/subsidiary link between two companies.
    The effective type shown on a detail page depends on which side the
    viewed company occupies, so it is computed at read time.
    """
    __tablename__ = "company_relationships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parent_company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    subsidiary_company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False, index=True)
    ownership_percent: Mapped[Optional[float]] = mapped_column(Numeric(5, 2))
    relationship_type: Mapped[Optional[str]] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    parent_company: Mapped["CompanyModel"] = relationship("CompanyModel", foreign_keys=[parent_company_id])
    subsidiary_company: Mapped["CompanyModel"] = relationship("CompanyModel", foreign_keys=[subsidiary_company_id])

    def __repr__(self):
        return f"<CompanyRelationship(parent={self.parent_company_id}, subsidiary={self.subsidiary_company_id})>"
