"""
Shared pytest fixtures for the company intelligence test suite.
"""
import asyncio
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from src.companies.database import CompanyAddress, CompanyModel, FinancialStatement
from src.core.config import Settings
from src.core.gateway import Gateway
from src.users.service import register_user, sign_in

ANON_KEY = "test-anon-key"


# --- Settings / Gateway Fixtures ---

@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a per-test SQLite file and storage directory."""
    return Settings(
        environment="test",
        backend_url="http://intel.test",
        anon_key=ANON_KEY,
        database_url=f"sqlite:///{tmp_path / 'intel.db'}",
        storage_dir=tmp_path / "storage",
    )


@pytest.fixture
async def gateway(settings):
    """Gateway with every table created on a fresh database file."""
    gw = Gateway.from_settings(settings)
    await gw.create_all()
    yield gw
    await gw.dispose()


# --- Factory Fixtures ---

async def create_company(gateway, name="Test Company Ltd", state=None, financials=(), **fields):
    """Insert one company with optional address state and (revenue, profit) statements."""
    values = {
        "sector": "Technology",
        "company_type": "PRIVATE",
        "status": "ACTIVE",
        "is_listed": False,
        "created_at": datetime.utcnow(),
    }
    values.update(fields)
    async with gateway.session() as session:
        company = CompanyModel(name=name, **values)
        session.add(company)
        await session.flush()
        if state:
            session.add(CompanyAddress(company_id=company.id, address_type="REGISTERED", state=state))
        for year, (revenue, profit) in enumerate(financials, start=2020):
            session.add(
                FinancialStatement(
                    company_id=company.id,
                    financial_year=str(year),
                    total_revenue=revenue,
                    net_profit=profit,
                )
            )
        return company.id


@pytest.fixture
def company_factory(gateway):
    """Factory fixture for creating test companies."""
    async def _create(name="Test Company Ltd", **fields):
        return await create_company(gateway, name=name, **fields)
    return _create


@pytest.fixture
def user_factory(gateway):
    """Factory fixture for registered users; returns the profile dict."""
    async def _create(email="analyst@example.com", password="s3cret-pass", role="FREEMIUM", **fields):
        return await register_user(gateway, email, password, role=role, **fields)
    return _create


# --- API Fixtures ---

@pytest.fixture
def api_client(settings):
    """TestClient over an app whose lifespan builds the gateway from test settings."""
    from src.web.app import create_app

    app = create_app(settings)
    with TestClient(app) as client:
        client.headers.update({"apikey": ANON_KEY})
        yield client


@pytest.fixture
def seed(settings):
    """Run an async seeding coroutine against the test database before the app starts."""
    def _seed(fn):
        async def _run():
            gw = Gateway.from_settings(settings)
            await gw.create_all()
            try:
                return await fn(gw)
            finally:
                await gw.dispose()
        return asyncio.run(_run())
    return _seed


@pytest.fixture
def signed_in(seed):
    """Register a user of the given role and return (user, auth headers)."""
    def _signed_in(role="FREEMIUM", email=None):
        email = email or f"{role.lower()}@example.com"

        async def _create(gw):
            user = await register_user(gw, email, "s3cret-pass", role=role)
            session = await sign_in(gw, email, "s3cret-pass")
            return user, session["access_token"]

        user, token = seed(_create)
        return user, {"Authorization": f"Bearer {token}"}
    return _signed_in
