"""
Pytest fixtures for testing.
"""
import os

# Settings are read at import time; provide test values before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("EMAIL_MODE", "dev")

import pytest
import pytest_asyncio
from datetime import datetime
from typing import AsyncGenerator, Dict, Optional, Tuple
from uuid import uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Import database module BEFORE app to allow override
import command_center.database
from command_center.database import Base
# Import ALL models so Base.metadata knows about all tables
from command_center.models import (
    Availability,
    CompanySize,
    Employer,
    EmployerStatus,
    EmploymentType,
    JobPosting,
    JobStatus,
    Organizer,
    OrganizerRole,
    Student,
    StudentStatus,
)
from command_center.services.auth_client import (
    AuthConfigurationError,
    AuthError,
    AuthSession,
    AuthUser,
)

# Now import app (after we can override database)
from command_center.main import app as fastapi_app


# Test database URL (use in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeAuthClient:
    """In-memory stand-in for SupabaseAuthClient."""

    def __init__(self):
        self.sessions: Dict[str, AuthUser] = {}
        self.accounts: Dict[str, Tuple[str, AuthUser]] = {}
        self.signed_out = []
        self.deleted = []
        self.service_role_key: Optional[str] = "test-service-role-key"

    def register(self, email: str, password: str = "correct-horse", user_id: Optional[str] = None) -> AuthUser:
        user = AuthUser(id=user_id or str(uuid4()), email=email)
        self.accounts[email] = (password, user)
        return user

    def issue_token(self, user: AuthUser) -> str:
        token = f"token-{uuid4().hex}"
        self.sessions[token] = user
        return token

    async def get_user(self, access_token):
        if not access_token:
            return None
        return self.sessions.get(access_token)

    async def sign_in_with_password(self, email, password):
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError("Invalid login credentials", status=400)
        user = account[1]
        return AuthSession(access_token=self.issue_token(user), user=user)

    async def sign_out(self, access_token):
        self.signed_out.append(access_token)
        self.sessions.pop(access_token, None)

    async def create_user(self, email, password):
        if not self.service_role_key:
            raise AuthConfigurationError("SUPABASE_SERVICE_ROLE_KEY is not configured; cannot provision users")
        if email in self.accounts:
            raise AuthError("A user with this email address has already been registered", status=422)
        return self.register(email, password)

    async def delete_user(self, user_id):
        self.deleted.append(user_id)
        for email, (_, user) in list(self.accounts.items()):
            if user.id == user_id:
                del self.accounts[email]
                return True
        return False

    async def close(self):
        pass


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    Ensures cleanup happens even if test fails.
    """
    # Use StaticPool to keep single connection alive and reuse it
    # This ensures all sessions see the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Replace the app's engine and sessionmaker (used by get_db and the access gate)
    original_engine = command_center.database.engine
    original_sessionmaker = command_center.database.AsyncSessionLocal

    command_center.database.engine = test_engine
    command_center.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    session = async_session()

    try:
        yield session
    finally:
        await session.close()
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await test_engine.dispose()

        command_center.database.engine = original_engine
        command_center.database.AsyncSessionLocal = original_sessionmaker


@pytest.fixture
def fake_auth() -> FakeAuthClient:
    """Replace the Supabase auth client on the app for the duration of a test."""
    original = fastapi_app.state.auth_client
    fake = FakeAuthClient()
    fastapi_app.state.auth_client = fake
    yield fake
    fastapi_app.state.auth_client = original


@pytest_asyncio.fixture
async def async_client(db: AsyncSession, fake_auth: FakeAuthClient) -> AsyncGenerator[AsyncClient, None]:
    """
    Anonymous HTTP client.

    Redirects are NOT followed so tests can assert on the access gate's
    decisions.
    """
    transport = ASGITransport(app=fastapi_app)

    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=False
    ) as client:
        yield client


async def _create_organizer(db: AsyncSession, fake_auth: FakeAuthClient, email: str, role: OrganizerRole,
                            is_active: bool = True) -> Tuple[Organizer, str]:
    auth_user = fake_auth.register(email)
    organizer = Organizer(
        email=email,
        first_name="Test",
        last_name=role.value.capitalize(),
        role=role,
        is_active=is_active,
        auth_user_id=auth_user.id,
    )
    db.add(organizer)
    await db.commit()
    await db.refresh(organizer)
    return organizer, fake_auth.issue_token(auth_user)


@pytest_asyncio.fixture
async def admin_organizer(db: AsyncSession, fake_auth: FakeAuthClient) -> Tuple[Organizer, str]:
    """Active admin organizer and a valid session token for it."""
    return await _create_organizer(db, fake_auth, "admin@sot.org.nz", OrganizerRole.ADMIN)


@pytest_asyncio.fixture
async def staff_organizer(db: AsyncSession, fake_auth: FakeAuthClient) -> Tuple[Organizer, str]:
    """Active organizer (non-admin role) and a valid session token for it."""
    return await _create_organizer(db, fake_auth, "organizer@sot.org.nz", OrganizerRole.ORGANIZER)


@pytest_asyncio.fixture
async def inactive_organizer(db: AsyncSession, fake_auth: FakeAuthClient) -> Tuple[Organizer, str]:
    return await _create_organizer(db, fake_auth, "former@sot.org.nz", OrganizerRole.ADMIN, is_active=False)


@pytest_asyncio.fixture
async def admin_client(async_client: AsyncClient, admin_organizer) -> AsyncClient:
    """Client signed in as an admin."""
    async_client.cookies.set("auth_token", admin_organizer[1])
    return async_client


@pytest_asyncio.fixture
async def client(async_client: AsyncClient, staff_organizer) -> AsyncClient:
    """Client signed in as a regular organizer."""
    async_client.cookies.set("auth_token", staff_organizer[1])
    return async_client


@pytest.fixture
def make_student(db: AsyncSession):
    """Factory for persisted students."""
    async def factory(**overrides) -> Student:
        values = dict(
            email=f"student-{uuid4().hex[:8]}@example.com",
            first_name="Aroha",
            last_name="Ngata",
            university="Victoria University of Wellington",
            degree="BSc Computer Science",
            graduation_year=datetime.utcnow().year,
            skills=["python", "sql"],
            interests=["fintech"],
            availability=Availability.INTERNSHIP,
            location="Wellington",
            status=StudentStatus.PENDING,
        )
        values.update(overrides)
        student = Student(**values)
        db.add(student)
        await db.commit()
        await db.refresh(student)
        return student
    return factory


@pytest.fixture
def make_employer(db: AsyncSession):
    """Factory for persisted employers."""
    async def factory(**overrides) -> Employer:
        values = dict(
            company_name="Kiwi Payments",
            contact_email=f"hr-{uuid4().hex[:8]}@kiwipay.co.nz",
            contact_name="Sam Carter",
            contact_title="Talent Lead",
            industry="Fintech",
            company_size=CompanySize.MEDIUM,
            location="Wellington",
            status=EmployerStatus.APPROVED,
        )
        values.update(overrides)
        employer = Employer(**values)
        db.add(employer)
        await db.commit()
        await db.refresh(employer)
        return employer
    return factory


@pytest.fixture
def make_job(db: AsyncSession):
    """Factory for persisted job postings (employer_id required)."""
    async def factory(employer_id, **overrides) -> JobPosting:
        values = dict(
            employer_id=employer_id,
            title="Graduate Software Engineer",
            description="Build payment APIs.",
            skills_required=["python", "sql"],
            location="Wellington",
            employment_type=EmploymentType.INTERNSHIP,
            status=JobStatus.PUBLISHED,
        )
        values.update(overrides)
        job = JobPosting(**values)
        db.add(job)
        await db.commit()
        await db.refresh(job)
        return job
    return factory
