"""
Exam Portal - Test Configuration and Fixtures
"""
import os
import tempfile
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from faker import Faker

# Set testing environment before the application reads its settings
_TEST_DIR = tempfile.mkdtemp(prefix="exam-portal-tests-")
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['UPLOAD_PATH'] = os.path.join(_TEST_DIR, 'uploads')
os.environ['LOG_FILE'] = ''
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'

from exam_portal.main import app
from exam_portal.core.database import Base, create_engine_for_url, get_db
from exam_portal.core.security import TokenClaims, get_password_hash, get_token_service
from exam_portal.models.material import MaterialType
from exam_portal.models.user import User, UserRole
from exam_portal.schemas.material import MaterialCreate
from exam_portal.services import material_service

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
test_engine = create_engine_for_url(os.environ['DATABASE_URL'])
TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create fresh tables and a session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client; every request gets its own session on the test database"""
    async def override_get_db():
        async with TestSessionLocal() as session:
            try:
                yield session
                if session.new or session.dirty or session.deleted:
                    await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


def make_headers(user: User) -> dict:
    token = get_token_service().issue(
        TokenClaims(user_id=str(user.id), role=user.role.value, email=user.email)
    )
    return {'Authorization': f'Bearer {token}'}


async def _create_user(db_session: AsyncSession, role: UserRole, **overrides) -> User:
    user = User(
        name=overrides.get('name', fake.name()),
        email=overrides.get('email', f"{fake.user_name()}.{fake.pyint()}@college.edu"),
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role,
        department=overrides.get('department', 'Computer Science'),
        semester=overrides.get('semester', 1),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def student_user(db_session: AsyncSession) -> User:
    """Create a student"""
    return await _create_user(db_session, UserRole.STUDENT, semester=3)


@pytest.fixture
async def faculty_user(db_session: AsyncSession) -> User:
    """Create a faculty member"""
    return await _create_user(db_session, UserRole.FACULTY, name='Dr. Rao')


@pytest.fixture
def student_headers(student_user: User) -> dict:
    return make_headers(student_user)


@pytest.fixture
def faculty_headers(faculty_user: User) -> dict:
    return make_headers(faculty_user)


@pytest.fixture
def material_factory(db_session: AsyncSession, faculty_user: User):
    """Insert materials directly, bypassing the upload endpoint"""
    async def factory(**overrides):
        data = MaterialCreate(
            title=overrides.pop('title', 'Data Structures Notes'),
            description=overrides.pop('description', ''),
            subject=overrides.pop('subject', 'Data Structures'),
            department=overrides.pop('department', 'Computer Science'),
            semester=overrides.pop('semester', 3),
            type=overrides.pop('type', MaterialType.NOTES),
            year=overrides.pop('year', None),
        )
        return await material_service.create_material(
            db_session,
            data,
            file_url=overrides.pop('file_url', '/uploads/0-notes.pdf'),
            file_name=overrides.pop('file_name', 'notes.pdf'),
            uploaded_by=str(faculty_user.id),
            uploaded_by_name=faculty_user.name,
        )

    return factory


@pytest.fixture
def student_factory(db_session: AsyncSession):
    """Create extra students and return their auth headers"""
    async def factory(**overrides) -> dict:
        return make_headers(await _create_user(db_session, UserRole.STUDENT, **overrides))

    return factory
