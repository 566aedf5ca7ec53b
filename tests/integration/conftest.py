import re

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error, Return
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.mail_sender import IMailSender
from src.depends import get_mail_sender, get_unit_of_work
from src.domain.errors import ErrorCode

RESET_LINK = re.compile(r"/reset-password/([0-9a-f]{64})")


class RecordingMailSender(IMailSender):
    """Keeps sent messages in memory; can be switched to fail"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to_address: str, subject: str, body: str):
        if self.fail:
            return Return.err(Error(ErrorCode.DELIVERY_FAILED, "Email could not be sent"))
        self.sent.append({"to": to_address, "subject": subject, "body": body})
        return Return.ok(None)

    def last_token(self) -> str:
        return RESET_LINK.search(self.sent[-1]["body"]).group(1)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def mail_sender():
    return RecordingMailSender()


@pytest_asyncio.fixture
async def client(db_session, mail_sender):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def alice(client: AsyncClient):
    """Registered account alice / alice@example.com / password1"""
    response = await client.post("/auth/register", json={
        "username": "alice",
        "email": "alice@example.com",
        "password": "password1",
    })
    assert response.status_code == 201
    return response.json()
