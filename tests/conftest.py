import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from evenup.db.session import Base, get_db
from evenup.main import app
import evenup.models  # noqa: F401


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def client(db_engine):
    session_factory = sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def as_user(user):
    return {"X-User-Id": str(user["id"])}


async def register(client, name):
    resp = await client.post(
        "/api/v1/users/",
        json={"name": name, "email": f"{name.lower()}@evenup.io"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def make_group(client, owner, *members, name="Trip"):
    resp = await client.post("/api/v1/groups/", json={"name": name}, headers=as_user(owner))
    assert resp.status_code == 201, resp.text
    group = resp.json()

    for m in members:
        resp = await client.post(
            f"/api/v1/groups/{group['id']}/members",
            json={"user_id": m["id"]},
            headers=as_user(owner),
        )
        assert resp.status_code == 201, resp.text

    return group


async def add_expense(client, payer, group, amount, splits, title="Dinner"):
    resp = await client.post(
        f"/api/v1/groups/{group['id']}/expenses",
        json={
            "title": title,
            "amount": str(amount),
            "splits": [{"user_id": u["id"], "amount": str(a)} for u, a in splits],
        },
        headers=as_user(payer),
    )
    return resp


async def pay(client, payer, payee, amount, group=None, confirm=True):
    body = {"to_user": payee["id"], "amount": str(amount)}
    if group is not None:
        body["group_id"] = group["id"]

    resp = await client.post("/api/v1/payments/", json=body, headers=as_user(payer))
    assert resp.status_code == 201, resp.text
    payment = resp.json()

    if confirm:
        resp = await client.post(
            f"/api/v1/payments/{payment['id']}/confirm", headers=as_user(payee)
        )
        assert resp.status_code == 200, resp.text
        payment = resp.json()

    return payment
