from collections import Counter

import pytest
from fastapi import status
from sqlalchemy.exc import SQLAlchemyError


@pytest.mark.asyncio
async def test_fetch_empty_table(client):
    response = await client.get("/fetch-whole-db")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_fetch_after_registrations_and_delete(client):
    created = []
    for i in range(5):
        response = await client.post("/register", json={"email": f"user{i}@x.com", "password": f"p{i}"})
        created.append(response.json())

    await client.put(f"/update-pw/{created[1]['userid']}", json={"password": "changed"})
    created[1]["password"] = "changed"

    await client.delete(f"/delete-user/{created[3]['userid']}")
    del created[3]

    listing = (await client.get("/fetch-whole-db")).json()
    assert len(listing) == 4

    # Row order is not guaranteed
    def triples(users):
        return Counter((user["userid"], user["email"], user["password"]) for user in users)

    assert triples(listing) == triples(created)


@pytest.mark.asyncio
async def test_fetch_database_error(client, failing_db):
    failing_db(SQLAlchemyError("connection lost"))
    response = await client.get("/fetch-whole-db")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Internal server error"}
