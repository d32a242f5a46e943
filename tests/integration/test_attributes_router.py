"""Integration tests for the attributes API."""

import pytest

ATTRIBUTES = "/api/v1/attributes"


@pytest.mark.asyncio
async def test_create_attribute(client):
    """Test registering an attribute explicitly."""
    response = await client.post(
        ATTRIBUTES,
        json={"attributeName": "active", "dataType": "Boolean", "allowedValues": [True, False]},
    )

    assert response.status_code == 201
    assert response.json() == {
        "attributeName": "active",
        "dataType": "Boolean",
        "allowedValues": [True, False],
    }


@pytest.mark.asyncio
async def test_create_attribute_conflict(client):
    """Test that attribute names are unique."""
    await client.post(ATTRIBUTES, json={"attributeName": "age", "dataType": "Number"})

    response = await client.post(ATTRIBUTES, json={"attributeName": "age", "dataType": "String"})

    assert response.status_code == 409
    assert response.json()["detail"] == "Attribute 'age' already exists"


@pytest.mark.asyncio
async def test_create_attribute_validation(client):
    """Test request validation."""
    bad_type = await client.post(ATTRIBUTES, json={"attributeName": "x", "dataType": "Date"})
    bad_name = await client.post(ATTRIBUTES, json={"attributeName": "a b", "dataType": "String"})

    assert bad_type.status_code == 422
    assert bad_name.status_code == 422


@pytest.mark.asyncio
async def test_explicit_type_survives_rule_creation(client):
    """Test that auto-registration does not retype known attributes."""
    await client.post(ATTRIBUTES, json={"attributeName": "age", "dataType": "String"})
    await client.post("/api/v1/rules", json={"ruleName": "r", "ruleString": "age = 'x'"})

    response = await client.get(ATTRIBUTES)

    assert response.json() == [{"attributeName": "age", "dataType": "String", "allowedValues": None}]
