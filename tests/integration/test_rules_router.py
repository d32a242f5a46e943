"""Integration tests for the rules API."""

import pytest

from rulecraft.infrastructure.persistence.models import RuleModel

RULES = "/api/v1/rules"


async def create(client, name, rule_string):
    return await client.post(RULES, json={"ruleName": name, "ruleString": rule_string})


@pytest.mark.asyncio
class TestCreateRule:
    """Test POST /rules."""

    async def test_create_rule(self, client):
        """Test creating a rule returns its tree."""
        response = await create(client, "adult", "age > 30")

        assert response.status_code == 201
        assert response.json() == {
            "name": "adult",
            "ruleString": "age > 30",
            "ast": {"type": "operand", "operator": ">", "attribute": "age", "value": 30},
        }

    async def test_duplicate_name(self, client):
        """Test that a taken name is a conflict."""
        await create(client, "adult", "age > 30")
        response = await create(client, "adult", "age > 40")

        assert response.status_code == 409
        assert response.json()["detail"] == 'A rule with the name "adult" already exists.'

    async def test_syntax_error(self, client):
        """Test that malformed rules are rejected with the parser message."""
        response = await create(client, "bad", "(age > 30")

        assert response.status_code == 422
        assert "Expected closing parenthesis" in response.json()["detail"]

    async def test_missing_fields(self, client):
        """Test request validation."""
        response = await client.post(RULES, json={"ruleName": "x"})
        assert response.status_code == 422

    async def test_attributes_registered(self, client):
        """Test that attributes used by a rule appear in the catalog."""
        await create(client, "r", "annual_salary > 50000 AND city = 'Paris'")

        response = await client.get("/api/v1/attributes")

        assert response.status_code == 200
        assert {(a["attributeName"], a["dataType"]) for a in response.json()} == {
            ("annual_salary", "Number"),
            ("city", "String"),
        }


@pytest.mark.asyncio
async def test_list_rules(client):
    """Test GET /rules."""
    await create(client, "r1", "age > 30")
    await create(client, "r2", "city = 'Paris'")

    response = await client.get(RULES)

    assert response.status_code == 200
    assert [rule["name"] for rule in response.json()] == ["r1", "r2"]
    assert response.json()[1]["ruleString"] == "city = 'Paris'"


@pytest.mark.asyncio
class TestCombineRules:
    """Test POST /rules/combine."""

    async def test_combine(self, client):
        """Test combining two rules under AND."""
        await create(client, "r1", "age > 30")
        await create(client, "r2", "department = 'Sales'")

        response = await client.post(
            f"{RULES}/combine", json={"ruleNames": ["r1", "r2"], "operator": "AND"}
        )

        assert response.status_code == 200
        assert response.json()["ast"] == {
            "type": "operator",
            "operator": "AND",
            "left": {"type": "operand", "operator": ">", "attribute": "age", "value": 30},
            "right": {
                "type": "operand",
                "operator": "=",
                "attribute": "department",
                "value": "Sales",
            },
        }

    async def test_default_operator_is_or(self, client):
        """Test that OR is used when no operator is given."""
        await create(client, "r1", "age > 30")
        await create(client, "r2", "age < 10")

        response = await client.post(f"{RULES}/combine", json={"ruleNames": ["r1", "r2"]})

        assert response.json()["ast"]["operator"] == "OR"

    async def test_missing_rules(self, client):
        """Test that missing names are listed."""
        await create(client, "r1", "age > 30")

        response = await client.post(
            f"{RULES}/combine", json={"ruleNames": ["r1", "nope", "gone"], "operator": "AND"}
        )

        assert response.status_code == 404
        assert response.json() == {
            "detail": "The following rules do not exist: nope, gone",
            "missing": ["nope", "gone"],
        }

    async def test_invalid_operator(self, client):
        """Test that only AND and OR are accepted."""
        response = await client.post(
            f"{RULES}/combine", json={"ruleNames": ["r1"], "operator": "XOR"}
        )
        assert response.status_code == 422

    async def test_empty_names(self, client):
        """Test that at least one name is required."""
        response = await client.post(f"{RULES}/combine", json={"ruleNames": []})
        assert response.status_code == 422


@pytest.mark.asyncio
class TestEvaluateRule:
    """Test POST /rules/{name}/evaluate."""

    async def test_passed(self, client):
        """Test a passing record."""
        await create(client, "adult", "age > 30")

        response = await client.post(f"{RULES}/adult/evaluate", json={"data": {"age": 35}})

        assert response.status_code == 200
        assert response.json() == {
            "ruleString": "age > 30",
            "outcome": "passed",
            "result": "Passed Evaluation",
            "reason": None,
        }

    async def test_failed(self, client):
        """Test a failing record."""
        await create(client, "adult", "age > 30")

        response = await client.post(f"{RULES}/adult/evaluate", json={"data": {"age": 18}})

        assert response.json()["result"] == "Failed Evaluation"

    async def test_error(self, client):
        """Test a type error during evaluation."""
        await create(client, "adult", "age > 30")

        response = await client.post(f"{RULES}/adult/evaluate", json={"data": {"age": "old"}})

        body = response.json()
        assert response.status_code == 200
        assert body["outcome"] == "error"
        assert body["result"] == "Error: Operator '>' requires numeric operands"

    async def test_unknown_rule(self, client):
        """Test evaluating a rule that does not exist."""
        response = await client.post(f"{RULES}/ghost/evaluate", json={"data": {}})

        assert response.status_code == 404
        assert response.json()["missing"] == ["ghost"]


@pytest.mark.asyncio
class TestEvaluateAst:
    """Test POST /rules/evaluate-ast."""

    async def test_evaluate_combined_tree(self, client):
        """Test evaluating the output of a combination."""
        await create(client, "r1", "age > 30")
        await create(client, "r2", "department = 'Sales'")
        combined = await client.post(
            f"{RULES}/combine", json={"ruleNames": ["r1", "r2"], "operator": "AND"}
        )

        response = await client.post(
            f"{RULES}/evaluate-ast",
            json={"ast": combined.json()["ast"], "data": {"age": 40, "department": "Sales"}},
        )

        assert response.status_code == 200
        assert response.json()["outcome"] == "passed"
        assert response.json()["ruleString"] == ""

    async def test_invalid_tree(self, client):
        """Test that a malformed tree is an error outcome."""
        response = await client.post(
            f"{RULES}/evaluate-ast", json={"ast": {"type": "weird"}, "data": {}}
        )

        assert response.status_code == 200
        assert response.json()["outcome"] == "error"


@pytest.mark.asyncio
async def test_list_rules_skips_corrupt_ast(client, db_session):
    """Test that one undecodable stored tree does not break listing."""
    await create(client, "good", "age > 30")
    db_session.add(RuleModel(name="broken", rule_string="age > 1", ast={"type": "bogus"}))
    await db_session.commit()

    response = await client.get(RULES)

    assert response.status_code == 200
    assert [rule["name"] for rule in response.json()] == ["good"]


@pytest.mark.asyncio
class TestLargeRules:
    """Test rules near the length limit."""

    async def test_deep_nesting_is_rejected(self, client):
        """Test that excessive nesting is a syntax error, not a server error."""
        response = await create(client, "deep", "(" * 400 + "a = 1" + ")" * 400)

        assert response.status_code == 422
        assert "Rule nesting too deep" in response.json()["detail"]

    async def test_long_chain(self, client):
        """Test creating, listing and evaluating a long OR chain."""
        rule_string = " OR ".join(["a=1"] * 580)

        created = await create(client, "chain", rule_string)
        listed = await client.get(RULES)
        evaluated = await client.post(f"{RULES}/chain/evaluate", json={"data": {"a": 1}})

        assert created.status_code == 201
        assert created.json()["ast"]["operator"] == "OR"
        assert listed.status_code == 200
        assert evaluated.json()["outcome"] == "passed"

    async def test_evaluate_large_combination(self, client):
        """Test evaluating the tree of a large combination."""
        await create(client, "r1", "age > 30")
        combined = await client.post(
            f"{RULES}/combine", json={"ruleNames": ["r1"] * 600, "operator": "AND"}
        )

        response = await client.post(
            f"{RULES}/evaluate-ast", json={"ast": combined.json()["ast"], "data": {"age": 40}}
        )

        assert combined.status_code == 200
        assert response.status_code == 200
        assert response.json()["outcome"] == "passed"
