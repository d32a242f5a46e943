"""Unit tests for RuleRepository."""

import pytest
from sqlalchemy import select

from rulecraft.core.rules import parse_rule
from rulecraft.core.rules.exceptions import DuplicateRuleError, InvalidNodeError
from rulecraft.domain.entities import Rule
from rulecraft.infrastructure.persistence.models import RuleModel
from rulecraft.infrastructure.persistence.repositories import RuleRepository


def make_rule(name, rule_string="age > 30"):
    return Rule(name=name, rule_string=rule_string, ast=parse_rule(rule_string))


@pytest.mark.asyncio
async def test_insert_and_find_by_name(db_session):
    """Test storing a rule and reading it back."""
    repository = RuleRepository(db_session)
    rule = make_rule("r1", "(a > 1 OR b = 'x') AND c <= 2.5")

    await repository.insert(rule)
    found = await repository.find_by_name("r1")

    assert found.name == "r1"
    assert found.rule_string == rule.rule_string
    assert found.ast == rule.ast


@pytest.mark.asyncio
async def test_ast_is_stored_as_document(db_session):
    """Test the stored column holds the plain document form."""
    repository = RuleRepository(db_session)
    await repository.insert(make_rule("r1"))

    result = await db_session.execute(select(RuleModel).where(RuleModel.name == "r1"))
    model = result.scalar_one()

    assert model.ast == {"type": "operand", "operator": ">", "attribute": "age", "value": 30}


@pytest.mark.asyncio
async def test_find_by_name_not_found(db_session):
    """Test that an unknown name returns None."""
    assert await RuleRepository(db_session).find_by_name("missing") is None


@pytest.mark.asyncio
async def test_find_by_names(db_session):
    """Test fetching several rules at once."""
    repository = RuleRepository(db_session)
    for name in ("a", "b", "c"):
        await repository.insert(make_rule(name))

    found = await repository.find_by_names(["c", "a", "zzz", "a"])

    assert [rule.name for rule in found] == ["a", "c"]
    assert await repository.find_by_names([]) == []


@pytest.mark.asyncio
async def test_duplicate_insert(db_session):
    """Test that the name uniqueness constraint surfaces as DuplicateRuleError."""
    repository = RuleRepository(db_session)
    await repository.insert(make_rule("r1"))
    await db_session.commit()

    with pytest.raises(DuplicateRuleError):
        await repository.insert(make_rule("r1", "age < 5"))

    found = await repository.find_by_name("r1")
    assert found.rule_string == "age > 30"


@pytest.mark.asyncio
async def test_list_all(db_session):
    """Test listing in insertion order."""
    repository = RuleRepository(db_session)
    await repository.insert(make_rule("second"))
    await repository.insert(make_rule("first"))

    assert [rule.name for rule in await repository.list_all()] == ["second", "first"]


@pytest.mark.asyncio
async def test_corrupt_ast(db_session):
    """Test that an undecodable stored tree raises InvalidNodeError."""
    db_session.add(RuleModel(name="broken", rule_string="age > 30", ast={"type": "bogus"}))
    await db_session.flush()

    with pytest.raises(InvalidNodeError):
        await RuleRepository(db_session).find_by_name("broken")


@pytest.mark.asyncio
async def test_list_all_skips_corrupt_ast(db_session):
    """Test that listing leaves out rows whose tree cannot be decoded."""
    repository = RuleRepository(db_session)
    await repository.insert(make_rule("good"))
    db_session.add(RuleModel(name="broken", rule_string="age > 30", ast={"type": "bogus"}))
    await db_session.flush()
    await repository.insert(make_rule("also_good", "city = 'Paris'"))

    assert [rule.name for rule in await repository.list_all()] == ["good", "also_good"]
