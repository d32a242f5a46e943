"""Pydantic schemas for the rules API."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class CreateRuleRequest(BaseModel):
    """Request body for creating a rule."""

    model_config = ConfigDict(populate_by_name=True)

    rule_name: str = Field(..., alias="ruleName", min_length=1, max_length=255)
    rule_string: str = Field(..., alias="ruleString", min_length=1)


class RuleResponse(BaseModel):
    """A stored rule."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    rule_string: str = Field(..., serialization_alias="ruleString")
    ast: dict[str, Any]


class CombineRulesRequest(BaseModel):
    """Request body for combining rules."""

    model_config = ConfigDict(populate_by_name=True)

    rule_names: list[str] = Field(..., alias="ruleNames", min_length=1)
    operator: Literal["AND", "OR"] = "OR"


class CombineRulesResponse(BaseModel):
    """Combined rule tree."""

    ast: dict[str, Any]


class EvaluateRuleRequest(BaseModel):
    """Request body for evaluating a stored rule."""

    data: dict[str, Any] = Field(default_factory=dict)


class EvaluateAstRequest(BaseModel):
    """Request body for evaluating an unstored rule tree."""

    ast: dict[str, Any]
    data: dict[str, Any] = Field(default_factory=dict)


class EvaluationResponse(BaseModel):
    """Outcome of an evaluation."""

    rule_string: str = Field("", serialization_alias="ruleString")
    outcome: Literal["passed", "failed", "error"]
    result: str = Field(..., description="Display form, e.g. 'Passed Evaluation'")
    reason: str | None = None


class RulesNotFoundResponse(BaseModel):
    """Error body listing rules that do not exist."""

    detail: str
    missing: list[str]
