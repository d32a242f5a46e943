"""API Schemas for request/response validation."""

from rulecraft.infrastructure.api.schemas.attribute_schemas import (
    AttributeResponse,
    CreateAttributeRequest,
)
from rulecraft.infrastructure.api.schemas.rule_schemas import (
    CombineRulesRequest,
    CombineRulesResponse,
    CreateRuleRequest,
    EvaluateAstRequest,
    EvaluateRuleRequest,
    EvaluationResponse,
    RuleResponse,
    RulesNotFoundResponse,
)

__all__ = [
    "AttributeResponse",
    "CombineRulesRequest",
    "CombineRulesResponse",
    "CreateAttributeRequest",
    "CreateRuleRequest",
    "EvaluateAstRequest",
    "EvaluateRuleRequest",
    "EvaluationResponse",
    "RuleResponse",
    "RulesNotFoundResponse",
]
