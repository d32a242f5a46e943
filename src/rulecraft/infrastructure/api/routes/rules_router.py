"""API router for creating, combining and evaluating rules."""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from rulecraft.core.logging import get_logger
from rulecraft.core.rules import (
    AttributeValidationError,
    DuplicateRuleError,
    InvalidNodeError,
    Node,
    RulesNotFoundError,
    RuleSyntaxError,
    node_from_dict,
    node_to_dict,
)
from rulecraft.core.rules.evaluator import EvaluationResult
from rulecraft.infrastructure.api.dependencies import DBSession, RuleServiceDep
from rulecraft.infrastructure.api.schemas import (
    CombineRulesRequest,
    CombineRulesResponse,
    CreateRuleRequest,
    EvaluateAstRequest,
    EvaluateRuleRequest,
    EvaluationResponse,
    RuleResponse,
    RulesNotFoundResponse,
)

router = APIRouter()
logger = get_logger(__name__)


def _evaluation_response(result: EvaluationResult, rule_string: str = "") -> EvaluationResponse:
    return EvaluationResponse(
        rule_string=rule_string,
        outcome=result.outcome.value,
        result=result.display,
        reason=result.reason,
    )


def _rule_payload(name: str, rule_string: str, ast: Node) -> dict:
    # Response-model serialization caps nesting depth below that of long AND/OR chains.
    return {"name": name, "ruleString": rule_string, "ast": node_to_dict(ast)}


def _not_found(error: RulesNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(error), "missing": error.missing},
    )


@router.post(
    "",
    response_model=RuleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_rule(request: CreateRuleRequest, service: RuleServiceDep, db: DBSession):
    """Create a rule from its text.

    Unknown attributes are registered in the attribute catalog on the way.
    """
    try:
        ast = await service.create_rule(request.rule_name, request.rule_string)
    except DuplicateRuleError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (RuleSyntaxError, AttributeValidationError) as e:
        logger.info("Rule rejected", rule_name=request.rule_name, error=str(e))
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(e))

    await db.commit()
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=_rule_payload(request.rule_name, request.rule_string, ast),
    )


@router.get("", response_model=list[RuleResponse])
async def list_rules(service: RuleServiceDep):
    """List all stored rules."""
    rules = await service.list_rules()
    return JSONResponse(
        content=[_rule_payload(rule.name, rule.rule_string, rule.ast) for rule in rules]
    )


@router.post(
    "/combine",
    response_model=CombineRulesResponse,
    responses={404: {"model": RulesNotFoundResponse}},
)
async def combine_rules(request: CombineRulesRequest, service: RuleServiceDep):
    """Combine stored rules into a single tree under one operator."""
    try:
        ast = await service.combine_rules(request.rule_names, request.operator)
    except RulesNotFoundError as e:
        return _not_found(e)
    return JSONResponse(content={"ast": node_to_dict(ast)})


@router.post("/evaluate-ast", response_model=EvaluationResponse)
async def evaluate_ast(request: EvaluateAstRequest, service: RuleServiceDep):
    """Evaluate a rule tree that is not stored, e.g. a combination."""
    try:
        ast = node_from_dict(request.ast)
    except InvalidNodeError as e:
        return _evaluation_response(EvaluationResult.error(str(e)))
    return _evaluation_response(service.evaluate_ast(ast, request.data))


@router.post(
    "/{rule_name}/evaluate",
    response_model=EvaluationResponse,
    responses={404: {"model": RulesNotFoundResponse}},
)
async def evaluate_rule(rule_name: str, request: EvaluateRuleRequest, service: RuleServiceDep):
    """Evaluate a stored rule against the given record."""
    try:
        evaluation = await service.evaluate_rule(rule_name, request.data)
    except RulesNotFoundError as e:
        return _not_found(e)
    return _evaluation_response(evaluation.result, evaluation.rule_string)
