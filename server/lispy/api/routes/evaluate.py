from fastapi import APIRouter, Depends, Query

from lispy.models.evaluation import EvaluationResult
from lispy.services.evaluator import EvaluatorService

router = APIRouter(tags=["evaluate"])


def get_evaluator_service() -> EvaluatorService:
    return EvaluatorService.from_settings()


@router.get("/eval", response_model=EvaluationResult)
async def evaluate_expression(
    query: str = Query(..., description="Prefix arithmetic expression to evaluate, e.g. '+ 1 (* 2 3)'."),
    service: EvaluatorService = Depends(get_evaluator_service),
) -> EvaluationResult:
    return service.evaluate(query)
