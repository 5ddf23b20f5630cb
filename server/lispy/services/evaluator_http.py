from __future__ import annotations

from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from lispy.core.config import get_settings
from lispy.core.exceptions import LispyError, LispyParseError
from lispy.models.evaluation import EvaluationResult


class EvaluatorHttpError(LispyError):
    status_code = 502
    error_type = "EVALUATOR_HTTP_ERROR"


@dataclass
class EvaluatorHttpClient:
    base_url: str
    timeout: float = 5.0

    @classmethod
    def from_settings(cls) -> "EvaluatorHttpClient":
        settings = get_settings()
        if not settings.eval_http_base_url:
            raise EvaluatorHttpError("EVAL_HTTP_BASE_URL is not configured.")
        return cls(
            base_url=settings.eval_http_base_url.rstrip("/"),
            timeout=float(settings.eval_http_timeout_sec),
        )

    def evaluate(self, expression: str) -> EvaluationResult:
        query = expression.strip()
        if not query:
            raise LispyParseError("Expression cannot be empty.")

        url = f"{self.base_url}/eval"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, params={"query": query})
        except httpx.RequestError as exc:
            raise EvaluatorHttpError("Evaluator service is unavailable.") from exc

        if response.status_code != 200:
            message = "Evaluator request failed."
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict):
                error = payload.get("error")
                if isinstance(error, dict):
                    message = error.get("message", message)
            if response.status_code == 400:
                raise LispyParseError(message)
            raise EvaluatorHttpError(message)

        try:
            payload = response.json()
        except ValueError as exc:
            raise EvaluatorHttpError("Evaluator response was not valid JSON.") from exc

        try:
            return EvaluationResult.model_validate(payload)
        except ValidationError as exc:
            raise EvaluatorHttpError("Evaluator response was invalid.") from exc
