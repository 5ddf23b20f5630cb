from pydantic import BaseModel, Field

from lispy.models.value import Error, ErrorKind, Number, ResultValue, render


class EvaluationResult(BaseModel):
    expression: str = Field(..., description="The prefix expression that was evaluated.")
    output: str = Field(..., description="The rendered result, as the REPL would print it.")
    value: int | None = Field(default=None, description="The integer result when evaluation succeeded.")
    error: ErrorKind | None = Field(default=None, description="The error kind when evaluation failed.")

    @classmethod
    def from_value(cls, expression: str, result: ResultValue) -> "EvaluationResult":
        if isinstance(result, Number):
            return cls(expression=expression, output=render(result), value=result.value)
        if isinstance(result, Error):
            return cls(expression=expression, output=render(result), error=result.kind)
        raise TypeError(f"Not a result value: {result!r}")
