from typing import Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_MEDIA_TYPE = "application/problem+json"


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for match errors with a fixed status, title and code.

    Subclasses override the class attributes and pass a human readable
    ``detail``; the application handler renders them as problem responses.
    """

    status_code: int = 400
    title: str = "Bad Request"
    code: str = "bad_request"
    type: str = "about:blank"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.title)
        self.detail = detail

    def problem(self, instance: Optional[str] = None) -> ProblemDetail:
        return ProblemDetail(
            type=self.type,
            title=self.title,
            detail=self.detail,
            status=self.status_code,
            instance=instance,
            code=self.code,
        )


class MatchNotFound(DomainException):
    status_code = 404
    title = "Match not found"
    code = "match_not_found"

    def __init__(self, match_id: str) -> None:
        super().__init__(f"match '{match_id}' not found")


class MatchAlreadyComplete(DomainException):
    status_code = 409
    title = "Match complete"
    code = "match_complete"

    def __init__(self, match_id: str) -> None:
        super().__init__(f"match '{match_id}' is already complete")


def problem_response(
    problem: ProblemDetail, headers: Optional[dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(),
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
