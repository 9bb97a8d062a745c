from __future__ import annotations

from dataclasses import dataclass

INVALID_REQUEST = "invalid_request"
RESOURCE_NOT_FOUND = "resource_not_found"
RESOURCE_INVALID = "resource_invalid"
CONFIG_INVALID = "config_invalid"


@dataclass(frozen=True)
class ErrorDetail:
    code: str
    message: str

    def as_text(self) -> str:
        return f"{self.code}: {self.message}"


class PwScoreError(ValueError):
    """Caller, configuration, or resource problem reported with a stable code."""

    def __init__(self, code: str, message: str) -> None:
        self.code = _normalize_code(code)
        self.message = message.strip() or "unspecified error"
        super().__init__(self.message)

    def as_detail(self) -> ErrorDetail:
        return ErrorDetail(code=self.code, message=self.message)


def _normalize_code(code: str) -> str:
    out = []
    for ch in code.strip().lower():
        if ch.isalnum() or ch == "_":
            out.append(ch)
        elif ch in ("-", " ", "."):
            out.append("_")
    return "".join(out).strip("_") or INVALID_REQUEST


def make_error(code: str, message: str) -> PwScoreError:
    return PwScoreError(code=code, message=message)


def format_error_text(exc: BaseException, *, default_code: str = INVALID_REQUEST) -> str:
    if isinstance(exc, PwScoreError):
        return exc.as_detail().as_text()
    message = str(exc).strip() or "invalid request"
    return ErrorDetail(code=_normalize_code(default_code), message=message).as_text()
