"""
Error taxonomy for the agent weaver.

ValidationError   - bad input to the weaver; never retried.
ServiceError      - the completion service failed or returned unusable output.
RateLimitedError  - the completion service asked us to slow down; retryable.
ResponseParseError - the completion service returned text that is not the expected JSON object.
ComplianceError   - a synthesized contract violates the compliance rule set; never retried.
"""

from typing import List, Optional


class AgentWeaverError(Exception):
    """Base class for every error raised by the agent weaver"""
    pass


class ValidationError(AgentWeaverError):
    """Invalid input, with the offending field named"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {"error": str(self), "field": self.field, "type": "validation_error"}


class ServiceError(AgentWeaverError):
    """The completion dependency returned unusable output or failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(ServiceError):
    """The completion dependency rejected the call with a rate limit"""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: Optional[float] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after
        self.code = "rate_limit_exceeded"


class ResponseParseError(ServiceError):
    """The completion dependency returned text that could not be parsed"""

    def __init__(self, message: str, raw_response: Optional[str] = None):
        super().__init__(message)
        self.raw_response = raw_response


class ComplianceError(AgentWeaverError):
    """A generated contract violates one or more compliance rules"""

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(
            f"Contract compliance validation failed: {', '.join(self.violations)}"
        )

    def to_dict(self) -> dict:
        return {"error": str(self), "violations": self.violations, "type": "compliance_error"}
