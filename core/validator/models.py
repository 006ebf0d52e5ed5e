"""
Type definitions for contract schema validation and compliance rules
"""

from typing import List, Dict, Any, Optional, Callable
from dataclasses import dataclass, field


@dataclass
class SchemaFinding:
    """A structural problem found by JSON Schema validation"""
    code: str
    path: str
    message: str
    meta: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class SchemaError(Exception):
    """Raised when a document is not structurally valid"""

    def __init__(self, findings: List[SchemaFinding]):
        self.findings = findings
        details = "; ".join(str(f) for f in findings)
        super().__init__(f"Schema validation failed: {details}")


@dataclass
class RuleViolation:
    """A compliance rule that a document does not satisfy"""
    rule_id: str
    message: str
    path: str

    def __str__(self) -> str:
        return f"{self.rule_id}: {self.message}"


@dataclass
class ComplianceRule:
    """A closed, locally-checked structural requirement on a contract"""
    id: str
    message: str
    path: str
    check: Callable[[Dict[str, Any]], bool]
    docs: str = ""
    tags: List[str] = field(default_factory=list)

    def evaluate(self, doc: Dict[str, Any]) -> Optional[RuleViolation]:
        """Return a violation when the document fails this rule"""
        if self.check(doc):
            return None
        return RuleViolation(rule_id=self.id, message=self.message, path=self.path)
