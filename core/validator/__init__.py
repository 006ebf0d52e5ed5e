"""
Contract Validator Service

Structural (JSON Schema) validation and compliance rules for agent API contracts.
"""

from .models import (
    SchemaFinding,
    SchemaError,
    RuleViolation,
    ComplianceRule,
)
from .schema_validator import SchemaValidator, schema_validator
from .rules import RuleRegistry, create_rule_registry, rule_registry

__version__ = "1.0.0"
__all__ = [
    "SchemaFinding",
    "SchemaError",
    "RuleViolation",
    "ComplianceRule",
    "SchemaValidator",
    "schema_validator",
    "RuleRegistry",
    "create_rule_registry",
    "rule_registry",
]
