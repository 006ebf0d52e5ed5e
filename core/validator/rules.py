"""
Compliance rules for generated agent API contracts
"""

from typing import List, Dict, Any, Optional
from .models import ComplianceRule, RuleViolation


class RuleRegistry:
    """Registry for contract compliance rules"""

    def __init__(self):
        self.rules: Dict[str, ComplianceRule] = {}

    def register_rule(self, rule: ComplianceRule):
        """Register a new rule"""
        self.rules[rule.id] = rule

    def get_rule(self, rule_id: str) -> Optional[ComplianceRule]:
        """Get a specific rule by ID"""
        return self.rules.get(rule_id)

    def check(self, doc: Dict[str, Any]) -> List[RuleViolation]:
        """Evaluate every rule and return all violations, in registration order"""
        violations = []
        for rule in self.rules.values():
            violation = rule.evaluate(doc)
            if violation is not None:
                violations.append(violation)
        return violations


def _info(doc: Dict[str, Any]) -> Dict[str, Any]:
    info = doc.get("info")
    return info if isinstance(info, dict) else {}


def _has_info_extension(name: str):
    def check(doc: Dict[str, Any]) -> bool:
        return bool(_info(doc).get(name))
    return check


def _has_paths(doc: Dict[str, Any]) -> bool:
    paths = doc.get("paths")
    return isinstance(paths, dict) and len(paths) > 0


def _has_security_schemes(doc: Dict[str, Any]) -> bool:
    components = doc.get("components")
    if not isinstance(components, dict):
        return False
    return bool(components.get("securitySchemes"))


def create_rule_registry() -> RuleRegistry:
    """Create the registry holding the closed set of contract compliance rules"""
    registry = RuleRegistry()

    registry.register_rule(ComplianceRule(
        id="ANP001",
        message="Missing x-agent-id in info section",
        path="info.x-agent-id",
        check=_has_info_extension("x-agent-id"),
        docs="/rules/ANP001",
        tags=["metadata"]
    ))

    registry.register_rule(ComplianceRule(
        id="ANP002",
        message="Missing x-agent-name in info section",
        path="info.x-agent-name",
        check=_has_info_extension("x-agent-name"),
        docs="/rules/ANP002",
        tags=["metadata"]
    ))

    registry.register_rule(ComplianceRule(
        id="ANP003",
        message="Missing x-agent-type in info section",
        path="info.x-agent-type",
        check=_has_info_extension("x-agent-type"),
        docs="/rules/ANP003",
        tags=["metadata"]
    ))

    registry.register_rule(ComplianceRule(
        id="ANP004",
        message="Missing x-anp-version in info section",
        path="info.x-anp-version",
        check=_has_info_extension("x-anp-version"),
        docs="/rules/ANP004",
        tags=["metadata"]
    ))

    registry.register_rule(ComplianceRule(
        id="ANP005",
        message="No paths defined in specification",
        path="paths",
        check=_has_paths,
        docs="/rules/ANP005",
        tags=["surface"]
    ))

    registry.register_rule(ComplianceRule(
        id="ANP006",
        message="No security schemes defined",
        path="components.securitySchemes",
        check=_has_security_schemes,
        docs="/rules/ANP006",
        tags=["security"]
    ))

    return registry


# Global rule registry instance
rule_registry = create_rule_registry()
