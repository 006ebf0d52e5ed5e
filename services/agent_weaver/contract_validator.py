"""
Contract Validator for the agent weaver

Enhances a draft OpenAPI contract with the metadata every agent contract
carries, then checks it twice: once against the structural OpenAPI schema
and once against the closed set of compliance rules. All problems from
both checks are reported together in one ComplianceError.
"""

import copy
import logging
from typing import Dict, Any, List, Optional
from core.config import settings as default_settings
from core.validator import SchemaError, SchemaValidator, RuleRegistry
from core.validator import schema_validator as default_schema_validator
from core.validator import rule_registry as default_rule_registry
from .errors import ComplianceError
from .models import Workflow, Contract, AGENT_TYPE, ANP_VERSION, OPENAPI_VERSION

logger = logging.getLogger(__name__)

DEFAULT_SECURITY_SCHEMES = {
    "apiKey": {
        "type": "apiKey",
        "in": "header",
        "name": "X-API-Key"
    },
    "bearerAuth": {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT"
    }
}

DEFAULT_SECURITY = [
    {"apiKey": []},
    {"bearerAuth": []}
]

ERROR_SCHEMA = {
    "type": "object",
    "properties": {
        "error": {
            "type": "string",
            "description": "Error message"
        },
        "code": {
            "type": "integer",
            "description": "Error code"
        },
        "timestamp": {
            "type": "string",
            "format": "date-time",
            "description": "Error timestamp"
        }
    },
    "required": ["error", "timestamp"]
}

SUCCESS_SCHEMA = {
    "type": "object",
    "properties": {
        "success": {
            "type": "boolean",
            "description": "Operation success status"
        },
        "data": {
            "type": "object",
            "description": "Response data"
        },
        "timestamp": {
            "type": "string",
            "format": "date-time",
            "description": "Response timestamp"
        }
    },
    "required": ["success", "timestamp"]
}


def agent_server_url(workflow: Workflow, base_url: str) -> str:
    """Local endpoint serving the agent's API"""
    return f"{base_url.rstrip('/')}/{workflow.id}"


class ContractValidator:
    """
    Enhances and validates generated contracts.

    Responsibilities:
    - Filling info, servers, security and common schemas
    - Injecting the agent metadata extensions from the workflow
    - Structural validation through the schema validator
    - Compliance validation through the rule registry
    """

    def __init__(
        self,
        settings: Any = None,
        schema_validator: Optional[SchemaValidator] = None,
        rules: Optional[RuleRegistry] = None,
    ):
        self.settings = settings or default_settings
        self.schema_validator = schema_validator or default_schema_validator
        self.rules = rules or default_rule_registry

    def enhance(self, draft: Dict[str, Any], workflow: Workflow) -> Contract:
        """
        Return a copy of the draft with all required metadata filled in.

        Only blank or absent values are filled; the agent extensions always
        mirror the workflow. Enhancing an enhanced contract changes nothing.
        """
        spec = copy.deepcopy(draft) if isinstance(draft, dict) else {}

        if not spec.get("openapi"):
            spec["openapi"] = OPENAPI_VERSION

        info = spec.get("info")
        if not isinstance(info, dict):
            info = spec["info"] = {}

        info["title"] = info.get("title") or f"{workflow.name} Agent API"
        info["version"] = info.get("version") or "1.0.0"
        info["description"] = info.get("description") or workflow.description

        info["x-agent-id"] = workflow.id
        info["x-agent-name"] = workflow.name
        info["x-agent-type"] = AGENT_TYPE
        info["x-anp-version"] = ANP_VERSION

        if not spec.get("servers"):
            spec["servers"] = [
                {
                    "url": agent_server_url(workflow, self.settings.agent_api_base_url),
                    "description": "AutoWeave Agent API"
                }
            ]

        components = spec.get("components")
        if not isinstance(components, dict):
            components = spec["components"] = {}

        if not components.get("securitySchemes"):
            components["securitySchemes"] = copy.deepcopy(DEFAULT_SECURITY_SCHEMES)

        if spec.get("security") is None:
            spec["security"] = copy.deepcopy(DEFAULT_SECURITY)

        schemas = components.get("schemas")
        if not isinstance(schemas, dict):
            schemas = components["schemas"] = {}
        if "Error" not in schemas:
            schemas["Error"] = copy.deepcopy(ERROR_SCHEMA)
        if "Success" not in schemas:
            schemas["Success"] = copy.deepcopy(SUCCESS_SCHEMA)

        return spec

    def collect_violations(self, contract: Contract) -> List[str]:
        """Run both checks and return every problem found"""
        violations = []

        try:
            self.schema_validator.validate(contract)
        except SchemaError as e:
            violations.extend(f"Schema {finding}" for finding in e.findings)

        violations.extend(str(violation) for violation in self.rules.check(contract))
        return violations

    def validate(self, contract: Contract) -> Contract:
        """Raise ComplianceError listing every violation, else return the contract"""
        violations = self.collect_violations(contract)
        if violations:
            logger.error(f"Contract failed validation with {len(violations)} violation(s): {violations}")
            raise ComplianceError(violations)

        logger.debug("Contract validation passed")
        return contract

    def enhance_and_validate(self, draft: Dict[str, Any], workflow: Workflow) -> Contract:
        """Enhance a draft contract for a workflow and validate the result"""
        contract = self.enhance(draft, workflow)
        return self.validate(contract)
