"""
Workflow Validator for the agent weaver

Turns a raw workflow object (from the completion service or the offline
generator) into a validated Workflow: fills defaults, sanitizes the name for
Kubernetes and rejects workflows that cannot be deployed.
"""

import copy
import logging
import random
import re
import string
import time
from typing import Dict, Any
from pydantic import ValidationError as PydanticValidationError
from core.config import settings as default_settings
from .errors import ValidationError
from .models import Workflow, MAX_NAME_LENGTH, is_valid_platform_name

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 1000

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9-]+")
_HYPHEN_RUNS = re.compile(r"-{2,}")
_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_workflow_id() -> str:
    """Time-based id with a short random suffix; unique on a best-effort basis"""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"agent-{int(time.time() * 1000)}-{suffix}"


def sanitize_name(name: str) -> str:
    """
    Make a name safe for Kubernetes resources.

    Lowercases, turns every run of characters outside [a-z0-9-] into one
    hyphen, collapses repeated hyphens, trims edge hyphens and truncates to
    63 characters. Idempotent.
    """
    sanitized = _INVALID_NAME_CHARS.sub("-", name.lower())
    sanitized = _HYPHEN_RUNS.sub("-", sanitized).strip("-")
    # Truncation may expose a hyphen at the cut
    return sanitized[:MAX_NAME_LENGTH].rstrip("-")


def validate_platform_name(name: Any) -> bool:
    """Raise ValidationError unless name is a valid Kubernetes resource name"""
    if not is_valid_platform_name(name):
        raise ValidationError(
            "Invalid Kubernetes name. Must start and end with alphanumeric characters, may contain hyphens",
            field="name"
        )
    return True


def validate_description(description: Any) -> bool:
    """Check an agent description before anything is generated from it"""
    if description is None or not isinstance(description, str):
        raise ValidationError("Description is required and must be a string", field="description")

    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long",
            field="description"
        )

    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters long",
            field="description"
        )

    return True


class WorkflowValidator:
    """
    Validates and enhances raw workflows.

    Responsibilities:
    - Assigning ids
    - Enforcing required fields (name, at least one module)
    - Filling defaults (description, steps, model config)
    - Sanitizing the name for the deployment platform
    """

    def __init__(self, settings: Any = None):
        self.settings = settings or default_settings

    def default_model_config(self) -> Dict[str, Any]:
        return {
            "name": self.settings.default_agent_model,
            "temperature": self.settings.default_agent_temperature,
        }

    def validate(self, raw: Dict[str, Any], original_description: str) -> Workflow:
        """
        Validate a raw workflow and return a Workflow

        Args:
            raw: Workflow object as produced by the generator; not modified
            original_description: Description the workflow was generated from

        Returns:
            A Workflow satisfying the workflow invariant

        Raises:
            ValidationError: a required field is missing or the name cannot be made valid
        """
        if not isinstance(raw, dict):
            raise ValidationError("Workflow must be a JSON object", field="workflow")

        workflow = copy.deepcopy(raw)

        # 1. id
        if not workflow.get("id"):
            workflow["id"] = generate_workflow_id()
        else:
            workflow["id"] = str(workflow["id"])

        # 2. name is required
        name = workflow.get("name")
        if not name or not isinstance(name, str):
            logger.warning("Generated workflow has no name")
            raise ValidationError("Workflow must have a name", field="name")

        # 3. description
        if not workflow.get("description"):
            workflow["description"] = original_description

        # 4. at least one module
        modules = workflow.get("requiredModules")
        if not isinstance(modules, list) or len(modules) == 0:
            logger.warning(f"Generated workflow '{name}' has no required modules")
            raise ValidationError(
                "Workflow must have at least one required module",
                field="requiredModules"
            )

        # 5. platform-safe name
        workflow["name"] = sanitize_name(name)
        if workflow["name"] != name:
            logger.debug(f"Sanitized workflow name '{name}' -> '{workflow['name']}'")

        # 6, 7. defaults
        if workflow.get("steps") is None:
            workflow["steps"] = []
        if not workflow.get("modelConfig"):
            workflow["modelConfig"] = self.default_model_config()

        # 8. sanitization can still leave nothing usable
        validate_platform_name(workflow["name"])

        try:
            validated = Workflow.model_validate(workflow)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "workflow"
            logger.warning(f"Generated workflow rejected at {field}: {error['msg']}")
            raise ValidationError(f"Invalid workflow field '{field}': {error['msg']}", field=field) from e

        logger.info(f"Validated workflow {validated.name} ({validated.id}) with {len(validated.required_modules)} module(s)")
        return validated
