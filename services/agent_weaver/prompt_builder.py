"""
Prompt Builder for the agent weaver

Handles construction of the workflow prompt (description -> workflow JSON)
and the contract prompt (workflow -> OpenAPI 3.1 JSON).
"""

import json
import logging
from typing import Optional
from .models import Workflow, ContractOptions
from .templates import (
    WORKFLOW_SYSTEM_PROMPT,
    CONTRACT_SYSTEM_PROMPT,
    WORKFLOW_PROMPT,
    CONTRACT_PROMPT,
    GENERIC_STEP_ENDPOINT,
    render_module_types,
    render_module_endpoints,
    render_optional_sections,
)

logger = logging.getLogger(__name__)


class PromptBuilder:
    """
    Builds completion prompts for workflow and contract generation.

    Responsibilities:
    - Embedding the exact target JSON shape for workflows
    - Constraining module types to the closed vocabulary
    - Describing the REST surface implied by modules and steps
    - Toggling optional contract sections (examples, webhooks)

    All methods are pure: any text input is accepted.
    """

    workflow_system_prompt = WORKFLOW_SYSTEM_PROMPT
    contract_system_prompt = CONTRACT_SYSTEM_PROMPT

    def build_workflow_prompt(self, description: str) -> str:
        """Build the prompt that turns a description into a workflow"""
        prompt = WORKFLOW_PROMPT.format(
            description=description,
            module_types=render_module_types(),
        )
        logger.debug(f"Workflow prompt built ({len(prompt)} chars)")
        return prompt

    def build_contract_prompt(self, workflow: Workflow, options: Optional[ContractOptions] = None) -> str:
        """Build the prompt that turns a validated workflow into an OpenAPI contract"""
        if options is None:
            options = ContractOptions()

        modules = [module.model_dump() for module in workflow.required_modules]
        steps = [step.model_dump() for step in workflow.steps]

        prompt = CONTRACT_PROMPT.format(
            name=workflow.name,
            description=workflow.description,
            required_modules=json.dumps(modules, indent=2),
            steps=json.dumps(steps, indent=2),
            optional_sections=render_optional_sections(
                options.include_examples, options.include_webhooks
            ),
            module_endpoints=render_module_endpoints(),
            step_endpoints=self._format_step_endpoints(workflow),
        )
        logger.debug(f"Contract prompt built for {workflow.name} ({len(prompt)} chars)")
        return prompt

    def _format_step_endpoints(self, workflow: Workflow) -> str:
        """One execution endpoint per step, named after the step action"""
        if not workflow.steps:
            return GENERIC_STEP_ENDPOINT

        lines = []
        for step in workflow.steps:
            line = f"- POST /execute/{step.action}"
            if step.description:
                line += f": {step.description}"
            lines.append(line)
        return "\n".join(lines)
