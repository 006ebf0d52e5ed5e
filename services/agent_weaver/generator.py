"""
Agent Weaver Service

Turns a natural-language description into a validated agent workflow and
derives an OpenAPI 3.1 contract describing the agent's callable surface.
Generation runs in two stages; the contract stage only ever sees a workflow
that already passed validation.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union
from core.config import settings as default_settings
from core.validator import SchemaValidator
from .ai_client import AIClient, CompletionClient
from .contract_generator import ContractGenerator
from .contract_validator import ContractValidator
from .models import (
    Workflow,
    Contract,
    ContractOptions,
    Capabilities,
    Endpoint,
    GenerationMode,
)
from .offline import OfflineGenerator
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser
from .retry import RetryPolicy
from .workflow_generator import WorkflowGenerator
from .workflow_validator import WorkflowValidator

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def resolve_mode(mode: Optional[Union[GenerationMode, str]], settings: Any) -> GenerationMode:
    """
    Pick the generation mode once, at construction time.

    An explicit mode wins, then the configured generation_mode; otherwise
    the weaver runs offline exactly when no API key is configured.
    """
    if mode is not None:
        return GenerationMode(mode)
    if settings.generation_mode:
        return GenerationMode(settings.generation_mode.lower())
    if settings.anthropic_api_key:
        return GenerationMode.ONLINE
    return GenerationMode.OFFLINE


def extract_capabilities(contract: Contract) -> Capabilities:
    """Summarize a contract: endpoints, schema names, security, operation ids"""
    endpoints = []
    operations = []

    for path, path_item in (contract.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            endpoints.append(Endpoint(
                path=path,
                method=method.upper(),
                operation_id=operation.get("operationId"),
                summary=operation.get("summary"),
                description=operation.get("description"),
            ))
            operations.append(operation.get("operationId"))

    components = contract.get("components") or {}
    return Capabilities(
        endpoints=endpoints,
        schemas=list((components.get("schemas") or {}).keys()),
        security=list(contract.get("security") or []),
        operations=operations,
    )


class AgentWeaverService:
    """
    Entry point used by the surrounding orchestrator.

    Exposes:
    - generate_workflow(description)
    - generate_contract(workflow, options)
    - get_capabilities(workflow)
    - weave(description, options): both stages in order
    """

    def __init__(
        self,
        mode: Optional[Union[GenerationMode, str]] = None,
        completion_client: Optional[CompletionClient] = None,
        settings: Any = None,
        schema_validator: Optional[SchemaValidator] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        """
        Initialize the agent weaver service.

        Args:
            mode: Online or offline generation; resolved from settings when omitted
            completion_client: Completion service; an AIClient is built for online mode when omitted
            settings: Settings object, defaults to the global settings
            schema_validator: Structural contract validator, defaults to the bundled OpenAPI schema
            retry_policy: Retry policy for completion calls, defaults to the configured policy
        """
        self.settings = settings or default_settings
        self._mode = resolve_mode(mode, self.settings)

        if completion_client is None and self._mode == GenerationMode.ONLINE:
            completion_client = AIClient(settings=self.settings)
        self.completion_client = completion_client

        self.prompt_builder = PromptBuilder()
        self.response_parser = ResponseParser()
        self.workflow_validator = WorkflowValidator(self.settings)
        self.contract_validator = ContractValidator(self.settings, schema_validator=schema_validator)
        self.offline = OfflineGenerator(self.settings)
        self.retry_policy = retry_policy or RetryPolicy.from_settings(self.settings)

        self.workflow_generator = WorkflowGenerator(
            settings=self.settings,
            mode=self._mode,
            completion_client=self.completion_client,
            prompt_builder=self.prompt_builder,
            response_parser=self.response_parser,
            validator=self.workflow_validator,
            offline=self.offline,
            retry_policy=self.retry_policy,
        )
        self.contract_generator = ContractGenerator(
            settings=self.settings,
            mode=self._mode,
            completion_client=self.completion_client,
            prompt_builder=self.prompt_builder,
            response_parser=self.response_parser,
            validator=self.contract_validator,
            offline=self.offline,
            retry_policy=self.retry_policy,
        )

        logger.info(f"Agent weaver initialized in {self._mode.value} mode")

    @property
    def mode(self) -> GenerationMode:
        return self._mode

    async def generate_workflow(self, description: str) -> Workflow:
        """Generate a validated workflow from a natural-language description"""
        return await self.workflow_generator.generate_workflow(description)

    async def generate_contract(
        self,
        workflow: Workflow,
        options: Optional[Union[ContractOptions, Dict[str, Any]]] = None
    ) -> Contract:
        """Generate a new OpenAPI contract for a validated workflow"""
        if isinstance(options, dict):
            options = ContractOptions.model_validate(options)
        return await self.contract_generator.generate_contract(workflow, options)

    async def get_capabilities(self, workflow: Workflow) -> Capabilities:
        """Generate a contract for the workflow and summarize it"""
        contract = await self.generate_contract(workflow)
        capabilities = extract_capabilities(contract)
        logger.debug(f"Extracted {len(capabilities.endpoints)} endpoint(s) for {workflow.name}")
        return capabilities

    async def weave(
        self,
        description: str,
        options: Optional[Union[ContractOptions, Dict[str, Any]]] = None
    ) -> Tuple[Workflow, Contract]:
        """Run both stages: description -> workflow -> contract"""
        workflow = await self.generate_workflow(description)
        contract = await self.generate_contract(workflow, options)
        return workflow, contract

    def get_status(self) -> Dict[str, Any]:
        """Report how the weaver is configured"""
        if self._mode == GenerationMode.OFFLINE:
            configured = True
        elif isinstance(self.completion_client, AIClient):
            configured = self.completion_client.is_configured()
        else:
            configured = self.completion_client is not None

        return {
            "mode": self._mode.value,
            "model": self.settings.completion_model,
            "configured": configured,
            "retry": {
                "max_attempts": self.retry_policy.max_attempts,
                "delay": self.retry_policy.delay,
            },
        }
