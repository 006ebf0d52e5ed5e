"""
Contract generation: validated Workflow -> OpenAPI 3.1 contract.
"""

import logging
from typing import Any, Dict, Optional
from .ai_client import CompletionClient
from .contract_validator import ContractValidator
from .errors import AgentWeaverError, ValidationError
from .models import Workflow, Contract, ContractOptions, GenerationMode, CompletionParams
from .offline import OfflineGenerator
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser
from .retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)


class ContractGenerator:
    """
    Synthesizes API contracts for validated workflows.

    Every call produces a new contract; drafts from the completion service
    and offline contracts both go through the ContractValidator.
    """

    def __init__(
        self,
        settings: Any,
        mode: GenerationMode,
        completion_client: Optional[CompletionClient],
        prompt_builder: PromptBuilder,
        response_parser: ResponseParser,
        validator: ContractValidator,
        offline: OfflineGenerator,
        retry_policy: RetryPolicy,
    ):
        self.settings = settings
        self.mode = mode
        self.completion_client = completion_client
        self.prompt_builder = prompt_builder
        self.response_parser = response_parser
        self.validator = validator
        self.offline = offline
        self.retry_policy = retry_policy

    def completion_params(self) -> CompletionParams:
        return CompletionParams(
            model=self.settings.completion_model,
            temperature=self.settings.contract_temperature,
            max_tokens=self.settings.completion_max_tokens,
        )

    async def generate_contract(self, workflow: Workflow, options: Optional[ContractOptions] = None) -> Contract:
        """
        Generate an OpenAPI contract for a workflow

        Raises:
            ValidationError: workflow is not a validated Workflow
            ServiceError: the completion service failed or returned garbage
            ComplianceError: the contract violates the schema or compliance rules
        """
        if not isinstance(workflow, Workflow):
            raise ValidationError("Contract generation requires a validated workflow", field="workflow")
        if options is None:
            options = ContractOptions()

        logger.info(f"Generating OpenAPI 3.1 contract for workflow: {workflow.name}")

        if self.mode == GenerationMode.OFFLINE:
            draft = self.offline.build_contract(workflow)
            return self.validator.enhance_and_validate(draft, workflow)

        try:
            draft = await with_retry(lambda: self._request_contract(workflow, options), self.retry_policy)
            contract = self.validator.enhance_and_validate(draft, workflow)
        except AgentWeaverError as e:
            logger.error(f"Failed to generate contract for {workflow.name}: {e}")
            raise

        logger.info(f"OpenAPI 3.1 contract generated for {workflow.name} with {len(contract['paths'])} path(s)")
        return contract

    async def _request_contract(self, workflow: Workflow, options: ContractOptions) -> Dict[str, Any]:
        prompt = self.prompt_builder.build_contract_prompt(workflow, options)
        response = await self.completion_client.complete(
            self.prompt_builder.contract_system_prompt,
            prompt,
            self.completion_params(),
        )
        return self.response_parser.parse_object(response, "contract")
