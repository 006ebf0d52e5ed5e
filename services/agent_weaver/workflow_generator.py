"""
Workflow generation: description -> validated Workflow.
"""

import logging
from typing import Any, Dict, Optional
from .ai_client import CompletionClient
from .errors import AgentWeaverError
from .models import Workflow, GenerationMode, CompletionParams
from .offline import OfflineGenerator
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser
from .retry import RetryPolicy, with_retry
from .workflow_validator import WorkflowValidator, validate_description

logger = logging.getLogger(__name__)


class WorkflowGenerator:
    """
    Synthesizes workflows from natural-language descriptions.

    The description is checked before anything else, so invalid input never
    reaches the completion service. In offline mode the completion service
    is never called.
    """

    def __init__(
        self,
        settings: Any,
        mode: GenerationMode,
        completion_client: Optional[CompletionClient],
        prompt_builder: PromptBuilder,
        response_parser: ResponseParser,
        validator: WorkflowValidator,
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
            temperature=self.settings.completion_temperature,
            max_tokens=self.settings.completion_max_tokens,
        )

    async def generate_workflow(self, description: str) -> Workflow:
        """
        Generate a workflow from a description

        Raises:
            ValidationError: bad description, or the generated workflow is unusable
            ServiceError: the completion service failed or returned garbage
        """
        validate_description(description)
        logger.info(f"Generating workflow from description: \"{description}\"")

        if self.mode == GenerationMode.OFFLINE:
            raw = self.offline.build_workflow(description)
            return self.validator.validate(raw, description)

        try:
            raw = await with_retry(lambda: self._request_workflow(description), self.retry_policy)
            workflow = self.validator.validate(raw, description)
        except AgentWeaverError as e:
            logger.error(f"Failed to generate workflow: {e}")
            raise

        logger.info(f"Generated workflow: {workflow.name}")
        return workflow

    async def _request_workflow(self, description: str) -> Dict[str, Any]:
        prompt = self.prompt_builder.build_workflow_prompt(description)
        response = await self.completion_client.complete(
            self.prompt_builder.workflow_system_prompt,
            prompt,
            self.completion_params(),
        )
        return self.response_parser.parse_object(response, "workflow")
