"""
Agent Weaver Package

Turns natural-language descriptions into validated agent workflows and
OpenAPI 3.1 contracts, using Claude AI or the offline generator.
"""

from .generator import AgentWeaverService, extract_capabilities
from .workflow_generator import WorkflowGenerator
from .contract_generator import ContractGenerator
from .prompt_builder import PromptBuilder
from .ai_client import AIClient, CompletionClient
from .response_parser import ResponseParser
from .workflow_validator import WorkflowValidator, sanitize_name, validate_platform_name, validate_description
from .contract_validator import ContractValidator
from .offline import OfflineGenerator
from .retry import RetryPolicy, with_retry, is_rate_limit_error
from .errors import (
    AgentWeaverError,
    ValidationError,
    ServiceError,
    RateLimitedError,
    ResponseParseError,
    ComplianceError,
)
from .models import (
    Workflow,
    RequiredModule,
    WorkflowStep,
    ModelConfig,
    Contract,
    ContractOptions,
    CompletionParams,
    Capabilities,
    Endpoint,
    GenerationMode,
    ModuleType,
)

__all__ = [
    'AgentWeaverService',
    'extract_capabilities',
    'WorkflowGenerator',
    'ContractGenerator',
    'PromptBuilder',
    'AIClient',
    'CompletionClient',
    'ResponseParser',
    'WorkflowValidator',
    'sanitize_name',
    'validate_platform_name',
    'validate_description',
    'ContractValidator',
    'OfflineGenerator',
    'RetryPolicy',
    'with_retry',
    'is_rate_limit_error',
    'AgentWeaverError',
    'ValidationError',
    'ServiceError',
    'RateLimitedError',
    'ResponseParseError',
    'ComplianceError',
    'Workflow',
    'RequiredModule',
    'WorkflowStep',
    'ModelConfig',
    'Contract',
    'ContractOptions',
    'CompletionParams',
    'Capabilities',
    'Endpoint',
    'GenerationMode',
    'ModuleType',
]
