"""
Data models for the agent weaver service.
"""

import re
from enum import Enum
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Kubernetes resource name constraint (RFC 1123 label)
PLATFORM_NAME_PATTERN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
MAX_NAME_LENGTH = 63

AGENT_TYPE = "autoweave-agent"
ANP_VERSION = "1.0.0"
OPENAPI_VERSION = "3.1.0"

# A contract is an OpenAPI 3.1 document kept as plain JSON data
Contract = Dict[str, Any]


class GenerationMode(str, Enum):
    """How the weaver produces workflows and contracts"""
    ONLINE = "online"
    OFFLINE = "offline"


class ModuleType(str, Enum):
    """Closed vocabulary of module types offered to the completion service"""
    FILE_SYSTEM = "file_system"
    KUBERNETES = "kubernetes"
    CODING_ASSISTANT = "coding_assistant"
    MONITORING = "monitoring"
    MCP_SERVER = "mcp_server"


def is_valid_platform_name(name: Any) -> bool:
    """Check a name against the platform naming constraint"""
    return (
        isinstance(name, str)
        and len(name) <= MAX_NAME_LENGTH
        and PLATFORM_NAME_PATTERN.fullmatch(name) is not None
    )


class RequiredModule(BaseModel):
    """A capability module the agent needs"""

    name: str = Field(..., description="Module name")
    type: str = Field(..., description="Module type, normally one of ModuleType")
    description: str = Field(default="", description="What this module does")


class WorkflowStep(BaseModel):
    """One logical step of the agent workflow"""

    action: str = Field(..., description="Action identifier")
    description: str = Field(default="", description="What this step does")


class ModelConfig(BaseModel):
    """Model settings for the deployed agent"""

    name: str = Field(default="gpt-4", description="Model name")
    temperature: float = Field(default=0.7, description="Sampling temperature")


class Workflow(BaseModel):
    """
    A validated agent workflow.

    Instances always satisfy the workflow invariant: the name is a valid
    platform name and there is at least one required module. Unknown keys
    added by downstream collaborators are kept.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., description="Opaque workflow identifier")
    name: str = Field(..., description="Platform-safe agent name")
    description: str = Field(..., description="Free text description of the agent")
    required_modules: List[RequiredModule] = Field(
        ...,
        alias="requiredModules",
        min_length=1,
        description="Modules the agent needs, at least one"
    )
    steps: List[WorkflowStep] = Field(
        default_factory=list,
        description="Ordered workflow steps"
    )
    llm_config: ModelConfig = Field(
        default_factory=ModelConfig,
        alias="modelConfig",
        description="Model settings for the agent"
    )

    @field_validator("name")
    @classmethod
    def _check_platform_name(cls, value: str) -> str:
        if not is_valid_platform_name(value):
            raise ValueError(
                "Invalid Kubernetes name. Must start and end with alphanumeric characters, may contain hyphens"
            )
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation with camelCase keys"""
        return self.model_dump(by_alias=True)


class ContractOptions(BaseModel):
    """Options for contract generation"""

    model_config = ConfigDict(populate_by_name=True)

    include_examples: bool = Field(
        default=True,
        alias="includeExamples",
        description="Ask for request/response examples on each endpoint"
    )
    include_webhooks: bool = Field(
        default=False,
        alias="includeWebhooks",
        description="Ask for webhook callbacks for async operations"
    )


class CompletionParams(BaseModel):
    """Parameters passed to the completion service"""

    model: str
    temperature: float = 0.7
    max_tokens: int = 4000


class Endpoint(BaseModel):
    """A single path/method pair of a contract"""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    method: str
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    summary: Optional[str] = None
    description: Optional[str] = None


class Capabilities(BaseModel):
    """Read-only summary of a contract"""

    endpoints: List[Endpoint] = Field(default_factory=list)
    schemas: List[str] = Field(default_factory=list)
    security: List[Dict[str, List[str]]] = Field(default_factory=list)
    operations: List[Optional[str]] = Field(default_factory=list)
