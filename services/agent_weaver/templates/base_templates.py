"""
Base prompt templates for the agent weaver.

These templates define the structure and content of the prompts sent to the
completion service. They use Python string formatting placeholders that are
filled in by the PromptBuilder.
"""

WORKFLOW_SYSTEM_PROMPT = (
    "You are an expert AI agent architect that converts natural language descriptions "
    "into structured agent workflows for Kubernetes deployment via kagent."
)

CONTRACT_SYSTEM_PROMPT = (
    "You are an expert API architect that converts agent workflows into valid OpenAPI 3.1 "
    "specifications. Generate complete, valid OpenAPI specs that describe agent capabilities "
    "as RESTful APIs."
)

# Closed vocabulary of module types, in prompt order
MODULE_TYPE_DESCRIPTIONS = {
    "file_system": "For reading/writing files",
    "kubernetes": "For Kubernetes operations",
    "coding_assistant": "For code analysis and generation",
    "monitoring": "For system monitoring",
    "mcp_server": "For custom MCP server integration",
}

# Conventional REST surface implied by each module type
MODULE_ENDPOINTS = {
    "file_system": "/files (GET, POST, PUT, DELETE)",
    "kubernetes": "/k8s/resources (GET, POST, PUT, DELETE)",
    "coding_assistant": "/code/analyze, /code/generate",
    "monitoring": "/metrics, /health",
    "mcp_server": "/mcp/tools, /mcp/execute",
}

WORKFLOW_PROMPT = """
Convert the following natural language description into a structured agent workflow.

Description: "{description}"

Return a JSON object with this exact structure:
{{
    "id": "unique-id",
    "name": "agent-name",
    "description": "detailed description",
    "requiredModules": [
        {{
            "name": "module-name",
            "type": "module-type",
            "description": "what this module does"
        }}
    ],
    "steps": [
        {{
            "action": "action-name",
            "description": "what this step does"
        }}
    ],
    "modelConfig": {{
        "name": "gpt-4",
        "temperature": 0.7
    }}
}}

Available module types:
{module_types}

Guidelines:
1. Generate a unique ID using timestamp
2. Create a descriptive but concise name (lowercase, hyphens only)
3. Break down the task into logical steps
4. Choose appropriate modules based on the description, using ONLY the module types listed above
5. Ensure the workflow is executable and complete

Return only the JSON object, no additional text.
"""

CONTRACT_PROMPT = """
Convert the following agent workflow into a valid OpenAPI 3.1 specification.

Workflow Details:
- Name: {name}
- Description: {description}
- Required Modules: {required_modules}
- Steps: {steps}

Generate a complete OpenAPI 3.1 specification with:

1. **Info Section**: title, version, description
2. **Server**: Base URL for the agent API
3. **Paths**: REST endpoints for each workflow step/capability
4. **Components**: Schemas for request/response models
5. **Security**: API key authentication
{optional_sections}
For each required module, create appropriate REST endpoints:
{module_endpoints}

For each workflow step, create an execution endpoint:
{step_endpoints}

Ensure the specification is:
- Valid OpenAPI 3.1 format
- Uses proper HTTP methods and status codes
- Includes comprehensive schema definitions
- Has security schemes defined
- Contains detailed descriptions

Return only the JSON specification, no additional text.
"""

EXAMPLES_SECTION = "6. **Examples**: Request/response examples for each endpoint"
WEBHOOKS_SECTION = "7. **Webhooks**: Callback endpoints for async operations"
GENERIC_STEP_ENDPOINT = "- POST /execute/{step-action}"


def render_module_types() -> str:
    """Render the closed module-type vocabulary as a bullet list"""
    return "\n".join(f"- {name}: {text}" for name, text in MODULE_TYPE_DESCRIPTIONS.items())


def render_module_endpoints() -> str:
    """Render the REST surface implied by every module type"""
    return "\n".join(f"- {name}: {paths}" for name, paths in MODULE_ENDPOINTS.items())


def render_optional_sections(include_examples: bool, include_webhooks: bool) -> str:
    sections = []
    if include_examples:
        sections.append(EXAMPLES_SECTION)
    if include_webhooks:
        sections.append(WEBHOOKS_SECTION)
    if not sections:
        return ""
    return "\n".join(sections) + "\n"
