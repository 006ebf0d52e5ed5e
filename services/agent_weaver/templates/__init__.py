"""
Templates package for agent weaver prompts.

Contains the workflow and contract prompt templates and the module-type vocabulary.
"""

from .base_templates import (
    WORKFLOW_SYSTEM_PROMPT,
    CONTRACT_SYSTEM_PROMPT,
    WORKFLOW_PROMPT,
    CONTRACT_PROMPT,
    MODULE_TYPE_DESCRIPTIONS,
    MODULE_ENDPOINTS,
    GENERIC_STEP_ENDPOINT,
    render_module_types,
    render_module_endpoints,
    render_optional_sections,
)

__all__ = [
    'WORKFLOW_SYSTEM_PROMPT',
    'CONTRACT_SYSTEM_PROMPT',
    'WORKFLOW_PROMPT',
    'CONTRACT_PROMPT',
    'MODULE_TYPE_DESCRIPTIONS',
    'MODULE_ENDPOINTS',
    'GENERIC_STEP_ENDPOINT',
    'render_module_types',
    'render_module_endpoints',
    'render_optional_sections',
]
