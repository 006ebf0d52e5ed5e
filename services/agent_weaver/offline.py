"""
Offline generator for the agent weaver

Deterministic stand-in for the completion service, used when it is not
available (no credentials, offline test runs). Workflows are built only
from the description; contracts expose a health and an execute endpoint.
"""

import copy
import logging
from typing import Dict, Any
from .contract_validator import DEFAULT_SECURITY_SCHEMES, DEFAULT_SECURITY, ERROR_SCHEMA, SUCCESS_SCHEMA
from .contract_validator import agent_server_url
from .models import Workflow, Contract, AGENT_TYPE, ANP_VERSION, OPENAPI_VERSION
from .workflow_validator import sanitize_name

logger = logging.getLogger(__name__)

FALLBACK_NAME = "agent"
NAME_WORD_COUNT = 3


class OfflineGenerator:
    """Builds workflows and contracts without calling the completion service"""

    def __init__(self, settings: Any):
        self.settings = settings

    def derive_name(self, description: str) -> str:
        """First few words of the description, sanitized"""
        words = description.split(" ")[:NAME_WORD_COUNT]
        return sanitize_name("-".join(words)) or FALLBACK_NAME

    def build_workflow(self, description: str) -> Dict[str, Any]:
        """Raw workflow for a description; still to be run through the WorkflowValidator"""
        logger.info("Building offline workflow")
        return {
            "name": self.derive_name(description),
            "description": description,
            "requiredModules": [
                {
                    "name": "file-reader",
                    "type": "file_system",
                    "description": "Read files from filesystem"
                }
            ],
            "steps": [
                {
                    "action": "process_files",
                    "description": "Process files based on description"
                }
            ],
            "modelConfig": {
                "name": self.settings.default_agent_model,
                "temperature": self.settings.default_agent_temperature
            }
        }

    def build_contract(self, workflow: Workflow) -> Contract:
        """Minimal compliant contract with /health and /execute"""
        logger.info(f"Building offline contract for {workflow.name}")
        return {
            "openapi": OPENAPI_VERSION,
            "info": {
                "title": f"{workflow.name} Agent API",
                "version": "1.0.0",
                "description": workflow.description,
                "x-agent-id": workflow.id,
                "x-agent-name": workflow.name,
                "x-agent-type": AGENT_TYPE,
                "x-anp-version": ANP_VERSION
            },
            "servers": [
                {
                    "url": agent_server_url(workflow, self.settings.agent_api_base_url),
                    "description": "AutoWeave Agent API (Offline)"
                }
            ],
            "paths": {
                "/health": {
                    "get": {
                        "summary": "Health check",
                        "operationId": "getHealth",
                        "responses": {
                            "200": {
                                "description": "Agent is healthy",
                                "content": {
                                    "application/json": {
                                        "schema": {"$ref": "#/components/schemas/Success"}
                                    }
                                }
                            }
                        }
                    }
                },
                "/execute": {
                    "post": {
                        "summary": "Execute agent workflow",
                        "operationId": "executeWorkflow",
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "object",
                                        "properties": {
                                            "input": {
                                                "type": "string",
                                                "description": "Input data for the workflow"
                                            }
                                        }
                                    }
                                }
                            }
                        },
                        "responses": {
                            "200": {
                                "description": "Workflow executed successfully",
                                "content": {
                                    "application/json": {
                                        "schema": {"$ref": "#/components/schemas/Success"}
                                    }
                                }
                            },
                            "400": {
                                "description": "Invalid input",
                                "content": {
                                    "application/json": {
                                        "schema": {"$ref": "#/components/schemas/Error"}
                                    }
                                }
                            }
                        }
                    }
                }
            },
            "components": {
                "securitySchemes": copy.deepcopy(DEFAULT_SECURITY_SCHEMES),
                "schemas": {
                    "Success": copy.deepcopy(SUCCESS_SCHEMA),
                    "Error": copy.deepcopy(ERROR_SCHEMA)
                }
            },
            "security": copy.deepcopy(DEFAULT_SECURITY)
        }
