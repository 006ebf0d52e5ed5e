"""
Pytest configuration and fixtures for the agent weaver tests.
"""
import json
import pytest
from unittest.mock import Mock, AsyncMock

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.config import Settings
from services.agent_weaver.models import Workflow
from services.agent_weaver.retry import RetryPolicy


@pytest.fixture
def offline_settings():
    """Settings without an API key."""
    return Settings(
        _env_file=None,
        anthropic_api_key=None,
        generation_mode=None,
        retry_delay=0.0,
    )


@pytest.fixture
def online_settings():
    """Settings with a fake API key and no retry delay."""
    return Settings(
        _env_file=None,
        anthropic_api_key="test-key",
        generation_mode=None,
        retry_delay=0.0,
    )


@pytest.fixture
def fast_retry():
    """Three attempts with no wait between them."""
    return RetryPolicy(max_attempts=3, delay=0.0)


@pytest.fixture
def mock_completion_client():
    """Completion client whose responses are set per test."""
    client = Mock()
    client.complete = AsyncMock()
    return client


@pytest.fixture
def sample_raw_workflow():
    """Raw workflow as returned by the completion service."""
    return {
        "name": "Directory Summarizer",
        "description": "Watches a directory and summarizes new files every day",
        "requiredModules": [
            {
                "name": "file-reader",
                "type": "file_system",
                "description": "Read files from the watched directory"
            }
        ],
        "steps": [
            {
                "action": "scan_directory",
                "description": "Find files added since the last run"
            },
            {
                "action": "summarize_files",
                "description": "Summarize each new file"
            }
        ]
    }


@pytest.fixture
def sample_workflow():
    """A validated workflow."""
    return Workflow.model_validate({
        "id": "agent-1700000000000-abc123xyz",
        "name": "directory-summarizer",
        "description": "Watches a directory and summarizes new files every day",
        "requiredModules": [
            {
                "name": "file-reader",
                "type": "file_system",
                "description": "Read files from the watched directory"
            }
        ],
        "steps": [
            {
                "action": "summarize_files",
                "description": "Summarize each new file"
            }
        ],
        "modelConfig": {"name": "gpt-4", "temperature": 0.7}
    })


@pytest.fixture
def sample_contract_draft():
    """Draft contract as returned by the completion service."""
    return {
        "openapi": "3.1.0",
        "info": {
            "title": "Directory Summarizer API",
            "version": "0.1.0"
        },
        "paths": {
            "/execute/summarize_files": {
                "post": {
                    "operationId": "summarizeFiles",
                    "summary": "Summarize new files",
                    "responses": {
                        "200": {"description": "Summaries produced"}
                    }
                }
            },
            "/files": {
                "get": {
                    "operationId": "listFiles",
                    "summary": "List watched files",
                    "responses": {
                        "200": {"description": "File listing"}
                    }
                }
            }
        }
    }


@pytest.fixture
def workflow_response(sample_raw_workflow):
    """Completion text wrapping the raw workflow in a code fence."""
    return "```json\n" + json.dumps(sample_raw_workflow, indent=2) + "\n```"


@pytest.fixture
def contract_response(sample_contract_draft):
    """Completion text holding the draft contract with some prose around it."""
    return "Here is the specification:\n" + json.dumps(sample_contract_draft) + "\nLet me know if you need changes."
