"""
Services package for the agent weaver.
"""

from .agent_weaver import AgentWeaverService

__all__ = [
    "AgentWeaverService",
]
