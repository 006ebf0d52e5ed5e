"""
AI Client for the agent weaver

Implements the completion-service contract on top of the Claude Messages API.
Retrying is left to the caller's retry policy; this client only classifies
failures (rate limit vs. everything else).
"""

import time
import uuid
from typing import Optional, Dict, Any, Protocol, runtime_checkable
import httpx
from core.config import settings as default_settings
from core.logging_config import get_logger, get_llm_logger
from .errors import ServiceError, RateLimitedError
from .models import CompletionParams

logger = get_logger(__name__)
llm_logger = get_llm_logger(__name__)


@runtime_checkable
class CompletionClient(Protocol):
    """Text-completion service consumed by the weaver"""

    async def complete(self, system_prompt: str, user_prompt: str, params: CompletionParams) -> str:
        """Return the completion text, raising RateLimitedError or ServiceError"""
        ...


class AIClient:
    """
    Client for interacting with the Claude API.

    Responsibilities:
    - Making Claude API calls
    - Managing API authentication
    - Mapping HTTP failures to RateLimitedError / ServiceError
    - Logging completion traffic
    """

    def __init__(
        self,
        anthropic_api_key: Optional[str] = None,
        settings: Any = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the AI client"""
        self.settings = settings or default_settings
        self.anthropic_api_key = anthropic_api_key or self.settings.anthropic_api_key
        self.base_url = self.settings.anthropic_base_url
        self.api_version = self.settings.anthropic_version
        self.timeout = self.settings.request_timeout
        self._transport = transport

        self.last_request_time = 0.0
        self.request_count = 0

        if not self.anthropic_api_key:
            logger.warning("No Anthropic API key provided - AI client will not function")

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.anthropic_api_key,
            "anthropic-version": self.api_version,
        }

    def _build_payload(self, system_prompt: str, user_prompt: str, params: CompletionParams) -> Dict[str, Any]:
        return {
            "model": params.model,
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
            "system": system_prompt,
            "messages": [
                {
                    "role": "user",
                    "content": user_prompt
                }
            ]
        }

    def _parse_retry_after(self, response: httpx.Response) -> Optional[float]:
        retry_after = response.headers.get("Retry-After")
        if retry_after is None:
            return None
        try:
            return float(retry_after)
        except ValueError:
            return None

    def _extract_text(self, body: Any) -> str:
        """Pull the text blocks out of a Messages API response body"""
        try:
            blocks = body["content"]
            text = "".join(
                block["text"] for block in blocks
                if isinstance(block, dict) and block.get("type", "text") == "text"
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ServiceError(f"Unexpected response format from Claude API: {e}")
        if not text:
            raise ServiceError("Empty completion returned by Claude API")
        return text

    async def complete(self, system_prompt: str, user_prompt: str, params: CompletionParams) -> str:
        """Call the Claude API and return the completion text"""
        if not self.anthropic_api_key:
            raise ServiceError("Anthropic API key is required for Claude access")

        request_id = str(uuid.uuid4())[:8]
        llm_logger.log_llm_request(
            model=params.model,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            request_id=request_id
        )

        self.last_request_time = time.time()
        self.request_count += 1
        start_time = time.time()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.base_url,
                    headers=self._build_headers(),
                    json=self._build_payload(system_prompt, user_prompt, params)
                )

            if response.status_code == 429:
                retry_after = self._parse_retry_after(response)
                logger.warning(f"Rate limit exceeded (429) for request {request_id}")
                raise RateLimitedError(
                    f"Rate limit exceeded: {response.text[:200]}",
                    retry_after=retry_after
                )

            response.raise_for_status()
            text = self._extract_text(response.json())

        except RateLimitedError as e:
            llm_logger.log_llm_error(model=params.model, error=str(e), request_id=request_id)
            raise
        except httpx.HTTPStatusError as e:
            llm_logger.log_llm_error(model=params.model, error=str(e), request_id=request_id)
            raise ServiceError(
                f"HTTP error from Claude API: {e.response.status_code}",
                status_code=e.response.status_code
            )
        except httpx.TimeoutException as e:
            llm_logger.log_llm_error(model=params.model, error=str(e), request_id=request_id)
            raise ServiceError(f"Timeout error to Claude API: {e}")
        except httpx.HTTPError as e:
            llm_logger.log_llm_error(model=params.model, error=str(e), request_id=request_id)
            raise ServiceError(f"Connection error to Claude API: {e}")
        except ValueError as e:
            # response.json() on a non-JSON body
            llm_logger.log_llm_error(model=params.model, error=str(e), request_id=request_id)
            raise ServiceError(f"Malformed response body from Claude API: {e}")
        except ServiceError as e:
            llm_logger.log_llm_error(model=params.model, error=str(e), request_id=request_id)
            raise

        llm_logger.log_llm_response(
            model=params.model,
            response=text,
            request_id=request_id,
            duration_ms=(time.time() - start_time) * 1000
        )
        return text

    def is_configured(self) -> bool:
        """Check if the AI client is properly configured"""
        return bool(self.anthropic_api_key)

    def get_model_info(self) -> dict:
        """Get information about the client configuration"""
        return {
            "base_url": self.base_url,
            "api_version": self.api_version,
            "configured": self.is_configured(),
            "request_count": self.request_count,
        }
