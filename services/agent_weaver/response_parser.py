"""
Response Parser for the agent weaver

Strict parse boundary between raw completion text and structured data.
Anything that is not a JSON object becomes a ResponseParseError, which is
distinct from the semantic ValidationError raised later on.
"""

import json
import logging
from typing import Any, Dict, Optional
from .errors import ResponseParseError

logger = logging.getLogger(__name__)


class ResponseParser:
    """
    Parses completion responses into JSON objects.

    Responsibilities:
    - Stripping markdown code fences and surrounding prose
    - Decoding JSON
    - Rejecting anything that is not a JSON object
    """

    def parse_object(self, response_text: str, kind: str = "workflow") -> Dict[str, Any]:
        """
        Parse a completion response into a dict

        Args:
            response_text: Raw completion text
            kind: What the text should describe, used in the error message

        Returns:
            The decoded JSON object

        Raises:
            ResponseParseError: the text holds no decodable JSON object
        """
        if not isinstance(response_text, str):
            logger.error(f"Completion returned {type(response_text).__name__}, expected text")
            raise ResponseParseError(f"invalid {kind} structure", raw_response=None)

        cleaned = self._strip_fences(response_text)
        if "{" not in cleaned:
            logger.error(f"No JSON object found in {kind} response")
            logger.debug(f"Response content: {response_text[:1000]}")
            raise ResponseParseError(f"invalid {kind} structure", raw_response=response_text)

        parsed = self._decode_first_object(cleaned)
        if parsed is None:
            logger.error(f"JSON parsing failed for {kind} response")
            logger.debug(f"Response content: {response_text[:1000]}")
            raise ResponseParseError(f"invalid {kind} structure", raw_response=response_text)

        logger.debug(f"Parsed {kind} response with keys: {list(parsed.keys())}")
        return parsed

    def _strip_fences(self, response_text: str) -> str:
        cleaned = response_text.strip()
        if cleaned.startswith("```"):
            first_newline = cleaned.find("\n")
            cleaned = cleaned[first_newline + 1:] if first_newline != -1 else ""
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        return cleaned

    def _decode_first_object(self, text: str) -> Optional[Dict[str, Any]]:
        """
        Decode the first complete JSON object in the text.

        Decoding starts at each '{' in turn and stops at the end of the
        object, so prose before or after it (braces included) is ignored.
        """
        decoder = json.JSONDecoder()
        start = text.find("{")
        while start != -1:
            try:
                parsed, _ = decoder.raw_decode(text, start)
            except json.JSONDecodeError:
                start = text.find("{", start + 1)
                continue
            return parsed
        return None
