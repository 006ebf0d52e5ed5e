"""
JSON Schema validation for agent API contracts
"""

import json
import logging
from typing import List, Dict, Any, Optional, Union
from jsonschema import ValidationError as JSONSchemaValidationError
from jsonschema.validators import Draft202012Validator
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from pathlib import Path

from .models import SchemaFinding, SchemaError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "openapi_schema.json"
DOCUMENT_URI = "urn:agent-contract"


def _iter_refs(node: Any, path: List[Union[str, int]]):
    """Yield (path, ref) for every string "$ref" in a JSON document"""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield path + ["$ref"], ref
        for key, value in node.items():
            if key != "$ref":
                yield from _iter_refs(value, path + [key])
    elif isinstance(node, list):
        for index, item in enumerate(node):
            yield from _iter_refs(item, path + [index])


class SchemaValidator:
    """Validates contract documents against the bundled OpenAPI 3.1 structural schema"""

    def __init__(self, schema_path: Optional[Union[str, Path]] = None):
        self.schema = None
        self.validator = None
        self._load_schema(schema_path)

    def _load_schema(self, schema_path: Optional[Union[str, Path]] = None):
        """Load the JSON schema from file or use the bundled default"""
        if schema_path is None:
            schema_path = DEFAULT_SCHEMA_PATH

        try:
            with open(schema_path, 'r') as f:
                self.schema = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load schema from {schema_path}: {e}")
            raise

        Draft202012Validator.check_schema(self.schema)
        self.validator = Draft202012Validator(self.schema)
        logger.debug(f"Schema loaded successfully from {schema_path}")

    def collect_findings(self, doc: Dict[str, Any]) -> List[SchemaFinding]:
        """
        Validate a document and return every finding

        Args:
            doc: The document to validate

        Returns:
            List of findings (empty if valid)
        """
        if self.validator is None:
            raise RuntimeError("Schema not loaded")

        errors = sorted(self.validator.iter_errors(doc), key=lambda e: [str(p) for p in e.path])
        findings = [self._convert_jsonschema_error(error) for error in errors]
        if isinstance(doc, dict):
            findings.extend(self._find_unresolved_refs(doc))
        return findings

    def _find_unresolved_refs(self, doc: Dict[str, Any]) -> List[SchemaFinding]:
        """Report every local "$ref" that does not point into the document"""
        resolver = Registry().with_resource(
            DOCUMENT_URI, Resource.opaque(doc)
        ).resolver(base_uri=DOCUMENT_URI)

        findings = []
        for path, ref in _iter_refs(doc, []):
            # External references are left to whoever serves them
            if not ref.startswith("#"):
                continue
            try:
                resolver.lookup(ref)
            except (Unresolvable, ValueError, TypeError):
                findings.append(SchemaFinding(
                    code="UNRESOLVED_REF",
                    path=self._format_error_path(path),
                    message=f"Reference {ref} does not resolve within the document",
                    meta={"ref": ref}
                ))
        return findings

    def validate(self, doc: Dict[str, Any]) -> None:
        """Raise SchemaError listing all findings when the document is invalid"""
        findings = self.collect_findings(doc)
        if findings:
            logger.warning(f"Schema validation found {len(findings)} problem(s)")
            raise SchemaError(findings)

    def is_valid(self, doc: Dict[str, Any]) -> bool:
        """Check a document without raising"""
        return not self.collect_findings(doc)

    def _convert_jsonschema_error(self, error: JSONSchemaValidationError) -> SchemaFinding:
        """Convert a JSON Schema validation error to our format"""
        return SchemaFinding(
            code="SCHEMA_VALIDATION_ERROR",
            path=self._format_error_path(error.path),
            message=error.message,
            meta={
                "schema_path": list(error.schema_path),
                "validator": error.validator
            }
        )

    def _format_error_path(self, path) -> str:
        """Dotted path with [i] for array indexes, e.g. servers[0].url"""
        if not path:
            return "root"

        pieces = [f"[{part}]" if isinstance(part, int) else f".{part}" for part in path]
        return "".join(pieces).lstrip(".")

    def get_schema_info(self) -> Dict[str, Any]:
        """Get information about the loaded schema"""
        if not self.schema:
            return {}

        return {
            "title": self.schema.get("title"),
            "description": self.schema.get("description"),
            "id": self.schema.get("$id"),
            "schema": self.schema.get("$schema"),
        }


# Global schema validator instance
schema_validator = SchemaValidator()
