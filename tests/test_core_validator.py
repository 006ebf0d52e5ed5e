"""
Tests for the core validator: structural schema and compliance rules.
"""
import json
import pytest
from core.validator import (
    SchemaValidator,
    SchemaError,
    ComplianceRule,
    RuleRegistry,
    create_rule_registry,
    schema_validator,
    rule_registry,
)


def compliant_contract():
    return {
        "openapi": "3.1.0",
        "info": {
            "title": "Agent API",
            "version": "1.0.0",
            "x-agent-id": "agent-1-abc",
            "x-agent-name": "agent",
            "x-agent-type": "autoweave-agent",
            "x-anp-version": "1.0.0"
        },
        "paths": {
            "/health": {
                "get": {
                    "operationId": "getHealth",
                    "responses": {"200": {"description": "ok"}}
                }
            }
        },
        "components": {
            "securitySchemes": {
                "apiKey": {"type": "apiKey", "in": "header", "name": "X-API-Key"}
            }
        },
        "security": [{"apiKey": []}]
    }


class TestSchemaValidator:
    """Test the SchemaValidator class."""

    def test_bundled_schema_loads(self):
        """The bundled schema is a valid Draft 2020-12 schema."""
        info = schema_validator.get_schema_info()
        assert info["schema"] == "https://json-schema.org/draft/2020-12/schema"
        assert info["title"] == "Agent API Contract"

    def test_valid_contract(self):
        """A well-formed contract has no findings."""
        assert schema_validator.collect_findings(compliant_contract()) == []
        assert schema_validator.is_valid(compliant_contract())
        schema_validator.validate(compliant_contract())

    def test_wrong_openapi_version(self):
        """Only OpenAPI 3.1.x is accepted."""
        doc = compliant_contract()
        doc["openapi"] = "3.0.3"

        with pytest.raises(SchemaError) as exc_info:
            schema_validator.validate(doc)

        paths = [finding.path for finding in exc_info.value.findings]
        assert "openapi" in paths

    def test_missing_info_fields(self):
        """Info requires title and version."""
        doc = compliant_contract()
        del doc["info"]["version"]

        findings = schema_validator.collect_findings(doc)
        assert len(findings) == 1
        assert findings[0].path == "info"
        assert "version" in findings[0].message

    def test_bad_security_scheme(self):
        """apiKey schemes must say where the key goes."""
        doc = compliant_contract()
        doc["components"]["securitySchemes"]["apiKey"] = {"type": "apiKey"}

        assert not schema_validator.is_valid(doc)

    def test_bad_response_code(self):
        """Response keys must be status codes, ranges or default."""
        doc = compliant_contract()
        doc["paths"]["/health"]["get"]["responses"] = {"ok": {"description": "ok"}}

        assert not schema_validator.is_valid(doc)

    def test_findings_are_sorted_with_mixed_paths(self):
        """Findings under array and object paths can be collected together."""
        doc = compliant_contract()
        doc["servers"] = [{"description": "no url"}]
        doc["info"]["title"] = 42

        findings = schema_validator.collect_findings(doc)
        paths = [finding.path for finding in findings]
        assert "servers[0]" in paths
        assert "info.title" in paths

    def test_custom_schema_path(self, tmp_path):
        """A different schema file can be used."""
        schema_file = tmp_path / "schema.json"
        schema_file.write_text(json.dumps({
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "type": "object",
            "required": ["openapi"]
        }))

        validator = SchemaValidator(schema_path=schema_file)
        assert validator.is_valid({"openapi": "anything"})
        assert not validator.is_valid({})

    def test_finding_string(self):
        """Findings render as path and message."""
        findings = schema_validator.collect_findings({"openapi": "3.1.0"})
        assert findings
        assert str(findings[0]).startswith("root: ")

    def test_local_references_resolve(self):
        """References into the document are accepted."""
        doc = compliant_contract()
        doc["components"]["schemas"] = {"Health": {"type": "object"}}
        doc["paths"]["/health"]["get"]["responses"]["200"]["content"] = {
            "application/json": {"schema": {"$ref": "#/components/schemas/Health"}}
        }

        assert schema_validator.collect_findings(doc) == []

    @pytest.mark.parametrize("ref", [
        "#/components/schemas/DoesNotExist",
        "#/paths/~1health/get/responses/200/description/x",
        "#/security/7",
        "#missing-anchor",
    ])
    def test_dangling_reference(self, ref):
        """A reference that points nowhere in the document is a finding."""
        doc = compliant_contract()
        doc["paths"]["/health"]["get"]["responses"]["200"]["content"] = {
            "application/json": {"schema": {"$ref": ref}}
        }

        findings = schema_validator.collect_findings(doc)

        assert len(findings) == 1
        assert findings[0].code == "UNRESOLVED_REF"
        assert findings[0].meta["ref"] == ref
        assert findings[0].path.endswith("schema.$ref")

    def test_external_references_are_not_followed(self):
        doc = compliant_contract()
        doc["paths"]["/health"]["get"]["responses"]["200"]["content"] = {
            "application/json": {"schema": {"$ref": "https://example.com/schemas/health.json"}}
        }

        assert schema_validator.is_valid(doc)


class TestRuleRegistry:
    """Test the compliance rule registry."""

    def test_rule_set(self):
        """The registry holds exactly the six agent contract rules."""
        assert list(rule_registry.rules.keys()) == [
            "ANP001", "ANP002", "ANP003", "ANP004", "ANP005", "ANP006"
        ]

    def test_compliant_contract(self):
        """A compliant contract has no violations."""
        assert rule_registry.check(compliant_contract()) == []

    def test_every_violation_reported(self):
        """All failing rules are reported, in rule order."""
        violations = rule_registry.check({"openapi": "3.1.0", "info": {}, "paths": {}})

        assert [v.rule_id for v in violations] == [
            "ANP001", "ANP002", "ANP003", "ANP004", "ANP005", "ANP006"
        ]
        assert str(violations[0]) == "ANP001: Missing x-agent-id in info section"
        assert str(violations[4]) == "ANP005: No paths defined in specification"
        assert str(violations[5]) == "ANP006: No security schemes defined"

    def test_non_dict_sections(self):
        """Malformed sections count as missing rather than crashing."""
        violations = rule_registry.check({"info": "oops", "components": []})
        assert len(violations) == 6

    def test_single_missing_extension(self):
        """Removing one extension triggers exactly one rule."""
        doc = compliant_contract()
        del doc["info"]["x-anp-version"]

        violations = rule_registry.check(doc)
        assert [v.rule_id for v in violations] == ["ANP004"]
        assert violations[0].path == "info.x-anp-version"

    def test_register_rule(self):
        """Rules can be added to a fresh registry."""
        registry = RuleRegistry()
        registry.register_rule(ComplianceRule(
            id="TEST001",
            message="Missing servers",
            path="servers",
            check=lambda doc: bool(doc.get("servers"))
        ))

        assert registry.get_rule("TEST001") is not None
        assert registry.get_rule("ANP001") is None
        assert [v.rule_id for v in registry.check({})] == ["TEST001"]

    def test_create_rule_registry_is_independent(self):
        """Each call builds a new registry."""
        assert create_rule_registry() is not create_rule_registry()
