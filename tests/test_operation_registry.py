"""
Tests for OperationRegistry - registration, lookup and call validation.
"""

import pytest

from transformer.config.settings import set_flag
from transformer.models.program import ContextKeyLink, OperationCall, OperationParam
from transformer.registry.operation_registry import (
    DuplicateDefinitionError,
    MalformedSchemaError,
    OperationDefinition,
    OperationRegistry,
    ParameterSpec,
    UnknownOperationError,
)


async def _noop(capabilities, call, params):
    return None


def make_definition(op_id="greet", schema=None, validate_params=None, tags=None):
    """Build a definition with a no-op implementation."""
    if schema is None:
        schema = [
            ParameterSpec(name="name", type="string", description="Who to greet", required=True),
            ParameterSpec(name="loud", type="boolean", description="Shout", required=False),
        ]
    return OperationDefinition(
        id=op_id,
        description=f"{op_id} operation",
        implementation=_noop,
        parameter_schema=schema,
        validate_params=validate_params,
        tags=tags or [],
    )


def make_call(op_def_id="greet", params=None):
    return OperationCall(call_id=f"test.{op_def_id}", op_def_id=op_def_id, params=params or [])


# ============================================================================
# Registration Tests
# ============================================================================

class TestRegistration:
    """Test registering definitions."""

    def test_register_and_get(self, registry):
        definition = make_definition()
        registry.register(definition)

        assert registry.get("greet") is definition
        assert registry.exists("greet")
        assert "greet" in registry
        assert len(registry) == 1

    def test_get_unknown_returns_none(self, registry):
        assert registry.get("missing") is None
        assert not registry.exists("missing")

    def test_duplicate_raises_and_keeps_original(self, registry):
        original = make_definition()
        registry.register(original)

        with pytest.raises(DuplicateDefinitionError, match="already registered"):
            registry.register(make_definition())

        assert registry.get("greet") is original
        assert len(registry) == 1

    def test_register_all(self, registry):
        registry.register_all([make_definition("a"), make_definition("b")])
        assert registry.ids() == ["a", "b"]

    def test_missing_parameter_name_rejected(self, registry):
        schema = [ParameterSpec(name="", type="string")]
        with pytest.raises(MalformedSchemaError, match="Invalid parameter schema"):
            registry.register(make_definition(schema=schema))
        assert not registry.exists("greet")

    def test_missing_parameter_type_rejected(self, registry):
        schema = [ParameterSpec(name="x", type="")]
        with pytest.raises(MalformedSchemaError):
            registry.register(make_definition(schema=schema))

    def test_unknown_parameter_type_rejected(self, registry):
        schema = [ParameterSpec(name="x", type="object")]
        with pytest.raises(MalformedSchemaError, match="Invalid parameter type"):
            registry.register(make_definition(schema=schema))

    def test_duplicate_parameter_name_rejected(self, registry):
        schema = [
            ParameterSpec(name="x", type="string"),
            ParameterSpec(name="x", type="number"),
        ]
        with pytest.raises(MalformedSchemaError, match="Duplicate parameter"):
            registry.register(make_definition(schema=schema))

    def test_default_value_must_match_type(self, registry):
        schema = [ParameterSpec(name="count", type="number", default_value="three")]
        with pytest.raises(MalformedSchemaError, match="not a number"):
            registry.register(make_definition(schema=schema))

    def test_boolean_default_is_not_a_number(self, registry):
        schema = [ParameterSpec(name="count", type="number", default_value=True)]
        with pytest.raises(MalformedSchemaError):
            registry.register(make_definition(schema=schema))

    def test_empty_id_rejected(self, registry):
        with pytest.raises(MalformedSchemaError, match="id is required"):
            registry.register(make_definition(op_id=""))

    def test_registries_are_independent(self):
        first = OperationRegistry()
        second = OperationRegistry()
        first.register(make_definition())

        assert second.get("greet") is None
        second.register(make_definition())


# ============================================================================
# Listing and Documentation Tests
# ============================================================================

class TestListing:
    """Test listing and documentation helpers."""

    def test_list_filters_by_tag(self, registry):
        registry.register(make_definition("a", tags=["ui"]))
        registry.register(make_definition("b", tags=["context"]))

        assert [d.id for d in registry.list()] == ["a", "b"]
        assert [d.id for d in registry.list(tag="ui")] == ["a"]

    def test_operation_docs(self, registry):
        registry.register(make_definition())
        docs = registry.get_operation_docs("greet")

        assert docs["id"] == "greet"
        assert docs["input_schema"]["required"] == ["name"]
        assert docs["input_schema"]["properties"]["loud"]["type"] == "boolean"

    def test_operation_docs_unknown_raises(self, registry):
        with pytest.raises(UnknownOperationError):
            registry.get_operation_docs("missing")

    def test_schema_lists_every_operation(self, registry):
        registry.register_all([make_definition("a"), make_definition("b")])
        schema = registry.get_schema()

        consts = [s["properties"]["op_def_id"]["const"] for s in schema["oneOf"]]
        assert consts == ["a", "b"]


# ============================================================================
# Call Validation Tests
# ============================================================================

class TestValidateCall:
    """Test validate_call error-as-value reporting."""

    def test_valid_call(self, registry):
        registry.register(make_definition())
        call = make_call(params=[OperationParam(name="name", value="Ada")])

        assert registry.validate_call(call) is None

    def test_unknown_operation(self, registry):
        message = registry.validate_call(make_call("missing"))
        assert message == "Unknown operation type: missing"

    def test_missing_required_parameter(self, registry):
        registry.register(make_definition())
        message = registry.validate_call(make_call(params=[OperationParam(name="loud", value=True)]))

        assert message == "Missing required parameter: name"

    def test_required_parameter_with_default_may_be_omitted(self, registry):
        schema = [ParameterSpec(name="level", type="string", required=True, default_value="Info")]
        registry.register(make_definition(schema=schema))

        assert registry.validate_call(make_call()) is None

    def test_linked_parameter_counts_as_present(self, registry):
        registry.register(make_definition())
        link = ContextKeyLink(param_name="name", context_key="who")
        call = make_call(params=[OperationParam(name="name", link=link)])

        assert registry.validate_call(call) is None

    def test_unknown_parameter_rejected_when_strict(self, registry):
        registry.register(make_definition())
        call = make_call(params=[
            OperationParam(name="name", value="Ada"),
            OperationParam(name="colour", value="red"),
        ])

        assert "Unknown parameter 'colour'" in registry.validate_call(call)

    def test_unknown_parameter_allowed_when_not_strict(self, registry):
        set_flag("strict_parameters", False)
        registry.register(make_definition())
        call = make_call(params=[
            OperationParam(name="name", value="Ada"),
            OperationParam(name="colour", value="red"),
        ])

        assert registry.validate_call(call) is None

    def test_definition_validator_message_returned(self, registry):
        def no_bob(params):
            for param in params:
                if param.name == "name" and param.value == "Bob":
                    return "Bob is not welcome"
            return None

        registry.register(make_definition(validate_params=no_bob))

        assert registry.validate_call(make_call(params=[OperationParam(name="name", value="Bob")])) == "Bob is not welcome"
        assert registry.validate_call(make_call(params=[OperationParam(name="name", value="Ada")])) is None
