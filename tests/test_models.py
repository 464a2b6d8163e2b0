import pytest
from pydantic import ValidationError

from lambda_openapi.metadata.base import (
    HandlerMetadata,
    NamedStructural,
    OperationMetadata,
    ParamMetadata,
    QueryMetadata,
    SecurityMetadata,
)


class TestParamModels:
    def test_path_param_defaults(self):
        p = ParamMetadata(name="id", sequence_index=0)
        assert p.required is True
        assert p.location == "path"
        assert p.type_ref is None

    def test_query_param_defaults(self):
        q = QueryMetadata(name="limit", sequence_index=0)
        assert q.required is False
        assert q.location == "query"
        assert q.allow_empty_value is None


class TestOperationMetadata:
    def test_summary_required(self):
        with pytest.raises(ValidationError):
            OperationMetadata(function_name="f")

    def test_tags_default_empty(self):
        op = OperationMetadata(function_name="f", summary="Do it")
        assert op.tags == []
        assert op.operation_id is None


class TestSecurityMetadata:
    def test_rejects_unknown_scheme_type(self):
        with pytest.raises(ValidationError):
            SecurityMetadata(scheme_type="magic", sequence_index=0)


class TestHandlerMetadata:
    def test_empty_aggregate(self):
        meta = HandlerMetadata()
        assert meta.operation is None
        assert meta.responses == []
        assert meta.params == []
        assert meta.queries == []
        assert meta.body is None
        assert meta.security == []
        assert meta.tags == []


class TestNamedStructural:
    def test_without_properties(self):
        ref = NamedStructural(identifier="User")
        assert ref.properties is None
        assert ref.required == []
