"""Tests for the flexible required-marker decoder in specsdk.models."""

from __future__ import annotations

from typing import Any

import pytest

from specsdk.exceptions import SpecParseError
from specsdk.models import (
    AllRequired,
    RequiredNames,
    Schema,
    decode_required,
    is_property_required,
)


class TestDecodeRequired:
    """Test boolean-first, then name-list decoding."""

    def test_true_means_all_required(self) -> None:
        marker = decode_required(True)
        assert marker == AllRequired(value=True)
        assert marker.is_required("anything")

    def test_false_means_none_required(self) -> None:
        marker = decode_required(False)
        assert marker == AllRequired(value=False)
        assert not marker.is_required("id")

    def test_name_list(self) -> None:
        marker = decode_required(["a", "b"])
        assert marker == RequiredNames(names=frozenset({"a", "b"}))
        assert marker.is_required("a")
        assert marker.is_required("b")
        assert not marker.is_required("c")

    def test_empty_list_requires_nothing(self) -> None:
        assert not decode_required([]).is_required("a")

    @pytest.mark.parametrize(
        "value",
        [{"a": True}, 1, 0.5, "id", ["id", 1], None],
        ids=["object", "int", "float", "string", "mixed-list", "null"],
    )
    def test_rejects_other_shapes(self, value: Any) -> None:
        with pytest.raises(SpecParseError, match="required must be"):
            decode_required(value)


class TestIsPropertyRequired:
    """Test the membership rule including an absent marker."""

    def test_absent_marker_requires_nothing(self) -> None:
        assert is_property_required(None, "id") is False

    def test_all_required(self) -> None:
        assert is_property_required(AllRequired(value=True), "id") is True

    def test_named(self) -> None:
        marker = RequiredNames(names=frozenset({"id"}))
        assert is_property_required(marker, "id") is True
        assert is_property_required(marker, "name") is False


class TestSchemaRequiredField:
    """Test the decoder wired into Schema validation."""

    def test_schema_decodes_bool(self) -> None:
        schema = Schema.model_validate({"type": "object", "required": True})
        assert schema.required == AllRequired(value=True)

    def test_schema_decodes_list(self) -> None:
        schema = Schema.model_validate({"type": "object", "required": ["id"]})
        assert isinstance(schema.required, RequiredNames)

    def test_schema_without_required(self) -> None:
        assert Schema.model_validate({"type": "object"}).required is None
