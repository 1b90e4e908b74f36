"""Unit tests for the request builder and response normalizer."""

import pytest

from namegen.core.errors import EmptyOrMalformedResponse, ProviderError
from namegen.stages.request_builder import RequestBuilder
from namegen.stages.response_normalizer import ResponseNormalizer


@pytest.fixture
def normalizer():
    return ResponseNormalizer()


class TestResponseNormalizer:
    """Test ResponseNormalizer."""

    def test_trims_drops_blanks_and_dedupes_case_sensitively(self, normalizer):
        response = normalizer.normalize(["Foo ", "foo", "Foo", ""], model_identifier="m1")
        assert response.success
        assert response.names == ["Foo", "foo"]
        assert response.model_identifier == "m1"

    def test_first_seen_order_kept(self, normalizer):
        assert normalizer.clean_names(["b", "a", "b", "c"]) == ["b", "a", "c"]

    @pytest.mark.parametrize("payload", [[], ["", "   "], "Aria", None, {"names": ["A"]}, ["A", 3]])
    def test_unusable_payload(self, normalizer, payload):
        response = normalizer.normalize(payload)
        assert not response.success
        assert response.error_code == "EmptyOrMalformedResponse"
        assert response.names is None

    def test_clean_names_raises(self, normalizer):
        with pytest.raises(EmptyOrMalformedResponse):
            normalizer.clean_names([])

    def test_provider_error_passthrough(self, normalizer):
        response = normalizer.from_provider_error(ProviderError("upstream 503"))
        assert not response.success
        assert response.error_code == "ProviderError"
        assert response.error == "upstream 503"


class TestRequestBuilder:
    """Test RequestBuilder."""

    def test_build(self, style_tool):
        request = RequestBuilder().build(style_tool, "m1", {"style": "short"})
        assert request.ai_prompt_category == "fantasy names"
        assert request.model_identifier == "m1"
        assert request.parameters == {"style": "short"}

    def test_parameters_are_copied(self, style_tool):
        params = {"avoid": ["Rex"]}
        request = RequestBuilder().build(style_tool, "m1", params)
        params["avoid"].append("Max")
        assert request.parameters == {"avoid": ["Rex"]}
