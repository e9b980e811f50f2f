"""Unit tests for local-vs-remote tool classification."""
from __future__ import annotations

import pytest

from inference_gateway.base.models import CompletedToolCall
from inference_gateway.base.streaming import ToolClassifier, ToolOrigin


@pytest.fixture()
def classifier() -> ToolClassifier:
    return ToolClassifier({"get_weather"})


def test_declared_name_is_local(classifier):
    call = CompletedToolCall(id="c1", name="get_weather", arguments="{}")
    assert classifier.classify(call) is ToolOrigin.LOCAL  # nosec B101


@pytest.mark.parametrize("name", ["search_web", "", "GET_WEATHER", "get_weather "])
def test_other_names_are_remote(classifier, name):
    assert classifier.origin_of(name) is ToolOrigin.REMOTE  # nosec B101


@pytest.mark.parametrize("name", [None, 42, ["get_weather"]])
def test_non_string_names_are_remote(classifier, name):
    assert classifier.origin_of(name) is ToolOrigin.REMOTE  # nosec B101


def test_empty_declared_set_routes_everything_remote():
    assert ToolClassifier().origin_of("anything") is ToolOrigin.REMOTE  # nosec B101
