"""Shared fixtures."""

import logging
from unittest.mock import MagicMock

import pytest

from namegen.core.catalog import ToolCatalog
from namegen.core.prompts import extract_names
from namegen.schemas.fields import FieldSchema
from namegen.schemas.tool import AIModel, ToolDefinition


@pytest.fixture(autouse=True)
def reset_namegen_logging():
    """Drop handlers a test (e.g. the CLI) attached to the namegen logger."""
    yield
    root = logging.getLogger("namegen")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def style_tool():
    """Tool with one required select field and no default."""
    return ToolDefinition(
        id="tool-1",
        slug="style-names",
        name="Style Names",
        ai_prompt_category="fantasy names",
        default_ai_model_identifier="m1",
        available_ai_model_identifiers=["m1", "m2"],
        configurable_fields=[
            FieldSchema(
                name="style",
                label="Style",
                type="select",
                options=["short", "long"],
                required=True,
            )
        ],
    )


@pytest.fixture
def full_tool():
    """Tool exercising every field type."""
    return ToolDefinition(
        slug="pet-names",
        name="Pet Names",
        ai_prompt_category="cat names",
        default_ai_model_identifier="m1",
        available_ai_model_identifiers=["m1"],
        default_parameters={"count": 10},
        configurable_fields=[
            FieldSchema(name="tone", label="Tone", type="select", options=["playful", "regal"], default="playful"),
            FieldSchema(name="count", label="Count", type="number", min=1, max=50, required=True),
            FieldSchema(name="notes", label="Notes", type="textarea"),
            FieldSchema(name="rhyming", label="Rhyming", type="switch"),
            FieldSchema(name="avoid", label="Avoid", type="list"),
        ],
    )


@pytest.fixture
def catalog(style_tool, full_tool):
    """Catalog where m1 is active and m2 is not."""
    hidden = style_tool.model_copy(update={"slug": "hidden", "is_published": False})
    return ToolCatalog(
        tools=[style_tool, full_tool, hidden],
        models=[
            AIModel(model_identifier="m1", display_name="Model One"),
            AIModel(model_identifier="m2", display_name="Model Two", is_active=False),
        ],
    )


@pytest.fixture
def mock_client():
    """Provider client returning three lines, one duplicated."""
    client = MagicMock()
    client.provider_name = "mock"
    client.generate.return_value = "Aria\nAria\nLuna"
    client.extract_names.side_effect = extract_names
    return client
