"""Unit tests for the tool catalog and the saved-name store."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from namegen.core.catalog import ToolCatalog
from namegen.core.errors import CatalogError, DuplicateSavedName, SavedNameError, ToolNotFound
from namegen.core.favorites import SavedNameStore

EXAMPLE_CATALOG = Path(__file__).parent.parent / "examples" / "tools.yaml"


class TestToolCatalog:
    """Test ToolCatalog."""

    def test_get_published_tool(self, catalog):
        assert catalog.get_tool("style-names").name == "Style Names"

    def test_unknown_and_unpublished_tools_not_found(self, catalog):
        with pytest.raises(ToolNotFound):
            catalog.get_tool("nope")
        with pytest.raises(ToolNotFound):
            catalog.get_tool("hidden")
        assert catalog.get_tool("hidden", include_unpublished=True).slug == "hidden"

    def test_list_published_tools_sorted_by_name(self, catalog):
        assert [t.slug for t in catalog.list_published_tools()] == ["pet-names", "style-names"]

    def test_list_active_models(self, catalog):
        assert {m.model_identifier for m in catalog.list_active_models()} == {"m1"}
        assert catalog.list_active_models({"m2", "unknown"}) == set()

    def test_duplicate_slug_rejected(self, style_tool):
        with pytest.raises(CatalogError):
            ToolCatalog(tools=[style_tool, style_tool])

    def test_from_example_file(self):
        catalog = ToolCatalog.from_file(EXAMPLE_CATALOG)
        tool = catalog.get_tool("cat-name-generator")
        assert tool.field("tone").type == "select"
        assert catalog.get_tool("business-name-generator").field("industry").required

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "tools.json"
        path.write_text(
            json.dumps(
                {
                    "tools": [{"name": "Robot Names", "ai_prompt_category": "robot names"}],
                    "models": [{"model_identifier": "m1"}],
                }
            )
        )
        catalog = ToolCatalog.from_file(path)
        assert catalog.get_tool("robot-names").ai_prompt_category == "robot names"
        assert [m.model_identifier for m in catalog.list_models()] == ["m1"]

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "tools.yaml"
        path.write_text("tools:\n  - name: Broken\n")
        with pytest.raises(CatalogError):
            ToolCatalog.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            ToolCatalog.from_file(tmp_path / "missing.yaml")

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "tools.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(CatalogError):
            ToolCatalog.from_file(path)


class TestSavedNameStore:
    """Test SavedNameStore."""

    @pytest.fixture
    def store(self, tmp_path):
        return SavedNameStore(tmp_path / "nested" / "saved.json")

    def test_save_and_list(self, store):
        saved = store.save("  Luna ", "cat-names")
        assert saved.name_text == "Luna"
        assert [e.name_text for e in store.list_saved()] == ["Luna"]
        assert store.path.exists()

    def test_duplicate_rejected_per_tool(self, store):
        store.save("Luna", "cat-names")
        with pytest.raises(DuplicateSavedName):
            store.save("Luna", "cat-names")
        store.save("Luna", "dog-names")
        assert len(store.list_saved()) == 2

    @pytest.mark.parametrize("name,slug", [("", "cat-names"), ("Luna", "  ")])
    def test_blank_values_rejected(self, store, name, slug):
        with pytest.raises(SavedNameError):
            store.save(name, slug)

    def test_save_many_skips_existing(self, store):
        store.save("Luna", "cat-names")
        stored = store.save_many(["Luna", "Aria", "Aria"], "cat-names")
        assert [e.name_text for e in stored] == ["Aria"]

    def test_remove(self, store):
        store.save("Luna", "cat-names")
        assert store.remove("Luna", "cat-names") is True
        assert store.remove("Luna", "cat-names") is False
        assert store.list_saved() == []

    def test_list_newest_first_and_filtered(self, store):
        entries = [
            {"name_text": "Old", "tool_slug": "cat-names", "favorited_at": "2024-01-01T00:00:00Z"},
            {"name_text": "New", "tool_slug": "cat-names", "favorited_at": "2024-06-01T00:00:00Z"},
            {"name_text": "Rex", "tool_slug": "dog-names", "favorited_at": "2024-03-01T00:00:00Z"},
        ]
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps(entries))

        assert [e.name_text for e in store.list_saved()] == ["New", "Rex", "Old"]
        assert [e.name_text for e in store.list_saved("cat-names")] == ["New", "Old"]
        assert store.list_saved()[0].favorited_at == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_corrupt_file(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")
        with pytest.raises(SavedNameError):
            store.list_saved()
