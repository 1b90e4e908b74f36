"""Tests for the namegen CLI."""

import json
from pathlib import Path
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from namegen.cli.main import main, parse_param
from namegen.core.favorites import SavedNameStore

EXAMPLE_CATALOG = str(Path(__file__).parent.parent / "examples" / "tools.yaml")


@pytest.fixture
def home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    return home


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(main, ["--log-level", "ERROR", "--catalog", EXAMPLE_CATALOG, *args])


class TestParseParam:
    """Test parse_param."""

    def test_values_stay_strings(self):
        params = parse_param(
            ("count=5", "rhyming=true", "industry=no", "code=007", "version=1.10", "note=")
        )
        assert params == {
            "count": "5",
            "rhyming": "true",
            "industry": "no",
            "code": "007",
            "version": "1.10",
            "note": "",
        }

    def test_bracketed_value_is_list_of_strings(self):
        assert parse_param(("keywords=[bean, no, 007]",)) == {"keywords": ["bean", "no", "007"]}

    def test_unparsable_bracket_kept_as_text(self):
        assert parse_param(("inspiration=[unclosed",)) == {"inspiration": "[unclosed"}

    def test_value_may_contain_equals(self):
        assert parse_param(("inspiration=a=b",)) == {"inspiration": "a=b"}

    @pytest.mark.parametrize("item", ["count", "=5"])
    def test_malformed(self, item):
        with pytest.raises(click.BadParameter):
            parse_param((item,))


class TestGenerateCommand:
    """Test 'namegen generate'."""

    def test_json_success(self, runner, home, mock_client):
        with patch("namegen.cli.main.create_client", return_value=mock_client):
            result = invoke(runner, "generate", "cat-name-generator", "-P", "count=5", "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["names"] == ["Aria", "Luna"]
        assert data["model_identifier"] == "anthropic/claude-3.5-sonnet"
        request = mock_client.generate.call_args[0][0]
        assert request.parameters == {"tone": "playful", "count": 5}

    def test_text_and_select_values_reach_fields_unchanged(self, runner, home, mock_client, tmp_path):
        catalog = tmp_path / "switches.yaml"
        catalog.write_text(
            "models:\n"
            "  - model_identifier: m1\n"
            "tools:\n"
            "  - name: Toggle Names\n"
            "    ai_prompt_category: toggle names\n"
            "    default_ai_model_identifier: m1\n"
            "    available_ai_model_identifiers: [m1]\n"
            "    configurable_fields:\n"
            "      - {name: industry, type: text, required: true}\n"
            "      - {name: state, type: select, options: ['on', 'off'], required: true}\n"
            "      - {name: code, type: text}\n"
        )
        with patch("namegen.cli.main.create_client", return_value=mock_client):
            result = runner.invoke(
                main,
                [
                    "--log-level", "ERROR", "--catalog", str(catalog),
                    "generate", "toggle-names",
                    "-P", "industry=no", "-P", "state=on", "-P", "code=007", "--json",
                ],
            )

        assert result.exit_code == 0, result.output
        request = mock_client.generate.call_args[0][0]
        assert request.parameters == {"industry": "no", "state": "on", "code": "007"}

    def test_number_and_list_params_converted_by_field_type(self, runner, home, mock_client):
        with patch("namegen.cli.main.create_client", return_value=mock_client):
            result = invoke(
                runner,
                "generate", "business-name-generator",
                "-P", "industry=coffee", "-P", "count=5", "-P", "keywords=[bean, roast]",
                "-P", "include_domain_friendly=no", "--json",
            )

        assert result.exit_code == 0, result.output
        request = mock_client.generate.call_args[0][0]
        assert request.parameters == {
            "industry": "coffee",
            "count": 5,
            "keywords": ["bean", "roast"],
            "include_domain_friendly": False,
        }

    def test_validation_failure_exits_nonzero(self, runner, home, mock_client):
        with patch("namegen.cli.main.create_client", return_value=mock_client):
            result = invoke(runner, "generate", "business-name-generator", "--json")

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error_code"] == "ParameterValidationError"
        assert data["details"][0]["field"] == "industry"
        mock_client.generate.assert_not_called()

    def test_requested_model_not_allowed(self, runner, home, mock_client):
        with patch("namegen.cli.main.create_client", return_value=mock_client):
            result = invoke(
                runner, "generate", "cat-name-generator", "-m", "meta-llama/llama-3.1-70b-instruct"
            )

        assert result.exit_code == 1
        assert "ModelNotAllowed" in result.output

    def test_table_output_and_save(self, runner, home, mock_client):
        with patch("namegen.cli.main.create_client", return_value=mock_client):
            result = invoke(
                runner, "generate", "business-name-generator", "-P", "industry=coffee", "--save"
            )

        assert result.exit_code == 0, result.output
        assert "Aria" in result.output
        assert "Luna" in result.output
        saved = SavedNameStore(home / ".namegen" / "saved_names.json").list_saved()
        assert {e.name_text for e in saved} == {"Aria", "Luna"}
        assert {e.tool_slug for e in saved} == {"business-name-generator"}

    def test_provider_unavailable(self, runner, home):
        with patch("namegen.cli.main.create_client", side_effect=ValueError("No AI provider available.")):
            result = invoke(runner, "generate", "cat-name-generator")

        assert result.exit_code == 1
        assert "No AI provider available" in result.output

    def test_interrupted(self, runner, home, mock_client):
        with patch("namegen.cli.main.create_client", return_value=mock_client), patch(
            "namegen.cli.main.GenerationPipeline.generate", side_effect=KeyboardInterrupt
        ):
            result = invoke(runner, "generate", "cat-name-generator")

        assert result.exit_code == 130

    def test_missing_catalog(self, runner, home):
        result = runner.invoke(main, ["--log-level", "ERROR", "generate", "cat-name-generator"])
        assert result.exit_code == 1
        assert "No tool catalog found" in result.output


class TestListCommands:
    """Test 'namegen tools' and 'namegen models'."""

    def test_tools_json(self, runner, home):
        result = invoke(runner, "tools", "--json")
        assert result.exit_code == 0, result.output
        slugs = [tool["slug"] for tool in json.loads(result.output)]
        assert slugs == ["business-name-generator", "cat-name-generator"]

    def test_models_hides_inactive(self, runner, home):
        result = invoke(runner, "models", "--json")
        identifiers = {m["model_identifier"] for m in json.loads(result.output)}
        assert "meta-llama/llama-3.1-70b-instruct" not in identifiers

        result = invoke(runner, "models", "--all", "--json")
        identifiers = {m["model_identifier"] for m in json.loads(result.output)}
        assert "meta-llama/llama-3.1-70b-instruct" in identifiers


class TestFavoritesCommands:
    """Test 'namegen favorites'."""

    def test_add_list_remove(self, runner, home):
        result = invoke(runner, "favorites", "add", "Luna", "cat-name-generator")
        assert result.exit_code == 0, result.output
        assert "Saved 'Luna'" in result.output

        result = invoke(runner, "favorites", "list", "--json")
        entries = json.loads(result.output)
        assert [e["name_text"] for e in entries] == ["Luna"]

        result = invoke(runner, "favorites", "remove", "Luna", "cat-name-generator")
        assert result.exit_code == 0
        assert "Removed 'Luna'" in result.output

        result = invoke(runner, "favorites", "remove", "Luna", "cat-name-generator")
        assert result.exit_code == 1

    def test_duplicate_add_fails(self, runner, home):
        invoke(runner, "favorites", "add", "Luna", "cat-name-generator")
        result = invoke(runner, "favorites", "add", "Luna", "cat-name-generator")
        assert result.exit_code == 1
        assert "already in your favorites" in result.output

    def test_empty_list(self, runner, home):
        result = invoke(runner, "favorites", "list")
        assert result.exit_code == 0
        assert "No saved names yet." in result.output
