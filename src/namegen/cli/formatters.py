"""Output formatting for the namegen CLI."""

import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from namegen.schemas.generation import GenerationResponse, SavedName
from namegen.schemas.tool import AIModel, ToolDefinition


class OutputFormatter:
    """Prints pipeline results as rich tables or plain JSON."""

    def __init__(self, json_output: bool = False, force_color: bool = False):
        """Initialize formatter."""
        self.json_output = json_output
        self.console = Console(force_terminal=force_color or None, file=sys.stdout, highlight=False)

    def print_json(self, data: Any) -> None:
        self.console.print_json(json.dumps(data, ensure_ascii=False, default=str))

    def print_response(self, response: GenerationResponse) -> None:
        """Print a generation result."""
        if self.json_output:
            self.print_json(response.model_dump(exclude_none=True))
            return

        if response.success:
            for index, name in enumerate(response.names, start=1):
                self.console.print(f"[cyan]{index:>3}.[/cyan] {escape(name)}")
            if response.model_identifier:
                self.console.print(f"[dim]model: {response.model_identifier}[/dim]")
            return

        self.console.print(f"[bold red]{response.error_code}[/bold red]: {escape(response.error)}")
        for detail in response.details:
            field = detail.get("field", "")
            message = escape(str(detail.get("message")))
            self.console.print(f"  - [yellow]{field}[/yellow] ({detail.get('code')}): {message}")

    def print_tools(self, tools: list[ToolDefinition]) -> None:
        if self.json_output:
            self.print_json([tool.model_dump(mode="json") for tool in tools])
            return

        table = Table(title="Name Generators", show_header=True, header_style="bold magenta")
        table.add_column("Slug", style="cyan")
        table.add_column("Name")
        table.add_column("Fields", style="green")
        table.add_column("Default model", style="dim")
        for tool in tools:
            fields = ", ".join(
                f"{f.name}{'*' if f.required else ''}:{f.type}" for f in tool.configurable_fields
            )
            table.add_row(tool.slug, tool.name, fields, tool.default_ai_model_identifier or "-")
        self.console.print(table)

    def print_models(self, models: list[AIModel]) -> None:
        if self.json_output:
            self.print_json([model.model_dump(mode="json") for model in models])
            return

        table = Table(title="AI Models", show_header=True, header_style="bold magenta")
        table.add_column("Identifier", style="cyan")
        table.add_column("Name")
        table.add_column("Provider")
        table.add_column("Active", style="green")
        table.add_column("Tags", style="dim")
        for model in models:
            table.add_row(
                model.model_identifier,
                model.display_name,
                model.provider_name,
                "yes" if model.is_active else "no",
                ", ".join(sorted(model.capabilities_tags)),
            )
        self.console.print(table)

    def print_saved_names(self, entries: list[SavedName]) -> None:
        if self.json_output:
            self.print_json([entry.model_dump(mode="json") for entry in entries])
            return

        if not entries:
            self.console.print("No saved names yet.")
            return

        table = Table(title="Saved Names", show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Tool")
        table.add_column("Saved", style="dim")
        for entry in entries:
            table.add_row(entry.name_text, entry.tool_slug, entry.favorited_at.strftime("%Y-%m-%d %H:%M"))
        self.console.print(table)
