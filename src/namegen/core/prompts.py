"""Prompt construction and reply parsing for name generation."""

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from namegen.schemas.generation import GenerationRequest

DEFAULT_COUNT = 10
MAX_NAME_LENGTH = 100

# Categories with a hand-written subject; anything else falls back to "names for <category>".
CATEGORY_SUBJECTS = {
    "cat names": "cat names",
    "dog names": "dog names",
    "business names": "business names",
}

# Parameters consumed by the template itself rather than listed as requirements.
_TEMPLATE_PARAMETERS = {"count", "tone"}

_LEADING_MARKERS = re.compile(r"^[\d\-*•.)\]}\s]+")
_JSON_BLOCK = re.compile(r"```(?:json)?\s*([\[{].*?[\]}])\s*```", re.DOTALL)


@lru_cache(maxsize=None)
def _load_template() -> str:
    """Load prompt template from file."""
    template_path = Path(__file__).parent.parent / "prompts" / "generate_names.txt"
    return template_path.read_text(encoding="utf-8")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def build_prompt(request: GenerationRequest) -> str:
    """
    Turn a generation request into the text sent to the provider.

    Args:
        request: Generation request with prompt category and parameters

    Returns:
        Prompt text
    """
    parameters = request.parameters
    category = request.ai_prompt_category.strip()
    subject = CATEGORY_SUBJECTS.get(category.lower(), f"names for {category}")

    count = parameters.get("count") or DEFAULT_COUNT
    if isinstance(count, float) and count.is_integer():
        count = int(count)

    tone = parameters.get("tone")
    tone_clause = f" with a {tone} tone" if tone else ""

    extra = [
        f"- {key}: {_format_value(value)}"
        for key, value in parameters.items()
        if key not in _TEMPLATE_PARAMETERS and value not in (None, "", [])
    ]
    requirements = ""
    if extra:
        requirements = "Additional requirements:\n" + "\n".join(extra) + "\n"

    return _load_template().format(
        count=count,
        subject=subject,
        tone_clause=tone_clause,
        requirements=requirements,
    )


def extract_names(text: str) -> Any:
    """
    Extract name candidates from a raw reply.

    A JSON array (bare, in a markdown code block, or under a "names" key) is
    returned as parsed, whatever its contents. Otherwise the reply is read as
    one name per line with leading numbering and bullets removed.

    Args:
        text: Raw reply text

    Returns:
        Parsed payload, normally a list of strings
    """
    if text is None:
        return None

    stripped = text.strip()
    candidates = []
    match = _JSON_BLOCK.search(stripped)
    if match:
        candidates.append(match.group(1))
    if stripped[:1] in ("[", "{"):
        candidates.append(stripped)

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict) and "names" in data:
            return data["names"]
        return data

    names = []
    for line in stripped.splitlines():
        line = _LEADING_MARKERS.sub("", line.strip()).strip()
        if line and len(line) < MAX_NAME_LENGTH:
            names.append(line)
    return names
