"""
Canned MCP prompt templates.

Prompts do not touch the NPS API; each renders a single user-role text
message from its one argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class PromptDefinition:
    name: str
    description: str
    argument: str
    argument_description: str
    template: str

    def render(self, value: str) -> Dict[str, Any]:
        return {
            "description": self.description,
            "messages": [
                {
                    "role": "user",
                    "content": {"type": "text", "text": self.template.format(value)},
                }
            ],
        }


PROMPT_REGISTRY: Dict[str, PromptDefinition] = {
    "parks-by-state": PromptDefinition(
        name="parks-by-state",
        description="Ask which national parks are in a state.",
        argument="stateCode",
        argument_description="Two-letter state code",
        template="What National Parks are in the state of {}",
    ),
    "details-for-park": PromptDefinition(
        name="details-for-park",
        description="Ask for details about a national park.",
        argument="park",
        argument_description="Park name or free-text description",
        template="Give me details about {}",
    ),
}


class PromptError(ValueError):
    """Raised when a prompt is unknown or its argument is missing."""


def list_prompts() -> List[Dict[str, Any]]:
    """Return the MCP prompt descriptors."""
    return [
        {
            "name": prompt.name,
            "description": prompt.description,
            "arguments": [
                {
                    "name": prompt.argument,
                    "description": prompt.argument_description,
                    "required": True,
                }
            ],
        }
        for prompt in PROMPT_REGISTRY.values()
    ]


def get_prompt(name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Render prompt ``name`` with ``arguments``."""
    prompt = PROMPT_REGISTRY.get(name)
    if prompt is None:
        raise PromptError(f"Unknown prompt: {name}")
    value = (arguments or {}).get(prompt.argument)
    if not isinstance(value, str):
        raise PromptError(f"Missing required argument: {prompt.argument}")
    return prompt.render(value)
