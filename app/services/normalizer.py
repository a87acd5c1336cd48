"""Extraction of generated text from a chat-completion response body.

The upstream does not guarantee a single response shape. Known shapes are
modeled as a closed set of variants; ``candidate_shapes`` yields the known ones a
body matches in fallback order and ``extract_reply`` takes the first that
produces non-empty text, falling back to a pretty-printed dump of the body.
"""
from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class ChoicesShape:
    """OpenAI-style ``{"choices": [{"message": {"content": ...}}]}``."""

    first: Any

    def text(self) -> str:
        if not isinstance(self.first, dict):
            return ""
        message = self.first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str) and content:
                return content
        text = self.first.get("text")
        if isinstance(text, str):
            return text
        return ""


@dataclass(frozen=True)
class OutputListShape:
    """``{"output": ["part", {"text": "part"}, ...]}``."""

    items: list[Any]

    def text(self) -> str:
        return "\n".join(_output_item_text(item) for item in self.items)


@dataclass(frozen=True)
class OutputTextShape:
    """``{"output": "text"}``."""

    value: str

    def text(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnknownShape:
    """Anything else; rendered as JSON so operators can see it."""

    raw: Any

    def text(self) -> str:
        return json.dumps(self.raw, indent=2, ensure_ascii=False)


ResponseShape = Union[ChoicesShape, OutputListShape, OutputTextShape, UnknownShape]


def _output_item_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        text = item.get("text")
        if isinstance(text, str):
            return text
    return ""


def candidate_shapes(body: Any) -> Iterator[ResponseShape]:
    """Yield every known shape ``body`` matches, in resolution order."""
    if not isinstance(body, dict):
        return

    choices = body.get("choices")
    if isinstance(choices, list) and choices:
        yield ChoicesShape(first=choices[0])

    output = body.get("output")
    if isinstance(output, list) and output:
        yield OutputListShape(items=output)
    elif isinstance(output, str) and output:
        yield OutputTextShape(value=output)


def resolve_shape(body: Any) -> ResponseShape:
    """Return the first known shape of ``body`` with non-empty text, else ``UnknownShape``."""
    for shape in candidate_shapes(body):
        if shape.text():
            return shape
    return UnknownShape(raw=body)


def extract_reply(body: Any) -> str:
    return resolve_shape(body).text()
