"""Helpers to pull text and JSON out of chat completion responses."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional


def extract_text(response: Any) -> str:
	"""Return the first choice's message content, or an empty string."""
	choices = getattr(response, "choices", None) or []
	if not choices:
		return ""
	message = getattr(choices[0], "message", None)
	return (getattr(message, "content", None) or "").strip()


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
	"""Return token usage if present."""
	usage = getattr(response, "usage", None)
	return {
		"input_tokens": getattr(usage, "prompt_tokens", None) if usage else None,
		"output_tokens": getattr(usage, "completion_tokens", None) if usage else None,
	}


def strip_code_fences(text: str) -> str:
	"""Remove a surrounding ```json ... ``` block if the model added one."""
	text = text.strip()
	if text.startswith("```json"):
		text = text[7:]
	elif text.startswith("```"):
		text = text[3:]
	if text.endswith("```"):
		text = text[:-3]
	return text.strip()


def parse_json_object(text: str) -> Optional[Dict[str, Any]]:
	"""Parse `text` as a JSON object; return None if it is anything else."""
	try:
		parsed = json.loads(strip_code_fences(text))
	except (TypeError, ValueError):
		return None
	return parsed if isinstance(parsed, dict) else None
