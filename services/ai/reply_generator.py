"""Chat replies for the realtime relay, built on OpenAI chat completions."""

from __future__ import annotations

import logging
import os

from openai import AsyncOpenAI

from services.ai.prompts import chat_system_prompt
from services.ai.response_parser import extract_text, extract_usage

LOGGER = logging.getLogger(__name__)
DEFAULT_CHAT_MODEL = os.getenv("CHAT_MODEL", "deepseek/deepseek-r1:free")


class ReplyGenerator:
	"""Turn the latest student message into an assistant reply."""

	def __init__(self, client: AsyncOpenAI, model: str = DEFAULT_CHAT_MODEL, max_tokens: int = 600) -> None:
		if client is None:
			raise ValueError("AsyncOpenAI client is required.")
		self.client = client
		self.model = model
		self.max_tokens = max_tokens

	async def generate(self, text: str) -> str:
		"""Return the assistant's reply text for `text`.

		Raises:
			ValueError: If the message is empty or the model returns no text.
		"""
		if not text or not text.strip():
			raise ValueError("Message text is required.")

		response = await self.client.chat.completions.create(
			model=self.model,
			messages=[
				{"role": "system", "content": chat_system_prompt()},
				{"role": "user", "content": text.strip()},
			],
			max_tokens=self.max_tokens,
		)
		reply = extract_text(response)
		LOGGER.debug("Chat reply usage: %s", extract_usage(response))
		if not reply:
			raise ValueError("The chat model returned an empty reply.")
		return reply
