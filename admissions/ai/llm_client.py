import logging
import os

import openai
from dotenv import load_dotenv

from ..logic.errors import UpstreamFailure

# Load env vars (if not already loaded)
load_dotenv()

logger = logging.getLogger(__name__)


class OpenAIChatClient:
    """Thin wrapper over OpenAI chat completions: prompts in, text out."""

    def __init__(self, api_key: str = None, model: str = None):
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self.client = None
        if self.api_key:
            self.client = openai.OpenAI(api_key=self.api_key)

    def complete(self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int) -> str:
        """
        Runs one chat completion.

        Raises:
            UpstreamFailure: no API key configured, the API call failed, or the
                model returned no content
        """
        if not self.client:
            raise UpstreamFailure("OpenAI API key not configured")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.OpenAIError as e:
            raise UpstreamFailure(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content
        if not content:
            raise UpstreamFailure("OpenAI returned an empty completion")

        logger.info(f"LLM completion received ({len(content)} chars, model={self.model})")
        return content
