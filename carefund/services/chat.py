# carefund/services/chat.py
import logging
from typing import Dict, List

import google.generativeai as genai

from carefund.core.errors import CareFundError, Internal, InvalidArgument
from carefund.services.external import with_timeout

logger = logging.getLogger(__name__)

USER = "user"
ASSISTANT = "model"


def normalize_history(history: List[Dict]) -> List[Dict]:
    """
    Validate a chat history of {role, parts} turns for the model.

    A leading assistant turn is dropped (the model requires the user to speak
    first) and the final turn must be the user's.
    """
    turns = []
    for turn in history or []:
        role = turn.get("role")
        parts = turn.get("parts")
        if role not in (USER, ASSISTANT):
            raise InvalidArgument(f"Unknown chat role: {role!r}")
        if isinstance(parts, str):
            parts = [parts]
        if not parts:
            raise InvalidArgument("Chat turn has no parts")
        turns.append({"role": role, "parts": [str(p) for p in parts]})

    if turns and turns[0]["role"] == ASSISTANT:
        turns = turns[1:]
    if not turns or turns[-1]["role"] != USER:
        raise InvalidArgument("Chat history must end with a user message")
    return turns


class GeminiChat:
    def __init__(self, api_key: str, model: str, max_output_tokens: int = 512, timeout: float = 15.0):
        self.api_key = api_key
        self.model_name = model
        self.max_output_tokens = max_output_tokens
        self.timeout = timeout

    def _model(self):
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(
            self.model_name,
            generation_config={"max_output_tokens": self.max_output_tokens},
        )

    async def reply(self, history: List[Dict]) -> str:
        turns = normalize_history(history)
        if not self.api_key:
            raise Internal("Chat is not configured")

        chat_session = self._model().start_chat(history=turns[:-1])
        try:
            response = await with_timeout(
                chat_session.send_message_async(turns[-1]["parts"]),
                self.timeout,
                "Chat completion",
            )
            return response.text
        except CareFundError:
            raise
        except Exception as e:
            logger.error(f"Gemini error: {e}")
            raise Internal("Error generating chat response") from e
