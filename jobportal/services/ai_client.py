"""
AI Client - resume scoring through an OpenAI-compatible chat API.

The model is treated as an opaque function: resume text in, a JSON object
out. Anything that is not the expected JSON is an error for the caller.
"""
import json
import logging

from openai import OpenAI, OpenAIError

from jobportal.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """The completion call itself failed."""


class AIResponseError(Exception):
    """The completion came back but was not the JSON we asked for."""


RESUME_SYSTEM_PROMPT = "You are an expert résumé analyzer."

RESUME_PROMPT = """You are a professional career coach and résumé expert. A job seeker has uploaded their résumé text (extracted via OCR). Please do the following:
1) Assign a Resume Score (0-100) for formatting, clarity, relevance, and keyword usage.
2) List up to 5 specific improvement points (bullet-style) to make the résumé stronger.
3) Provide a short general feedback paragraph summarizing the résumé's strengths/weaknesses.
4) Return only a JSON object with keys:
   {
     "score": <integer 0-100>,
     "improvementPoints": [ up to 5 strings ],
     "generalFeedback": "<one-paragraph>"
   }

Here is the résumé text:
\"\"\"
%s
\"\"\""""


class AIClient:
    """
    Wrapper for the chat completion API.
    """

    def __init__(self, settings: Settings = None, client: OpenAI = None):
        settings = settings or get_settings()
        self.client = client or OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url
        )
        self.model = settings.openai_model

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 800) -> str:
        """
        Internal method to call the chat API.
        Returns raw text response.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content}
                ],
                max_tokens=max_tokens,
                temperature=0.3
            )
        except OpenAIError as e:
            logger.error("AI completion failed: %s", e)
            raise AIServiceError(str(e)) from e
        return (response.choices[0].message.content or "").strip()

    def _extract_json(self, text: str) -> dict:
        """
        Extract JSON from API response.
        Handles cases where model wraps JSON in markdown code blocks.
        """
        text = text.strip()
        if text.startswith("```json"):
            text = text[7:]
        if text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]

        try:
            data = json.loads(text.strip())
        except ValueError as e:
            logger.error("AI returned non-JSON output: %r", text[:500])
            raise AIResponseError(str(e)) from e
        if not isinstance(data, dict):
            raise AIResponseError("Expected a JSON object")
        return data

    def analyze_resume(self, resume_text: str) -> dict:
        """Score a resume and suggest improvements."""
        response = self._call_api(RESUME_SYSTEM_PROMPT, RESUME_PROMPT % resume_text)
        return self._extract_json(response)


# Singleton instance
_ai_client: AIClient = None


def get_ai_client() -> AIClient:
    """Get or create AI client (singleton pattern)"""
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
