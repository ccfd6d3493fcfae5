"""Gemini Translation Service - Implements word translation via Google Gemini API."""

import json
import logging
import re
from typing import Optional

import google.genai as genai
from google.genai import types

from vocab_capture.core import TranslationData
from vocab_capture.services.translation.translation_service import TranslationResult, TranslationService

LANGUAGE_DISPLAY_NAMES = {
    "en": "English",
    "ja": "Japanese",
    "it": "Italian",
    "zh": "Chinese",
}

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def language_display_name(code: str) -> str:
    return LANGUAGE_DISPLAY_NAMES.get(code, code)


def parse_translation_response(text: str) -> TranslationData:
    """
    Extract the JSON object from a model response.

    The model sometimes wraps the object in prose or a code fence, so the
    outermost ``{...}`` block is parsed.

    Raises:
        ValueError: If no valid translation object can be found.
    """
    match = _JSON_OBJECT.search(text or "")
    if match is None:
        raise ValueError("No JSON object in response")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in response: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("Response JSON is not an object")
    return TranslationData.from_dict(payload)


class GeminiTranslationService(TranslationService):
    """
    Translation service using Google Gemini API.

    Asks for a JSON object with translation, definition, pronunciation,
    part of speech, example sentences and usage notes.
    """

    MODEL_NAME = "gemini-2.5-flash-lite"
    REQUEST_TIMEOUT_MS = 30_000

    TRANSLATION_PROMPT = """Translate the following {source} word into {target} and provide details.

Word: "{word}"

Respond with a single JSON object with these fields:
{{
  "translation": "the translation",
  "definition": "a detailed definition",
  "pronunciation": "pronunciation guide",
  "partOfSpeech": "noun/verb/adjective/...",
  "examples": ["example sentence 1", "example sentence 2"],
  "usageNotes": "usage notes or context hints"
}}"""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def translate_word(
        self,
        word: str,
        source_language: str,
        target_language: str,
        api_key: str,
    ) -> TranslationResult:
        if not api_key:
            self.logger.error("API key not configured")
            return TranslationResult(data=None, model=self.MODEL_NAME, error="API key not configured")

        self.logger.info(
            "Translation request started",
            extra={"data": {"word": word, "sourceLanguage": source_language, "targetLanguage": target_language}},
        )
        try:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=self.REQUEST_TIMEOUT_MS),
            )

            prompt = self.TRANSLATION_PROMPT.format(
                source=language_display_name(source_language),
                target=language_display_name(target_language),
                word=word,
            )

            response = client.models.generate_content(
                model=self.MODEL_NAME,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.3,
                    max_output_tokens=1024,
                    response_mime_type="application/json",
                ),
            )

            if not response.text:
                self.logger.error("Empty response from API", extra={"data": {"word": word}})
                return TranslationResult(data=None, model=self.MODEL_NAME, error="Empty response from API")

            data = parse_translation_response(response.text)
            self.logger.info("Translation request completed", extra={"data": {"word": word, "success": True}})
            return TranslationResult(data=data, model=self.MODEL_NAME)

        except ValueError as e:
            self.logger.error("Unexpected response format", extra={"data": {"word": word, "error": str(e)}})
            return TranslationResult(
                data=None,
                model=self.MODEL_NAME,
                error=f"Unexpected response format: {e}",
            )
        except Exception as e:
            self.logger.error("Translation request failed", extra={"data": {"word": word, "error": str(e)}})
            return TranslationResult(data=None, model=self.MODEL_NAME, error=self._classify_error(e))

    @staticmethod
    def _classify_error(error: Exception) -> str:
        error_msg = str(error).lower()
        if "api_key" in error_msg or "authentication" in error_msg or "invalid" in error_msg:
            return f"Invalid API key or request: {error}"
        if "429" in error_msg or "quota" in error_msg or "rate_limit" in error_msg or "resource_exhausted" in error_msg:
            return "API quota exceeded. Please try again later."
        if "deadline" in error_msg or "timeout" in error_msg:
            return "Request timed out. Please check your connection."
        return f"Translation failed: {error}"
