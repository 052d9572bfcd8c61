"""
OpenAI API integration service
"""
import json
import logging
import time
from typing import Dict, Any, Optional, Callable

from openai import AsyncOpenAI

from ..config import Config
from ..models import VideoMetadata
from ..utils.exceptions import OptimizationError, OptimizationParseError

SYSTEM_PROMPT = "You are a YouTube optimization expert. Always respond with valid JSON only."

REQUIRED_KEYS = ("title", "description", "tags", "chapters", "seo_analysis")

RESPONSE_FORMAT_EXAMPLE = """{
  "title": "Your optimized title here",
  "description": "Your full optimized description",
  "tags": ["tag1", "tag2", "tag3"],
  "chapters": [
    {"time": "0:00", "title": "Introduction"},
    {"time": "2:30", "title": "Main Topic"}
  ],
  "seo_analysis": {
    "primary_keywords": ["keyword1", "keyword2"],
    "content_category": "educational/entertainment/tutorial/etc",
    "target_audience": "description of audience",
    "optimization_notes": "brief notes on optimization strategy"
  }
}"""


def create_optimization_prompt(transcription: str, metadata: Optional[VideoMetadata] = None) -> str:
    """
    Create the user prompt for metadata optimization.

    Args:
        transcription: Full video transcript
        metadata: Current video metadata, if known

    Returns:
        Prompt text for the OpenAI API
    """
    current_title = (metadata.title if metadata else None) or "Unknown Title"
    current_description = (metadata.description if metadata else None) or "No description available"
    duration = (metadata.duration if metadata else 0) or 0

    prompt = (
        "You are a YouTube optimization expert. Based on this video transcription, generate optimized metadata.\n\n"

        "**CURRENT METADATA:**\n"
        f"Title: {current_title}\n"
        f"Description: {current_description}\n"
        f"Duration: {duration // 60} minutes {duration % 60} seconds\n\n"

        "**TRANSCRIPTION:**\n"
        f"{transcription}\n\n"

        "**TASK:** Generate optimized YouTube metadata following these guidelines:\n\n"

        "1. **TITLE REQUIREMENTS:**\n"
        "   - Maximum 60 characters\n"
        "   - Include primary keyword from content\n"
        "   - Make it clickable but not clickbait\n"
        "   - Consider current YouTube trends\n\n"

        "2. **DESCRIPTION REQUIREMENTS:**\n"
        "   - Hook in first 125 characters (mobile preview)\n"
        "   - Include 3-5 relevant keywords naturally\n"
        "   - Add clear value proposition\n"
        "   - Include call-to-action\n"
        "   - Add relevant timestamps if content supports chapters\n\n"

        "3. **TAGS REQUIREMENTS:**\n"
        "   - 10-15 tags total\n"
        "   - Mix of broad and specific terms\n"
        "   - Include variations of main keywords\n"
        "   - Add trending related terms\n\n"

        "4. **CHAPTERS (if applicable):**\n"
        "   - Only if content has clear segments\n"
        "   - Descriptive chapter titles\n"
        "   - Accurate timestamps\n\n"

        "Respond in this exact JSON format:\n"
        f"{RESPONSE_FORMAT_EXAMPLE}"
    )

    return prompt


def parse_optimization_response(content: Optional[str]) -> Dict[str, Any]:
    """
    Decode the model reply into an optimization object.

    The object is returned unmodified; it must be a JSON object carrying
    every key in REQUIRED_KEYS.

    Raises:
        OptimizationParseError: If the reply is not such an object
    """
    if not content:
        raise OptimizationParseError(content=content)
    try:
        result = json.loads(content)
    except json.JSONDecodeError as e:
        raise OptimizationParseError(content=content) from e

    if not isinstance(result, dict):
        raise OptimizationParseError(content=content)

    missing = [key for key in REQUIRED_KEYS if key not in result]
    if missing:
        raise OptimizationParseError(
            f"Failed to parse ChatGPT response as JSON: missing keys {', '.join(missing)}",
            content=content,
        )
    return result


async def generate_optimization(transcription: str, metadata: Optional[VideoMetadata], api_key: str,
                                client_factory: Optional[Callable[..., AsyncOpenAI]] = None) -> Dict[str, Any]:
    """
    Generate optimized title, description, tags, chapters and SEO notes.

    Args:
        transcription: Full video transcript
        metadata: Current metadata or None
        api_key: OpenAI API key supplied by the caller
        client_factory: Builds the OpenAI client (tests pass a fake)

    Returns:
        The decoded optimization object

    Raises:
        OptimizationError: If the API call or the decoding fails
    """
    client_factory = client_factory or AsyncOpenAI
    prompt = create_optimization_prompt(transcription, metadata)

    try:
        client = client_factory(api_key=api_key)
        logging.info(f"Generating optimization with {Config.OPENAI_CHAT_MODEL} (prompt {len(prompt)} chars)")
        start = time.time()
        response = await client.chat.completions.create(
            model=Config.OPENAI_CHAT_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=Config.OPENAI_TEMPERATURE,
            max_tokens=Config.OPENAI_MAX_TOKENS,
        )
        logging.info(f"Model {Config.OPENAI_CHAT_MODEL} call succeeded in {time.time() - start:.2f}s")
        content = response.choices[0].message.content
        return parse_optimization_response(content)
    except Exception as e:
        raise OptimizationError(f"Content optimization failed: {e}", original_error=e) from e
