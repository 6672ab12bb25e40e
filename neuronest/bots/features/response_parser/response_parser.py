"""
neuronest/bots/features/response_parser/response_parser.py

Turns raw completion text into a typed BotResult.

The text must be a JSON object carrying every field its bot's schema marks as
required. Presence is the only check: field types and values are passed
through untouched, and keys the schema does not name are dropped. Anything
else is a MalformedResponse; there is no partial or best-effort result.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from jsonschema import ValidationError, validate

from neuronest.bots.models import (
    BotResult,
    BotType,
    CaseStudy,
    EmailReply,
    PropertyDescription,
)
from neuronest.errors import MalformedResponse

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parents[2] / "schemas"

SCHEMA_FILES = {
    BotType.SALES: "email_reply.json",
    BotType.LEASE: "email_reply.json",
    BotType.CASE_STUDY: "case_study.json",
    BotType.DESCRIPTION: "property_description.json",
}

_schema_cache: Dict[str, Dict[str, Any]] = {}


def load_schema_file(name: str) -> Dict[str, Any]:
    """Load (once) a JSON Schema from neuronest/bots/schemas/."""
    if name not in _schema_cache:
        _schema_cache[name] = json.loads((SCHEMA_DIR / name).read_text(encoding="utf-8"))
    return _schema_cache[name]


def load_schema(bot_type: BotType) -> Dict[str, Any]:
    """Load the JSON Schema for a bot's result."""
    return load_schema_file(SCHEMA_FILES[bot_type])


def _build_result(bot_type: BotType, data: Dict[str, Any]) -> BotResult:
    if bot_type in (BotType.SALES, BotType.LEASE):
        return EmailReply(
            bot_type=bot_type,
            email_body=data["email_body"],
            category=data["category"],
            survey_link=data.get("survey_link"),
        )
    if bot_type is BotType.CASE_STUDY:
        return CaseStudy(
            buyer_profile_text=data["buyer_profile_text"],
            property_journey_text=data["property_journey_text"],
            what_they_love_text=data["what_they_love_text"],
            differences_text=data["differences_text"],
            agent_brief_text=data["agent_brief_text"],
        )
    return PropertyDescription(
        headline=data["headline"],
        description_text=data["description_text"],
        key_features=data["key_features"],
        seo_keywords=data["seo_keywords"],
    )


def parse_response(raw: str, bot_type: BotType) -> BotResult:
    """
    Parse and shape-check completion output for `bot_type`.

    Raises:
        MalformedResponse: If `raw` is not JSON, not an object, or misses a required field.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Completion returned invalid JSON: {e}")
        raise MalformedResponse(f"Completion returned invalid JSON: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"Completion returned {type(data).__name__}, expected a JSON object")
        raise MalformedResponse(f"Expected a JSON object, got {type(data).__name__}")

    try:
        validate(instance=data, schema=load_schema(bot_type))
    except ValidationError as e:
        logger.error(f"{bot_type.value} response failed validation: {e.message}")
        raise MalformedResponse(f"{bot_type.value} response failed validation: {e.message}") from e

    return _build_result(bot_type, data)
