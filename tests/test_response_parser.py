import json

import pytest

from neuronest.bots.features.response_parser.response_parser import parse_response
from neuronest.bots.models import BotType, CaseStudy, EmailReply, PropertyDescription
from neuronest.errors import MalformedResponse

from conftest import CASE_STUDY_JSON, DESCRIPTION_JSON, EMAIL_JSON


def test_description_has_exactly_the_four_fields():
    result = parse_response(DESCRIPTION_JSON, BotType.DESCRIPTION)

    assert isinstance(result, PropertyDescription)
    assert result.to_dict() == {
        "headline": "H",
        "description_text": "D",
        "key_features": ["a"],
        "seo_keywords": ["b"],
    }


def test_extra_keys_are_dropped():
    raw = json.dumps(dict(json.loads(DESCRIPTION_JSON), price_guide="$1.2m"))
    assert "price_guide" not in parse_response(raw, BotType.DESCRIPTION).to_dict()


@pytest.mark.parametrize("bot_type", [BotType.SALES, BotType.LEASE])
def test_email_reply_keeps_bot_type(bot_type):
    result = parse_response(EMAIL_JSON, bot_type)

    assert isinstance(result, EmailReply)
    assert result.bot_type is bot_type
    assert result.to_dict()["survey_link"].startswith("https://")


def test_email_reply_without_survey_link():
    raw = json.dumps({"email_body": "See you Saturday", "category": "Inspection Times"})
    result = parse_response(raw, BotType.SALES)

    assert result.survey_link is None
    assert "survey_link" not in result.to_dict()


def test_case_study():
    result = parse_response(CASE_STUDY_JSON, BotType.CASE_STUDY)
    assert isinstance(result, CaseStudy)
    assert result.agent_brief_text == "Lead with the school zone"


def test_field_types_are_not_checked():
    raw = json.dumps({"headline": 1, "description_text": None, "key_features": "x", "seo_keywords": {}})
    result = parse_response(raw, BotType.DESCRIPTION)
    assert result.headline == 1


@pytest.mark.parametrize("raw", [
    "not json at all",
    '{"headline": "H",',
    "",
])
def test_invalid_json_rejected(raw):
    with pytest.raises(MalformedResponse):
        parse_response(raw, BotType.DESCRIPTION)


@pytest.mark.parametrize("raw", ['["headline"]', '"H"', "42", "null"])
def test_non_object_rejected(raw):
    with pytest.raises(MalformedResponse):
        parse_response(raw, BotType.DESCRIPTION)


@pytest.mark.parametrize("bot_type,raw,missing", [
    (BotType.DESCRIPTION, DESCRIPTION_JSON, "seo_keywords"),
    (BotType.SALES, EMAIL_JSON, "category"),
    (BotType.LEASE, EMAIL_JSON, "email_body"),
    (BotType.CASE_STUDY, CASE_STUDY_JSON, "differences_text"),
])
def test_missing_required_field_rejected(bot_type, raw, missing):
    data = json.loads(raw)
    del data[missing]
    with pytest.raises(MalformedResponse) as exc:
        parse_response(json.dumps(data), bot_type)
    assert missing in str(exc.value)


def test_wrong_variant_rejected():
    with pytest.raises(MalformedResponse):
        parse_response(EMAIL_JSON, BotType.DESCRIPTION)
