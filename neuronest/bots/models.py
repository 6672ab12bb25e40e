"""
neuronest/bots/models.py

Request and result types for the bot pipeline.

Requests and results are tagged by `BotType`. Sales and lease bots share the
same request shape and the same `EmailReply` result; the case study and
description bots each have their own pair.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class BotType(Enum):
    SALES = "sales"
    LEASE = "lease"
    CASE_STUDY = "case-study"
    DESCRIPTION = "description"


class Flow(Enum):
    """Which contact this is for the client, picked from the inquiry count."""

    FIRST = "first"
    SECOND = "second"
    THIRD = "third"


# --- Requests ---

@dataclass
class SalesRequest:
    email_content: str
    property_address: str
    inquiry_count: int = 1

    bot_type: ClassVar[BotType] = BotType.SALES


@dataclass
class LeaseRequest:
    email_content: str
    property_address: str
    inquiry_count: int = 1

    bot_type: ClassVar[BotType] = BotType.LEASE


@dataclass
class CaseStudyRequest:
    client_name: str
    property_address: str
    survey_responses: Dict[str, Any]
    past_inquiries: List[str] = field(default_factory=list)

    bot_type: ClassVar[BotType] = BotType.CASE_STUDY


@dataclass
class DescriptionRequest:
    property_address: str
    property_features: Dict[str, Any]
    location_info: str
    property_images: Optional[List[str]] = None

    bot_type: ClassVar[BotType] = BotType.DESCRIPTION


BotRequest = Union[SalesRequest, LeaseRequest, CaseStudyRequest, DescriptionRequest]


# --- Results ---

@dataclass
class EmailReply:
    bot_type: BotType
    email_body: Any
    category: Any
    survey_link: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {"email_body": self.email_body, "category": self.category}
        if self.survey_link is not None:
            out["survey_link"] = self.survey_link
        return out


@dataclass
class CaseStudy:
    buyer_profile_text: Any
    property_journey_text: Any
    what_they_love_text: Any
    differences_text: Any
    agent_brief_text: Any

    bot_type: ClassVar[BotType] = BotType.CASE_STUDY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "buyer_profile_text": self.buyer_profile_text,
            "property_journey_text": self.property_journey_text,
            "what_they_love_text": self.what_they_love_text,
            "differences_text": self.differences_text,
            "agent_brief_text": self.agent_brief_text,
        }


@dataclass
class PropertyDescription:
    headline: Any
    description_text: Any
    key_features: Any
    seo_keywords: Any

    bot_type: ClassVar[BotType] = BotType.DESCRIPTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headline": self.headline,
            "description_text": self.description_text,
            "key_features": self.key_features,
            "seo_keywords": self.seo_keywords,
        }


BotResult = Union[EmailReply, CaseStudy, PropertyDescription]


# --- Outcomes ---

@dataclass
class Success:
    result: BotResult

    ok: ClassVar[bool] = True


@dataclass
class Failure:
    error: Exception

    ok: ClassVar[bool] = False


BotOutcome = Union[Success, Failure]
