"""
neuronest/bots/features/prompt_builder/prompt_builder.py

Renders a BotRequest into the single instruction string sent to the
completion service.

Caller content (email bodies, survey answers, feature maps) is embedded
verbatim. Only authenticated staff reach this code, so nothing is escaped.

Key functions:
  - select_flow(inquiry_count: int) -> Flow
  - build_prompt(request: BotRequest, flow: Optional[Flow] = None) -> str
"""

import json
from typing import Optional

from neuronest.bots.models import (
    BotRequest,
    CaseStudyRequest,
    DescriptionRequest,
    Flow,
    LeaseRequest,
    SalesRequest,
)

from .prompts import (
    CASE_STUDY_PROMPT,
    DESCRIPTION_PROMPT,
    LEASE_FLOW_INSTRUCTIONS,
    LEASE_PROMPT,
    SALES_FLOW_INSTRUCTIONS,
    SALES_PROMPT,
    SURVEY_LINK_FIELD,
)


def select_flow(inquiry_count: int) -> Flow:
    """
    Pick the contact flow for a sales/lease reply.

    2 is the second flow, 3 or more the third; everything else (including
    counts below 1) falls back to the first flow.
    """
    if inquiry_count == 2:
        return Flow.SECOND
    if inquiry_count >= 3:
        return Flow.THIRD
    return Flow.FIRST


def _email_prompt(template: str, instructions: dict, request, flow: Optional[Flow]) -> str:
    if flow is None:
        flow = select_flow(request.inquiry_count)
    return template.format(
        property_address=request.property_address,
        flow=flow.value,
        email_content=request.email_content,
        flow_instruction=instructions[flow.value],
        survey_field=SURVEY_LINK_FIELD if flow is not Flow.THIRD else "",
    ).rstrip()


def _case_study_prompt(request: CaseStudyRequest) -> str:
    return CASE_STUDY_PROMPT.format(
        client_name=request.client_name,
        property_address=request.property_address,
        past_inquiries=", ".join(request.past_inquiries) or "None",
        survey_responses=json.dumps(request.survey_responses, indent=2),
    )


def _description_prompt(request: DescriptionRequest) -> str:
    if request.property_images:
        images_line = f"Property has {len(request.property_images)} images available"
    else:
        images_line = "No property images available"
    return DESCRIPTION_PROMPT.format(
        property_address=request.property_address,
        property_features=json.dumps(request.property_features, indent=2),
        location_info=request.location_info,
        images_line=images_line,
    )


def build_prompt(request: BotRequest, flow: Optional[Flow] = None) -> str:
    """
    Build the instruction block for a bot request.

    `flow` overrides the flow derived from a sales/lease request's inquiry_count.

    Raises:
        TypeError: If `request` is not one of the BotRequest variants.
    """
    if isinstance(request, SalesRequest):
        return _email_prompt(SALES_PROMPT, SALES_FLOW_INSTRUCTIONS, request, flow)
    if isinstance(request, LeaseRequest):
        return _email_prompt(LEASE_PROMPT, LEASE_FLOW_INSTRUCTIONS, request, flow)
    if isinstance(request, CaseStudyRequest):
        return _case_study_prompt(request)
    if isinstance(request, DescriptionRequest):
        return _description_prompt(request)
    raise TypeError(f"Unsupported bot request: {type(request).__name__}")
