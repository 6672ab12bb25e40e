"""
neuronest/bots/orchestrator.py

Runs one bot request through the pipeline:
  1. Select the contact flow (sales/lease only).
  2. Build the prompt.
  3. Request a completion.
  4. Parse the completion into a typed result.

Every run ends in Success(result) or Failure(error). A failing step stops
the run; nothing is retried and no later step is invoked.
"""

import logging
from typing import Any, Dict, List, Optional

from neuronest.bots.features.prompt_builder.prompt_builder import build_prompt, select_flow
from neuronest.bots.features.response_parser.response_parser import parse_response
from neuronest.bots.models import (
    BotOutcome,
    BotRequest,
    CaseStudyRequest,
    DescriptionRequest,
    Failure,
    LeaseRequest,
    SalesRequest,
    Success,
)
from neuronest.errors import BotError, CompletionFailure

logger = logging.getLogger(__name__)


class BotOrchestrator:
    """
    Drives prompt building, the completion call and response parsing.

    The completion client is injected so each orchestrator carries its own
    model and credentials; the orchestrator keeps no state between runs.
    """

    def __init__(self, completion_client):
        """
        Args:
            completion_client: Object exposing `complete(prompt: str) -> str`.
        """
        self.completion_client = completion_client

    def run(self, request: BotRequest) -> BotOutcome:
        bot = request.bot_type.value

        flow = None
        if isinstance(request, (SalesRequest, LeaseRequest)):
            flow = select_flow(request.inquiry_count)
            logger.debug(f"[{bot}] flow_selection -> {flow.value} (inquiry_count={request.inquiry_count})")

        logger.debug(f"[{bot}] build_prompt")
        prompt = build_prompt(request, flow)

        logger.debug(f"[{bot}] request_completion")
        try:
            raw = self.completion_client.complete(prompt)
        except BotError as e:
            logger.warning(f"[{bot}] completion failed: {e}")
            return Failure(e)
        except Exception as e:
            logger.exception(f"[{bot}] completion client raised unexpectedly")
            return Failure(CompletionFailure(f"Completion client error: {e}"))

        logger.debug(f"[{bot}] parse_response")
        try:
            result = parse_response(raw, request.bot_type)
        except BotError as e:
            logger.warning(f"[{bot}] response rejected: {e}")
            return Failure(e)

        logger.info(f"[{bot}] bot run completed")
        return Success(result)

    # Convenience entry points, one per bot

    def sales_bot(self, email_content: str, property_address: str, inquiry_count: int = 1) -> BotOutcome:
        return self.run(SalesRequest(email_content, property_address, inquiry_count))

    def lease_bot(self, email_content: str, property_address: str, inquiry_count: int = 1) -> BotOutcome:
        return self.run(LeaseRequest(email_content, property_address, inquiry_count))

    def case_study_bot(
        self,
        client_name: str,
        property_address: str,
        survey_responses: Dict[str, Any],
        past_inquiries: Optional[List[str]] = None,
    ) -> BotOutcome:
        return self.run(
            CaseStudyRequest(client_name, property_address, survey_responses, list(past_inquiries or []))
        )

    def property_description_bot(
        self,
        property_address: str,
        property_features: Dict[str, Any],
        location_info: str,
        property_images: Optional[List[str]] = None,
    ) -> BotOutcome:
        return self.run(
            DescriptionRequest(property_address, property_features, location_info, property_images)
        )
