"""
neuronest/api/handlers.py

Route handlers for the bot endpoints.

Each handler takes the raw Authorization header and the decoded JSON body and
returns (status_code, payload). Checks run in a fixed order and the first
failure answers the request:

  1. authenticate the bearer token          -> 401 / 403
  2. validate the body against its schema   -> 400
  3. resolve referenced client / property   -> 404
  4. run the bot through the orchestrator   -> 500 on Failure
  5. optionally persist the generated document

Request schemas live beside the reply schemas in neuronest/bots/schemas/; each
carries the 400 message for its route as `errorMessage`, and a property may
carry a narrower one.

The orchestrator is never called when steps 1-3 fail. Callers only ever see
an error's public message; details go to the log.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional, Tuple

import jsonschema

from neuronest.api.auth import AuthenticatedUser, authenticate, require_bot_role
from neuronest.api.store import RecordStore, full_address, property_features
from neuronest.bots.features.response_parser.response_parser import load_schema_file
from neuronest.bots.models import (
    BotType,
    CaseStudyRequest,
    DescriptionRequest,
    Failure,
    LeaseRequest,
    SalesRequest,
)
from neuronest.bots.orchestrator import BotOrchestrator
from neuronest.config import Settings
from neuronest.errors import BotError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]

REQUEST_SCHEMAS = {
    BotType.SALES: "email_request.json",
    BotType.LEASE: "email_request.json",
    BotType.CASE_STUDY: "case_study_request.json",
    BotType.DESCRIPTION: "description_request.json",
}


def error_response(error: BotError) -> Response:
    return error.status, {"success": False, "message": error.public_message}


def validate_body(bot_type: BotType, body: Any) -> None:
    """
    Check a request body against the bot's request schema.

    Raises:
        ValidationError: With the failing property's `errorMessage`, or the route's.
    """
    schema = load_schema_file(REQUEST_SCHEMAS[bot_type])
    try:
        jsonschema.validate(instance=body, schema=schema)
    except jsonschema.ValidationError as e:
        # best_match may descend into anyOf branches, so look the property up by path
        field = schema["properties"].get(e.absolute_path[0], {}) if e.absolute_path else {}
        message = field.get("errorMessage") or schema["errorMessage"]
        logger.debug(f"{bot_type.value} request rejected: {e.message}")
        raise ValidationError(message) from e


class BotRouteHandler:
    """
    Binds the orchestrator and the record store to the HTTP contract.
    """

    def __init__(self, orchestrator: BotOrchestrator, store: RecordStore, settings: Settings):
        self.orchestrator = orchestrator
        self.store = store
        self.settings = settings

    # --- plumbing ---

    def _guarded(self, bot_type: BotType, name: str, authorization: Optional[str], body: Any,
                 handler: Callable[[AuthenticatedUser, Dict[str, Any]], Response]) -> Response:
        try:
            user = authenticate(authorization, self.settings)
            require_bot_role(user, self.settings)
            validate_body(bot_type, body)
            return handler(user, body)
        except BotError as e:
            log = logger.error if e.status >= 500 else logger.info
            log(f"{name} failed ({e.status}): {e}")
            return error_response(e)

    def _run(self, request) -> Any:
        outcome = self.orchestrator.run(request)
        if isinstance(outcome, Failure):
            raise outcome.error
        return outcome.result

    def _email_bot(self, request_cls, body: Dict[str, Any]) -> Response:
        request = request_cls(
            email_content=body["email_content"],
            property_address=body["property_address"],
            inquiry_count=body.get("inquiry_count") or 1,
        )
        result = self._run(request)
        return 200, {"success": True, "bot_response": result.to_dict()}

    # --- routes ---

    def sales(self, authorization: Optional[str], body: Any) -> Response:
        """POST /bots/sales"""
        return self._guarded(BotType.SALES, "Sales bot", authorization, body,
                             lambda user, b: self._email_bot(SalesRequest, b))

    def lease(self, authorization: Optional[str], body: Any) -> Response:
        """POST /bots/lease"""
        return self._guarded(BotType.LEASE, "Lease bot", authorization, body,
                             lambda user, b: self._email_bot(LeaseRequest, b))

    def case_study(self, authorization: Optional[str], body: Any) -> Response:
        """POST /bots/case-study"""
        return self._guarded(BotType.CASE_STUDY, "Case study bot", authorization, body, self._case_study)

    def description(self, authorization: Optional[str], body: Any) -> Response:
        """POST /bots/description"""
        return self._guarded(BotType.DESCRIPTION, "Description bot", authorization, body, self._description)

    def dispatch(self, bot_type: BotType, authorization: Optional[str], body: Any) -> Response:
        routes = {
            BotType.SALES: self.sales,
            BotType.LEASE: self.lease,
            BotType.CASE_STUDY: self.case_study,
            BotType.DESCRIPTION: self.description,
        }
        return routes[bot_type](authorization, body)

    # --- document bots ---

    def _case_study(self, user: AuthenticatedUser, body: Dict[str, Any]) -> Response:
        client = self.store.find_client(body["client_id"])
        prop = self.store.find_property(body["property_id"])
        if not client or not prop:
            raise NotFoundError("Client or property not found")

        result = self._run(CaseStudyRequest(
            client_name=client.get("full_name") or "",
            property_address=full_address(prop),
            survey_responses=body["survey_responses"],
            past_inquiries=[str(i) for i in body.get("past_inquiries") or []],
        ))

        payload = {"success": True, "case_study": result.to_dict()}
        if not self.settings.persist_results:
            return 200, payload

        payload["case_study_id"] = self.store.save_case_study(dict(
            result.to_dict(),
            property_id=prop.get("property_id", body["property_id"]),
            client_id=client.get("client_id", body["client_id"]),
            created_by_user_id=user.id,
        ))
        return 201, payload

    def _description(self, user: AuthenticatedUser, body: Dict[str, Any]) -> Response:
        prop = self.store.find_property(body["property_id"])
        if not prop:
            raise NotFoundError("Property not found")

        try:
            features = property_features(prop)
        except json.JSONDecodeError as e:
            raise BotError(f"Property {body['property_id']} has unreadable features: {e}") from e

        result = self._run(DescriptionRequest(
            property_address=full_address(prop),
            property_features=features,
            location_info=body.get("location_info") or f"Located in {prop.get('suburb', '')}, {prop.get('state', '')}",
            property_images=body.get("property_images"),
        ))

        payload = {"success": True, "description": result.to_dict()}
        if not self.settings.persist_results:
            return 200, payload

        payload["version_id"] = self.store.save_description_version({
            "property_id": prop.get("property_id", body["property_id"]),
            "headline": result.headline,
            "description_text": result.description_text,
            "key_features": json.dumps(result.key_features),
            "seo_keywords": json.dumps(result.seo_keywords),
            "created_by_user_id": user.id,
            "is_current_version": True,
        })
        return 201, payload
