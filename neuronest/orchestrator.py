#!/usr/bin/env python3
"""
neuronest/orchestrator.py

Command-line entry point for the NeuroNest bot service:
  - serve:        run the JSON HTTP API.
  - issue-token:  sign a bearer token for a staff member.
  - run-bot:      run one bot offline (request JSON file -> result JSON file).

Usage:
  python -m neuronest.orchestrator serve --port 8080
  python -m neuronest.orchestrator issue-token --id 7 --email agent@example.com --role AGENT
  python -m neuronest.orchestrator run-bot sales --input request.json --out reply.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from neuronest.api.auth import issue_token
from neuronest.api.server import serve
from neuronest.bots.features.completion_client.completion_client import CompletionClient
from neuronest.bots.models import (
    BotType,
    CaseStudyRequest,
    DescriptionRequest,
    Failure,
    LeaseRequest,
    SalesRequest,
)
from neuronest.bots.orchestrator import BotOrchestrator
from neuronest.config import ROLES, Settings

logger = logging.getLogger(__name__)

REQUEST_TYPES = {
    BotType.SALES: SalesRequest,
    BotType.LEASE: LeaseRequest,
    BotType.CASE_STUDY: CaseStudyRequest,
    BotType.DESCRIPTION: DescriptionRequest,
}


def load_request(bot_type: BotType, data: Dict[str, Any]):
    """
    Build a BotRequest from a JSON request file's contents.

    Raises:
        ValueError: If the file's keys do not fit the bot's request type.
    """
    try:
        return REQUEST_TYPES[bot_type](**data)
    except TypeError as e:
        raise ValueError(f"Request does not match the {bot_type.value} bot: {e}") from e


def run_bot(bot_type: BotType, input_path: Path, output_path: Path, orchestrator: BotOrchestrator) -> int:
    # 1. Load request
    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
        request = load_request(bot_type, data)
    except (OSError, ValueError) as e:
        print(f"❌ Failed to load request '{input_path}': {e}")
        return 1

    print(f"🤖 Running {bot_type.value} bot…")

    # 2. Run the pipeline
    outcome = orchestrator.run(request)
    if isinstance(outcome, Failure):
        print(f"❌ Bot failed: {outcome.error}")
        return 1

    # 3. Persist output
    try:
        output_path.write_text(json.dumps(outcome.result.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        print(f"❌ Failed to write result to '{output_path}': {e}")
        return 1

    print(f"💾 Wrote {bot_type.value} result to {output_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NeuroNest real-estate bot service.")
    parser.add_argument(
        "--env-file", type=Path, default=None,
        help="Path to a .env file with service settings."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the bot HTTP API.")
    p_serve.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    p_serve.add_argument("--port", type=int, default=8080, help="Port to listen on.")

    p_token = sub.add_parser("issue-token", help="Sign a bearer token for a staff member.")
    p_token.add_argument("--id", required=True, help="User id.")
    p_token.add_argument("--email", required=True, help="User email.")
    p_token.add_argument("--role", required=True, choices=ROLES, help="User role.")
    p_token.add_argument("--team-id", default=None, help="Team id, if any.")

    p_run = sub.add_parser("run-bot", help="Run a single bot from a JSON request file.")
    p_run.add_argument("bot", choices=[t.value for t in BotType], help="Bot to run.")
    p_run.add_argument("--input", type=Path, required=True, help="Path to the request JSON.")
    p_run.add_argument(
        "--out", type=Path, default=Path("bot_result.json"),
        help="Path where the result JSON will be written."
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env(args.env_file)
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command == "serve":
        try:
            serve(settings, args.host, args.port)
        except ValueError as e:
            print(f"❌ {e}")
            return 1
        return 0

    if args.command == "issue-token":
        token = issue_token(
            {"id": args.id, "email": args.email, "role": args.role, "team_id": args.team_id},
            settings,
        )
        print(token)
        return 0

    try:
        client = CompletionClient.from_settings(settings)
    except ValueError as e:
        print(f"❌ {e}")
        return 1
    return run_bot(BotType(args.bot), args.input, args.out, BotOrchestrator(client))


if __name__ == "__main__":
    sys.exit(main())
