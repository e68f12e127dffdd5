"""Command line access to the FiveStar Support API."""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

import httpx

from fivestar_support.client import FiveStarClient
from fivestar_support.config import get_settings
from fivestar_support.errors import FiveStarAPIError
from fivestar_support.logging_config import configure_logging, get_logger
from fivestar_support.models import RegisterCustomerOptions, SubmitResponseOptions

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fivestar", description="FiveStar Support API client")
    parser.add_argument("--client-id", help="Client ID (default: FIVESTAR_CLIENT_ID)")
    parser.add_argument("--api-url", help="API base URL (default: FIVESTAR_API_URL)")
    parser.add_argument(
        "--timeout", type=float, help="Request timeout in seconds (default: FIVESTAR_TIMEOUT)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("types", help="List response types")
    commands.add_parser("generate", help="Generate a new customer ID")

    register = commands.add_parser("register", help="Register a customer ID")
    register.add_argument("customer_id")
    register.add_argument("--email")
    register.add_argument("--name")

    verify = commands.add_parser("verify", help="Verify a customer ID")
    verify.add_argument("customer_id")

    submit = commands.add_parser("submit", help="Submit a response for a customer")
    submit.add_argument("customer_id")
    submit.add_argument("--title", required=True)
    submit.add_argument("--description", required=True)
    submit.add_argument("--type-id", required=True, help="Response type ID (see 'types')")
    submit.add_argument("--email")
    submit.add_argument("--name")

    url = commands.add_parser("url", help="Print the public feedback page URL")
    url.add_argument("--locale", help="Locale segment, e.g. 'fr'")

    return parser


async def run(
    args: argparse.Namespace, transport: Optional[httpx.AsyncBaseTransport] = None
) -> object:
    """
    Execute one CLI command.

    Args:
        args: Parsed command line arguments
        transport: Optional httpx transport for the client

    Returns:
        JSON-serializable result, or a plain string for 'url'
    """
    client = FiveStarClient.from_settings(
        client_id=args.client_id,
        api_url=args.api_url,
        timeout=args.timeout,
        transport=transport,
    )

    async with client:
        if args.command == "url":
            return client.get_public_url(args.locale)

        if args.command == "types":
            types = await client.list_response_types()
            return [t.to_json_dict() for t in types]

        if args.command == "generate":
            result = await client.generate_customer_id()
        elif args.command == "register":
            options = RegisterCustomerOptions(email=args.email, name=args.name)
            result = await client.register_customer(args.customer_id, options)
        elif args.command == "verify":
            result = await client.verify_customer(args.customer_id)
        else:
            result = await client.submit_response(
                SubmitResponseOptions(
                    customer_id=args.customer_id,
                    title=args.title,
                    description=args.description,
                    type_id=args.type_id,
                    email=args.email,
                    name=args.name,
                )
            )

        return result.to_json_dict()


def main(
    argv: Optional[List[str]] = None, transport: Optional[httpx.AsyncBaseTransport] = None
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    if not (args.client_id or settings.client_id):
        parser.error("a client ID is required (--client-id or FIVESTAR_CLIENT_ID)")

    logger.debug("Running FiveStar command", command=args.command)

    try:
        output = asyncio.run(run(args, transport=transport))
    except FiveStarAPIError as e:
        logger.error("FiveStar API error", error=e.message, status_code=e.status_code)
        print(f"❌ Error: {e.message}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        logger.error("FiveStar transport error", error=str(e))
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    if isinstance(output, str):
        print(output)
    else:
        print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
