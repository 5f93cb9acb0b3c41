"""CLI entry point: python -m contact_identity.cli identify|cluster"""

import argparse
import asyncio
import json
import sys

import structlog

from contact_identity.config.settings import get_settings
from contact_identity.db.engine import dispose_engine
from contact_identity.db.session import get_session
from contact_identity.errors import IdentityError
from contact_identity.logging_config import configure_logging
from contact_identity.resolution import IdentifyResult, get_cluster, identify


async def run_identify(email: str | None, phone_number: str | None) -> IdentifyResult:
    try:
        async with get_session() as session:
            return await identify(session, email=email, phone_number=phone_number)
    finally:
        await dispose_engine()


async def run_cluster(contact_id: int) -> IdentifyResult:
    try:
        async with get_session() as session:
            return await get_cluster(session, contact_id)
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="contact_identity.cli",
        description="Contact Identity CLI",
    )
    subparsers = parser.add_subparsers(dest="command")

    identify_parser = subparsers.add_parser(
        "identify", help="Resolve an email/phone observation"
    )
    identify_parser.add_argument("--email", type=str, default=None)
    identify_parser.add_argument("--phone", type=str, default=None, help="Phone number")

    cluster_parser = subparsers.add_parser(
        "cluster", help="Show the cluster containing a contact id"
    )
    cluster_parser.add_argument("contact_id", type=int)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    settings = get_settings()
    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    log = structlog.get_logger()

    try:
        if args.command == "identify":
            result = asyncio.run(run_identify(args.email, args.phone))
        else:
            result = asyncio.run(run_cluster(args.contact_id))
    except IdentityError as e:
        log.error("cli_failed", command=args.command, code=e.code)
        print(json.dumps(e.to_public_dict()), file=sys.stderr)
        sys.exit(2 if e.status_code < 500 else 1)

    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
