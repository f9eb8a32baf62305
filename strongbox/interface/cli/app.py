"""Command line interface.

Each command opens one request scope on the DI container, runs one use case
and prints its outcome. Usage errors are reported before any request is made
and exit with status 2; failures further down exit with status 1.
"""

import argparse
import asyncio
import sys
from typing import Sequence

from dishka import AsyncContainer

from strongbox.adapter.error import AdapterError
from strongbox.application.usecase.credential import (
    SetCredentialRequest,
    SetCredentialUseCase,
    UnsetCredentialRequest,
    UnsetCredentialUseCase,
)
from strongbox.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteUseCase,
    ApproveInviteRequest,
    ApproveInviteUseCase,
    ListInvitesRequest,
    ListInvitesUseCase,
    SendInvitesRequest,
    SendInvitesUseCase,
)
from strongbox.config import Settings
from strongbox.domain.error import DomainError
from strongbox.domain.value import AddressFlags, InviteState, ProgressEvent
from strongbox.interface.error import UsageError
from strongbox.util.di.container import create_container
from strongbox.util.logging import setup_logging
from strongbox.util.observability import configure_logfire

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_set_args(args: Sequence[str]) -> tuple[str, str]:
    """Split ``set`` arguments into name and value.

    Accepts ``<name|path> <value>`` or a single ``<name|path>=<value>``.

    Raises:
        UsageError: If the name or value is missing, or too many arguments
            were given
    """
    args = list(args)
    if len(args) == 1:
        args = args[0].split("=", 1)

    if len(args) < 2:
        raise UsageError("A secret name and value must be supplied.")
    if len(args) > 2:
        raise UsageError("Too many arguments were provided.")

    key, value = args
    if not key or not value:
        raise UsageError("A secret must have a name and value.")
    return key, value


def print_progress(event: ProgressEvent) -> None:
    """Report a daemon progress event on stderr."""
    if event.total:
        print(f"[{event.completed or 0}/{event.total}] {event.message}", file=sys.stderr)
    elif event.message:
        print(event.message, file=sys.stderr)


def _add_address_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--org", "-o", help="Org the credential belongs to")
    parser.add_argument("--project", "-p", help="Project the credential belongs to")
    parser.add_argument(
        "--environment",
        "-e",
        action="append",
        default=[],
        help="Environment (can specify multiple)",
    )
    parser.add_argument(
        "--service",
        "-s",
        action="append",
        default=[],
        help="Service (can specify multiple)",
    )
    parser.add_argument(
        "--identity",
        action="append",
        default=[],
        help="Identity (can specify multiple)",
    )
    parser.add_argument(
        "--instance",
        "-i",
        action="append",
        default=[],
        help="Instance (can specify multiple)",
    )


def address_flags(args: argparse.Namespace) -> AddressFlags:
    return AddressFlags(
        org=args.org,
        project=args.project,
        environment=args.environment,
        service=args.service,
        identity=args.identity,
        instance=args.instance,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="strongbox", description="Strongbox - Secrets for teams"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # set
    set_parser = subparsers.add_parser(
        "set",
        help="Set a credential for a service and environment",
        usage="strongbox set <name|path> <value> or <name|path>=<value>",
    )
    set_parser.add_argument("args", nargs="*", help="<name|path> <value>")
    _add_address_flags(set_parser)

    # unset
    unset_parser = subparsers.add_parser(
        "unset", help="Unset a credential for a service and environment"
    )
    unset_parser.add_argument("name_or_path", help="<name|path>")
    _add_address_flags(unset_parser)

    # invites
    invites_parser = subparsers.add_parser("invites", help="Manage org invites")
    invites = invites_parser.add_subparsers(dest="invites_command", required=True)

    send_parser = invites.add_parser("send", help="Invite people to an org")
    send_parser.add_argument("emails", nargs="+", help="Email addresses to invite")
    send_parser.add_argument("--org", "-o", required=True, help="Org to invite to")
    send_parser.add_argument(
        "--team",
        "-t",
        dest="teams",
        action="append",
        default=[],
        help="Team to join on approval (can specify multiple)",
    )

    accept_parser = invites.add_parser("accept", help="Accept an org invite")
    accept_parser.add_argument("email", help="Email the invite was sent to")
    accept_parser.add_argument("code", help="Invite code")
    accept_parser.add_argument("--org", "-o", required=True, help="Org invited to")

    approve_parser = invites.add_parser("approve", help="Approve an org invite")
    approve_parser.add_argument("invite_id", help="Invite identifier")

    list_parser = invites.add_parser("list", help="List an org's invites")
    list_parser.add_argument("--org", "-o", required=True, help="Org to list")
    list_parser.add_argument(
        "--state",
        dest="states",
        action="append",
        default=[],
        choices=[state.value for state in InviteState],
        help="Only show invites in this state (can specify multiple)",
    )

    return parser


async def cmd_set(container: AsyncContainer, args: argparse.Namespace) -> int:
    name_or_path, value = parse_set_args(args.args)
    request = SetCredentialRequest(
        name_or_path=name_or_path, value=value, flags=address_flags(args)
    )
    try:
        async with container() as request_container:
            use_case = await request_container.get(SetCredentialUseCase)
            response = await use_case.execute(request, progress=print_progress)
    except (DomainError, AdapterError) as e:
        print(f"Could not set credential.\n{e}", file=sys.stderr)
        return EXIT_FAILURE

    for credential in response.credentials:
        print(
            f"\nCredential {credential.name} has been set at "
            f"{credential.path}/{credential.name}"
        )
    return EXIT_OK


async def cmd_unset(container: AsyncContainer, args: argparse.Namespace) -> int:
    request = UnsetCredentialRequest(
        name_or_path=args.name_or_path, flags=address_flags(args)
    )
    try:
        async with container() as request_container:
            use_case = await request_container.get(UnsetCredentialUseCase)
            response = await use_case.execute(request, progress=print_progress)
    except (DomainError, AdapterError) as e:
        print(f"Could not unset credential.\n{e}", file=sys.stderr)
        return EXIT_FAILURE

    for credential in response.credentials:
        print(
            f"\nCredential {credential.name} has been unset at "
            f"{credential.path}/{credential.name}"
        )
    return EXIT_OK


async def cmd_invites_send(container: AsyncContainer, args: argparse.Namespace) -> int:
    request = SendInvitesRequest(org=args.org, emails=args.emails, teams=args.teams)
    try:
        async with container() as request_container:
            use_case = await request_container.get(SendInvitesUseCase)
            response = await use_case.execute(request)
    except (DomainError, AdapterError) as e:
        print(f"Could not send invites.\n{e}", file=sys.stderr)
        return EXIT_FAILURE

    for invite in response.sent:
        print(f"Invitation to join {args.org} has been sent to {invite.email}")
    for failure in response.failed:
        print(f"Could not invite {failure.email}: {failure.error}", file=sys.stderr)
    return EXIT_FAILURE if response.failed else EXIT_OK


async def cmd_invites_accept(
    container: AsyncContainer, args: argparse.Namespace
) -> int:
    request = AcceptInviteRequest(org=args.org, email=args.email, code=args.code)
    try:
        async with container() as request_container:
            use_case = await request_container.get(AcceptInviteUseCase)
            await use_case.execute(request)
    except (DomainError, AdapterError) as e:
        print(f"Could not accept invite.\n{e}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"You have accepted the invitation to join {args.org}.")
    print("Your membership is pending approval by an org administrator.")
    return EXIT_OK


async def cmd_invites_approve(
    container: AsyncContainer, args: argparse.Namespace
) -> int:
    try:
        request = ApproveInviteRequest(invite_id=args.invite_id)
    except ValueError as e:
        raise UsageError(f"Invalid invite identifier: {args.invite_id}") from e

    try:
        async with container() as request_container:
            use_case = await request_container.get(ApproveInviteUseCase)
            await use_case.execute(request, progress=print_progress)
    except (DomainError, AdapterError) as e:
        print(f"Could not approve invite.\n{e}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Invite {args.invite_id} has been approved.")
    return EXIT_OK


async def cmd_invites_list(container: AsyncContainer, args: argparse.Namespace) -> int:
    request = ListInvitesRequest(org=args.org, states=args.states)
    try:
        async with container() as request_container:
            use_case = await request_container.get(ListInvitesUseCase)
            response = await use_case.execute(request)
    except (DomainError, AdapterError) as e:
        print(f"Could not list invites.\n{e}", file=sys.stderr)
        return EXIT_FAILURE

    if not response.invites:
        print("No invites found.")
    for invite in response.invites:
        print(f"{invite.invite_id}\t{invite.email}\t{invite.state}")
    return EXIT_OK


COMMANDS = {
    ("set", None): cmd_set,
    ("unset", None): cmd_unset,
    ("invites", "send"): cmd_invites_send,
    ("invites", "accept"): cmd_invites_accept,
    ("invites", "approve"): cmd_invites_approve,
    ("invites", "list"): cmd_invites_list,
}


async def run(container: AsyncContainer, argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the selected command against ``container``.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    handler = COMMANDS[(args.command, getattr(args, "invites_command", None))]
    try:
        return await handler(container, args)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE


async def _main(argv: Sequence[str] | None) -> int:
    container = create_container()
    try:
        return await run(container, argv)
    finally:
        await container.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Console entry point."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)
    return asyncio.run(_main(argv))


if __name__ == "__main__":
    sys.exit(main())
