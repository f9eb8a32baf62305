"""In-process registry.

A complete registry kept in memory, reachable through :class:`InMemoryDispatcher`
with the same wire shapes as the HTTP API. Requests and responses cross the
boundary as JSON-compatible data, so clients are exercised exactly as they
would be against the real server. The registry applies the server-side rules:
invite lifecycle ordering, identifier kinds and credential versioning.
"""

import asyncio
import re
import secrets
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

import logfire

from strongbox.adapter.error import TransportError
from strongbox.adapter.registry.dispatcher import DaemonRequest, Dispatcher, Query
from strongbox.domain.error import DomainError, InviteTransitionError
from strongbox.domain.model import (
    CredentialEnvelope,
    CredentialV2Body,
    Envelope,
    OrgBody,
    OrgEnvelope,
    OrgInviteBody,
    OrgInviteEnvelope,
    ProjectBody,
    ProjectEnvelope,
    TeamBody,
    TeamEnvelope,
    UserBody,
    UserEnvelope,
    unwrap,
    unwrap_body,
    wrap,
)
from strongbox.domain.value import (
    EntityKind,
    Identifier,
    InviteState,
    OrgId,
    ProgressEvent,
    ProgressFunc,
    ProjectId,
    TeamId,
    UserId,
    canonical_bytes,
    derive_identifier,
    new_identifier,
    parse_partial,
)

Handler = Callable[..., Awaitable[Any]]

_APPROVE_RE = re.compile(r"^/org-invites/(?P<invite_id>[a-z2-7]+)/approve$")


class InMemoryRegistry:
    """Registry state plus seeding helpers for tests and local runs."""

    def __init__(self) -> None:
        self.orgs: dict[OrgId, OrgEnvelope] = {}
        self.projects: dict[ProjectId, ProjectEnvelope] = {}
        self.teams: dict[TeamId, TeamEnvelope] = {}
        self.users: dict[UserId, UserEnvelope] = {}
        self.invites: dict[Identifier, OrgInviteEnvelope] = {}
        self.invite_codes: dict[Identifier, str] = {}
        self.credentials: dict[Identifier, CredentialEnvelope] = {}
        self.org_members: dict[OrgId, set[UserId]] = {}
        self.team_members: dict[TeamId, set[UserId]] = {}
        self.session_user_id: UserId | None = None

    def add_org(self, name: str) -> OrgEnvelope:
        body = OrgBody(name=name)
        org_id = derive_identifier(EntityKind.ORG, canonical_bytes(body))
        org = wrap(org_id, 1, body)
        self.orgs[org_id] = org
        self.org_members.setdefault(org_id, set())
        return org

    def add_project(self, org_id: OrgId, name: str) -> ProjectEnvelope:
        body = ProjectBody(name=name, org_id=org_id)
        project_id = derive_identifier(EntityKind.PROJECT, canonical_bytes(body))
        project = wrap(project_id, 1, body)
        self.projects[project_id] = project
        return project

    def add_team(self, org_id: OrgId, name: str) -> TeamEnvelope:
        body = TeamBody(name=name, org_id=org_id)
        team_id = derive_identifier(EntityKind.TEAM, canonical_bytes(body))
        team = wrap(team_id, 1, body)
        self.teams[team_id] = team
        self.team_members.setdefault(team_id, set())
        return team

    def add_user(self, username: str, name: str, email: str) -> UserEnvelope:
        body = UserBody(username=username, name=name, email=email)
        user = wrap(new_identifier(EntityKind.USER), 1, body)
        self.users[user.id] = user
        return user

    def login(self, user_id: UserId | None) -> None:
        """Set the identity behind the current session."""
        self.session_user_id = user_id

    def invite_code(self, invite_id: Identifier) -> str:
        """The code delivered to the invitee's email."""
        return self.invite_codes[invite_id]

    def find_org(self, name: str) -> OrgEnvelope | None:
        for org in self.orgs.values():
            if org.body.name == name:
                return org
        return None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _dump(envelope: Envelope) -> dict[str, Any]:
    return envelope.model_dump(mode="json")


def _query_values(query: Query | None, key: str) -> list[str]:
    return [value for name, value in query or () if name == key]


def _query_value(query: Query | None, key: str) -> str | None:
    values = _query_values(query, key)
    return values[0] if values else None


class InMemoryDispatcher(Dispatcher):
    """Dispatcher serving requests from an :class:`InMemoryRegistry`."""

    def __init__(self, registry: InMemoryRegistry) -> None:
        self.registry = registry
        self.handlers: dict[tuple[str, str], Handler] = {
            ("GET", "/self"): self._get_self,
            ("GET", "/orgs"): self._list_orgs,
            ("GET", "/projects"): self._list_projects,
            ("GET", "/teams"): self._list_teams,
            ("GET", "/org-invites"): self._list_invites,
            ("POST", "/org-invites"): self._create_invite,
            ("POST", "/org-invites/accept"): self._accept_invite,
            ("POST", "/org-invites/associate"): self._associate_invite,
            ("GET", "/credentials"): self._list_credentials,
        }
        self.daemon_handlers: dict[tuple[str, str], Handler] = {
            ("POST", "/credentials"): self._create_credential,
        }

    async def call(
        self,
        method: str,
        path: str,
        query: Query | None = None,
        body: Any = None,
    ) -> Any:
        handler = self.handlers.get((method.upper(), path))
        if handler is None:
            raise TransportError(f"No route for {method} {path}", status_code=404)
        # Yield like a real round trip would
        await asyncio.sleep(0)
        return await self._handle(handler, query=query, body=body)

    async def do_with_progress(
        self,
        request: DaemonRequest,
        request_id: str,
        progress: ProgressFunc | None = None,
    ) -> Any:
        def emit(message: str, completed: int | None = None, total: int | None = None):
            if progress is not None:
                progress(
                    ProgressEvent(
                        id=request_id,
                        message=message,
                        completed=completed,
                        total=total,
                    )
                )

        method = request.method.upper()
        match = _APPROVE_RE.match(request.path)
        if method == "POST" and match:
            await asyncio.sleep(0)
            return await self._handle(
                self._approve_invite, invite_id=match["invite_id"], emit=emit
            )

        handler = self.daemon_handlers.get((method, request.path))
        if handler is None:
            raise TransportError(
                f"No route for {request.method} {request.path}", status_code=404
            )
        await asyncio.sleep(0)
        return await self._handle(handler, body=request.body, emit=emit)

    async def _handle(self, handler: Handler, **kwargs: Any) -> Any:
        try:
            return await handler(**kwargs)
        except InviteTransitionError as e:
            raise TransportError(str(e), status_code=409) from e
        except DomainError as e:
            raise TransportError(str(e), status_code=400) from e

    def _session_user(self) -> UserId:
        if self.registry.session_user_id is None:
            raise TransportError("You must be logged in", status_code=401)
        return self.registry.session_user_id

    def _org_id(self, query: Query | None) -> OrgId:
        value = _query_value(query, "org_id")
        if value is None:
            raise TransportError("Missing org_id", status_code=400)
        try:
            org_id = Identifier.parse(value)
        except ValueError as e:
            raise TransportError(f"Invalid org_id: {value}", status_code=400) from e
        if org_id not in self.registry.orgs:
            raise TransportError("Org not found", status_code=404)
        return org_id

    async def _get_self(self, **_: Any) -> Any:
        user_id = self._session_user()
        return _dump(self.registry.users[user_id])

    async def _list_orgs(self, query: Query | None = None, **_: Any) -> Any:
        name = _query_value(query, "name")
        return [
            _dump(org)
            for org in self.registry.orgs.values()
            if name is None or org.body.name == name
        ]

    async def _list_projects(self, query: Query | None = None, **_: Any) -> Any:
        org_id = self._org_id(query)
        name = _query_value(query, "name")
        return [
            _dump(project)
            for project in self.registry.projects.values()
            if project.body.org_id == org_id
            and (name is None or project.body.name == name)
        ]

    async def _list_teams(self, query: Query | None = None, **_: Any) -> Any:
        org_id = self._org_id(query)
        name = _query_value(query, "name")
        return [
            _dump(team)
            for team in self.registry.teams.values()
            if team.body.org_id == org_id and (name is None or team.body.name == name)
        ]

    async def _list_invites(self, query: Query | None = None, **_: Any) -> Any:
        org_id = self._org_id(query)
        try:
            states = {InviteState(value) for value in _query_values(query, "state")}
        except ValueError as e:
            raise TransportError(str(e), status_code=400) from e
        return [
            _dump(invite)
            for invite in self.registry.invites.values()
            if invite.body.org_id == org_id
            and (not states or invite.body.state in states)
        ]

    async def _create_invite(self, body: Any = None, **_: Any) -> Any:
        invite = unwrap_body(EntityKind.ORG_INVITE, body, OrgInviteBody)
        if invite.version != 1 or invite.body.state != InviteState.SENT:
            raise TransportError("A new invite must be unused", status_code=400)
        if invite.body.org_id not in self.registry.orgs:
            raise TransportError("Org not found", status_code=404)
        if invite.id in self.registry.invites:
            raise TransportError("Invite already exists", status_code=409)
        for team_id in invite.body.pending_teams:
            team = self.registry.teams.get(team_id)
            if team is None or team.body.org_id != invite.body.org_id:
                raise TransportError(f"Team not found: {team_id}", status_code=404)

        self.registry.invites[invite.id] = invite
        self.registry.invite_codes[invite.id] = secrets.token_urlsafe(12)
        logfire.info("Invite delivered", invite_id=str(invite.id))
        return _dump(invite)

    def _find_invite(self, body: Any) -> OrgInviteEnvelope:
        if not isinstance(body, dict):
            raise TransportError("Malformed invite request", status_code=400)
        org = self.registry.find_org(body.get("org", ""))
        if org is None:
            raise TransportError("Org not found", status_code=404)
        for invite in self.registry.invites.values():
            if (
                invite.body.org_id == org.id
                and invite.body.email == body.get("email")
                and self.registry.invite_codes[invite.id] == body.get("code")
            ):
                return invite
        raise TransportError("Invalid invite code", status_code=404)

    async def _accept_invite(self, body: Any = None, **_: Any) -> Any:
        invite = self._find_invite(body)
        self.registry.invites[invite.id] = invite.revise(invite.body.accept(_now()))
        return None

    async def _associate_invite(self, body: Any = None, **_: Any) -> Any:
        user_id = self._session_user()
        invite = self._find_invite(body)
        associated = invite.revise(invite.body.associate(user_id))
        self.registry.invites[invite.id] = associated
        return _dump(associated)

    async def _approve_invite(
        self, invite_id: str, emit: Callable[..., None], **_: Any
    ) -> Any:
        approver_id = self._session_user()
        try:
            invite = self.registry.invites.get(Identifier.parse(invite_id))
        except ValueError:
            invite = None
        if invite is None:
            raise TransportError(f"Invite not found: {invite_id}", status_code=404)

        approved = invite.revise(invite.body.approve(approver_id, _now()))
        invitee_id = approved.body.invitee_id
        total = len(approved.body.pending_teams) + 1

        emit("Adding member to org", 0, total)
        self.registry.org_members[approved.body.org_id].add(invitee_id)
        for completed, team_id in enumerate(approved.body.pending_teams, start=1):
            emit("Adding member to team", completed, total)
            self.registry.team_members[team_id].add(invitee_id)

        self.registry.invites[invite.id] = approved
        emit("Invite approved", total, total)
        return None

    async def _create_credential(
        self, emit: Callable[..., None], body: Any = None, **_: Any
    ) -> Any:
        _, credential = unwrap(EntityKind.CREDENTIAL, body)
        incoming = credential.body
        if incoming.org_id not in self.registry.orgs:
            raise TransportError("Org not found", status_code=404)
        project = self.registry.projects.get(incoming.project_id)
        if project is None or project.body.org_id != incoming.org_id:
            raise TransportError("Project not found", status_code=404)

        emit("Encrypting credential", 1, 2)
        existing = self._find_credential(incoming)
        if existing is None:
            stored = credential
        else:
            if isinstance(incoming, CredentialV2Body) and isinstance(
                existing.body, CredentialV2Body
            ):
                incoming = incoming.model_copy(
                    update={
                        "credential_version": existing.body.credential_version + 1
                    }
                )
            stored = existing.revise(incoming)

        self.registry.credentials[stored.id] = stored
        emit("Credential uploaded", 2, 2)
        return _dump(stored)

    def _find_credential(self, body: Any) -> CredentialEnvelope | None:
        for credential in self.registry.credentials.values():
            current = credential.body
            if (
                current.org_id == body.org_id
                and current.project_id == body.project_id
                and current.path_exp == body.path_exp
                and current.name == body.name
            ):
                return credential
        return None

    async def _list_credentials(self, query: Query | None = None, **_: Any) -> Any:
        path = _query_value(query, "path")
        if path is None:
            raise TransportError("Missing path", status_code=400)
        pattern = parse_partial(path)
        return [
            _dump(credential)
            for credential in self.registry.credentials.values()
            if credential.body.path_exp.matches(pattern)
        ]
