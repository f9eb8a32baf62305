"""Registry and daemon clients."""

from strongbox.adapter.registry.credentials import CredentialsClient
from strongbox.adapter.registry.dispatcher import (
    REQUEST_ID_HEADER,
    DaemonRequest,
    Dispatcher,
)
from strongbox.adapter.registry.http import HttpDispatcher
from strongbox.adapter.registry.inmemory import InMemoryDispatcher, InMemoryRegistry
from strongbox.adapter.registry.invites import OrgInvitesClient
from strongbox.adapter.registry.orgs import OrgsClient, ProjectsClient, TeamsClient
from strongbox.adapter.registry.session import SessionClient

__all__ = [
    "REQUEST_ID_HEADER",
    "CredentialsClient",
    "DaemonRequest",
    "Dispatcher",
    "HttpDispatcher",
    "InMemoryDispatcher",
    "InMemoryRegistry",
    "OrgInvitesClient",
    "OrgsClient",
    "ProjectsClient",
    "SessionClient",
    "TeamsClient",
]
