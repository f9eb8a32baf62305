"""Production container."""

from dishka import AsyncContainer, make_async_container

from strongbox.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container used by the command line client.

    Every swappable component gets its production implementation; settings
    come from ``STRONGBOX_`` environment variables when first requested.
    """
    return make_async_container(*(get_provider(base)() for base in PROVIDERS))
