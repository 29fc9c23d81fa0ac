"""Wiring between configuration, transport, page machine and a view."""

from __future__ import annotations

from typing import Callable, Optional

from langcat.config.settings import ClientConfig
from langcat.page import LoadList, PageMachine, PageState
from langcat.transport import HttpTransport, TransportClient
from langcat.utils.logging import get_logger

logger = get_logger("app")


def create_transport(config: ClientConfig) -> HttpTransport:
    """Build the HTTP transport described by config."""
    return HttpTransport(
        base_url=config.api.base_url,
        timeout=config.api.timeout,
        headers=config.api.headers,
    )


def create_machine(
    config: ClientConfig,
    transport: Optional[TransportClient] = None,
) -> PageMachine:
    """
    Build a page machine in its start state (Loading).

    Args:
        config: Client configuration
        transport: Catalog API client (defaults to an HttpTransport from config)

    Returns:
        Configured PageMachine
    """
    if transport is None:
        transport = create_transport(config)

    return PageMachine(
        transport=transport,
        loading_on_list=config.page.loading_on_list,
        history_limit=config.page.history_limit,
    )


async def mount(
    machine: PageMachine,
    view: Optional[Callable[[PageState], None]] = None,
) -> PageState:
    """
    Attach a view and load the landing page.

    The view, if any, is subscribed before the first dispatch so it sees
    every transition.

    Returns:
        Page state after the landing page load
    """
    if view is not None:
        view(machine.state)
        machine.subscribe(view)

    logger.info("view_mounted")
    return await machine.dispatch(LoadList())
