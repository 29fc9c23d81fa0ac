"""Page machine: owns the current page state and runs dispatched actions."""

from __future__ import annotations

import asyncio
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Optional

from langcat.forms.validator import validate_lang
from langcat.page.handlers import Validator, check_contract, handle
from langcat.page.states import (
    Action,
    Chain,
    EditLang,
    Error,
    Loading,
    PageState,
    SaveLang,
    state_name,
)
from langcat.transport import TransportClient
from langcat.utils.logging import get_logger, set_dispatch_id

logger = get_logger("page.machine")

Subscriber = Callable[[PageState], None]


class PageMachine:
    """
    Single owner of the page state.

    Views read `state`, subscribe to transitions, and send actions through
    `dispatch` (or `post` to run one in the background). Each dispatch gets
    a new id; steps produced for a dispatch that is no longer the latest
    are dropped, so a slow response never overwrites a newer page.
    """

    def __init__(
        self,
        transport: TransportClient,
        validator: Validator = validate_lang,
        loading_on_list: bool = False,
        history_limit: int = 50,
        initial: Optional[PageState] = None,
    ) -> None:
        """
        Initialize the page machine.

        Args:
            transport: Catalog API client
            validator: Draft validator used when saving
            loading_on_list: Show Loading while the landing page is fetched
            history_limit: Number of transitions kept in `history`
            initial: Starting page (Loading by default)
        """
        self.transport = transport
        self.validator = validator
        self.loading_on_list = loading_on_list

        self._state: PageState = initial if initial is not None else Loading()
        self._subscribers: list[Subscriber] = []

        # Dispatch ids; only steps of the pending dispatch are applied
        self._last_id = 0
        self._pending_id = 0
        self._tasks: set[asyncio.Task] = set()

        self.history: deque[tuple[str, str]] = deque(maxlen=history_limit)
        self.stats = DispatchStats()

    @property
    def state(self) -> PageState:
        """Current page state (immutable snapshot)."""
        return self._state

    @property
    def pending_id(self) -> int:
        """Id of the most recent dispatch."""
        return self._pending_id

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked after every transition.

        Returns:
            Function that removes the callback
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def background_tasks(self) -> frozenset[asyncio.Task]:
        """Posted dispatches that have not finished yet."""
        return frozenset(self._tasks)

    def post(self, action: Action) -> asyncio.Task:
        """
        Dispatch an action in the background and return its task.

        Raises:
            ContractViolation: If the action is not valid from the current page
        """
        check_contract(action, self._state)

        task = asyncio.get_running_loop().create_task(self.dispatch(action))
        self._tasks.add(task)
        task.add_done_callback(self._background_done)
        return task

    def _background_done(self, task: asyncio.Task) -> None:
        """Forget a finished background dispatch and log its failure."""
        self._tasks.discard(task)
        if task.cancelled():
            return

        exc = task.exception()
        if exc is not None:
            logger.error(
                "background_dispatch_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )

    async def dispatch(self, action: Action) -> PageState:
        """
        Run an action's handler to completion.

        Args:
            action: Action emitted by the view

        Returns:
            Page state after the handler finished (or was superseded)

        Raises:
            ContractViolation: If the action is not valid from the current page
        """
        check_contract(action, self._state)

        previous_id = self._pending_id
        self._last_id += 1
        dispatch_id = self._last_id
        self._pending_id = dispatch_id
        set_dispatch_id(dispatch_id)
        self.stats.dispatched += 1

        logger.info(
            "action_dispatched",
            action=type(action).__name__,
            from_state=state_name(self._state),
        )

        applied = False
        current: Optional[Action] = action
        try:
            while current is not None:
                next_action: Optional[Action] = None
                steps = handle(
                    current,
                    self._state,
                    self.transport,
                    validator=self.validator,
                    loading_on_list=self.loading_on_list,
                )
                try:
                    async for step in steps:
                        if dispatch_id != self._pending_id:
                            self.stats.dropped += 1
                            logger.info(
                                "stale_response_dropped",
                                action=type(current).__name__,
                                pending_id=self._pending_id,
                            )
                            return self._state

                        if isinstance(step, Chain):
                            next_action = step.action
                            logger.debug("action_chained", action=type(next_action).__name__)
                            break

                        self._apply(step, current)
                        applied = True
                finally:
                    await steps.aclose()

                current = next_action
        except Exception:
            # A dispatch that failed before changing the page does not supersede the one in flight
            if not applied and self._pending_id == dispatch_id:
                self._pending_id = previous_id
            raise

        return self._state

    def _apply(self, new_state: PageState, action: Action) -> None:
        """Make new_state current and notify subscribers."""
        old_state = self._state
        self._state = new_state

        self.history.append((state_name(new_state), datetime.now(timezone.utc).isoformat()))
        self._update_stats(new_state, action)

        logger.info(
            "state_transition",
            from_state=state_name(old_state),
            to_state=state_name(new_state),
        )

        for callback in list(self._subscribers):
            callback(new_state)

    def _update_stats(self, new_state: PageState, action: Action) -> None:
        """Update dispatch statistics based on transition."""
        self.stats.transitions += 1
        if isinstance(new_state, Error):
            self.stats.page_errors += 1
        elif isinstance(new_state, EditLang) and isinstance(action, SaveLang):
            self.stats.validation_failures += 1


class DispatchStats:
    """Statistics for one page machine."""

    def __init__(self) -> None:
        self.dispatched: int = 0
        self.transitions: int = 0
        self.dropped: int = 0
        self.page_errors: int = 0
        self.validation_failures: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "dispatched": self.dispatched,
            "transitions": self.transitions,
            "dropped": self.dropped,
            "page_errors": self.page_errors,
            "validation_failures": self.validation_failures,
        }
