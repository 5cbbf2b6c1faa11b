"""Per-document scope resolution with staleness tracking.

The controller owns the latest scope tree for one document and decides when
it must be rebuilt from a fresh provider answer.

Design:
- Single event loop; refreshes are asyncio tasks awaiting the provider
- A generation counter invalidates in-flight refreshes; a refresh whose
  generation is no longer current discards its result
- Queries arriving during a refresh share it instead of re-querying
- One pending-timer slot holds the next debounced or retry resolution
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

import structlog

from scopeline.config.models import ResolutionConfig
from scopeline.core.errors import InternalError, ResolutionCancelledError
from scopeline.core.logging import set_request_id
from scopeline.scope.builder import build_scope_tree
from scopeline.scope.models import Position
from scopeline.scope.node import PLACEHOLDER, ScopeNode
from scopeline.scope.resolver import resolve_position
from scopeline.symbols.provider import SymbolProvider

logger = structlog.get_logger()


class ControllerState(Enum):
    """Freshness of the controller's scope tree."""

    IDLE = "idle"
    REFRESHING = "refreshing"
    STALE = "stale"


@dataclass
class ControllerStatus:
    """Current controller status."""

    state: ControllerState
    generation: int
    node_count: int
    pending: bool
    last_error: str | None = None


@dataclass
class ScopeResolutionController:
    """
    Resolves positions in one document to their innermost scope.

    Design:
    - Starts STALE; the first resolve() requests symbols
    - mark_stale() invalidates the tree and any refresh in flight
    - Trees are replaced wholesale, never edited in place
    - queue_position() debounces cursor movement and retries empty answers
    """

    document: str
    provider: SymbolProvider
    config: ResolutionConfig = field(default_factory=ResolutionConfig)
    active_document: Callable[[], str | None] | None = None

    _state: ControllerState = field(default=ControllerState.STALE, init=False)
    _generation: int = field(default=0, init=False)
    _root: ScopeNode | None = field(default=None, init=False)
    _refresh_task: asyncio.Task[ScopeNode | None] | None = field(default=None, init=False)
    _pending_task: asyncio.Task[None] | None = field(default=None, init=False)
    _last_error: str | None = field(default=None, init=False)
    _on_resolved: Callable[[ScopeNode], Awaitable[None]] | None = field(default=None, init=False)

    def mark_stale(self) -> None:
        """Invalidate the current tree and any refresh still in flight."""
        self._generation += 1
        self._state = ControllerState.STALE
        logger.debug("scope_tree_stale", document=self.document, generation=self._generation)

    async def resolve(self, position: Position) -> ScopeNode | None:
        """Find the innermost scope at ``position``.

        Returns None when the provider had no symbols; the caller should
        show PLACEHOLDER and retry later.

        Raises:
            ResolutionCancelledError: If the refresh this call waited on was
                superseded by mark_stale() or a newer refresh.
        """
        if self._state == ControllerState.IDLE and self._root is not None:
            return resolve_position(self._root, position)

        if self._state == ControllerState.STALE or self._refresh_task is None:
            task = self._start_refresh()
        else:
            task = self._refresh_task

        # Shielded so a cancelled caller does not abort a refresh others share
        root = await asyncio.shield(task)
        if root is None:
            return None
        node = resolve_position(root, position)
        if node is not None:
            logger.debug("scope_resolved", position=str(position), scope=node.qualified_name())
        return node

    def _start_refresh(self) -> asyncio.Task[ScopeNode | None]:
        if self.active_document is not None:
            active = self.active_document()
            if active != self.document:
                raise InternalError.unexpected(
                    "symbols requested for an inactive document",
                    document=self.document,
                    active=active,
                )

        self._generation += 1
        self._state = ControllerState.REFRESHING
        task = asyncio.get_running_loop().create_task(self._refresh(self._generation))
        task.add_done_callback(_retrieve_exception)
        self._refresh_task = task
        return task

    async def _refresh(self, generation: int) -> ScopeNode | None:
        logger.debug("symbol_refresh_started", document=self.document, generation=generation)
        try:
            symbols = await self.provider(self.document)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._state = ControllerState.STALE
            raise
        except Exception as e:
            if generation != self._generation:
                raise ResolutionCancelledError.superseded(
                    self.document, generation, self._generation
                ) from e
            self._state = ControllerState.STALE
            self._last_error = str(e)
            logger.warning("symbol_provider_failed", document=self.document, error=str(e))
            return None

        if generation != self._generation:
            logger.debug(
                "symbol_refresh_discarded",
                document=self.document,
                generation=generation,
                current=self._generation,
            )
            raise ResolutionCancelledError.superseded(self.document, generation, self._generation)

        if not symbols:
            self._state = ControllerState.STALE
            logger.debug("symbol_refresh_empty", document=self.document, generation=generation)
            return None

        root = build_scope_tree(symbols)
        self._root = root
        self._state = ControllerState.IDLE
        self._last_error = None
        return root

    def set_on_resolved(self, callback: Callable[[ScopeNode], Awaitable[None]]) -> None:
        """Set callback receiving each debounced resolution (or PLACEHOLDER)."""
        self._on_resolved = callback

    def queue_position(self, position: Position) -> None:
        """Resolve ``position`` after the debounce window, replacing any pending one."""
        self._schedule(position, self.config.debounce_sec)

    def _schedule(self, position: Position, delay: float) -> None:
        loop = asyncio.get_running_loop()

        current = asyncio.current_task()
        pending = self._pending_task
        if pending is not None and pending is not current and not pending.done():
            pending.cancel()

        self._pending_task = loop.create_task(self._delayed_resolve(position, delay))

    async def _delayed_resolve(self, position: Position, delay: float) -> None:
        set_request_id()
        try:
            await asyncio.sleep(delay)
            node = await self.resolve(position)
        except asyncio.CancelledError:
            return
        except ResolutionCancelledError as e:
            logger.debug("scope_resolution_superseded", **e.details)
            return

        if node is None:
            node = PLACEHOLDER
            logger.debug(
                "scope_retry_scheduled",
                document=self.document,
                delay=self.config.retry_delay_sec,
            )
            self._schedule(position, self.config.retry_delay_sec)

        if self._on_resolved is not None:
            await self._on_resolved(node)

    async def stop(self) -> None:
        """Cancel the pending debounced or retry resolution, if any."""
        pending = self._pending_task
        self._pending_task = None
        if pending is not None and not pending.done():
            pending.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await pending

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def tree(self) -> ScopeNode | None:
        """Root of the latest successfully built tree."""
        return self._root

    @property
    def status(self) -> ControllerStatus:
        """Get current controller status."""
        node_count = 0
        if self._root is not None:
            node_count = sum(1 for _ in self._root.iter_preorder()) - 1
        return ControllerStatus(
            state=self._state,
            generation=self._generation,
            node_count=node_count,
            pending=self._pending_task is not None and not self._pending_task.done(),
            last_error=self._last_error,
        )


def _retrieve_exception(task: asyncio.Task[ScopeNode | None]) -> None:
    # Superseded refreshes may finish with nobody awaiting them
    if not task.cancelled():
        task.exception()
