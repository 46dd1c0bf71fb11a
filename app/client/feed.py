"""Client-side controller for the signed-in recipient's notification feed."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from app.domain.entities import Notification

from .change_feed import ChangeFeed, ChangeSubscription, WebSocketChangeFeed
from .gateway import HttpNotificationGateway, NotificationGateway

logger = logging.getLogger(__name__)

FEED_LIMIT = 20

SoundPlayer = Callable[[], None]
ToastPresenter = Callable[[str, str], None]


class SyncState(str, Enum):
    """Persistence state of an entry's read flag."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    SYNC_FAILED = "sync_failed"


@dataclass
class FeedEntry:
    notification: Notification
    sync_state: SyncState = SyncState.CONFIRMED


class NotificationFeed:
    """Ordered, live view of the recipient's most recent notifications.

    One instance is meant to exist per signed-in session. It is built at the
    composition root (see :meth:`for_session`), shared with every surface that
    shows notifications and closed on sign-out.

    All state lives on the event loop that drives the feed, so no locking is
    needed. Marking a single notification as read is optimistic: memory is
    updated immediately and the backend write happens in the background. A
    failed write leaves the entry read locally and flags it as
    ``SyncState.SYNC_FAILED``; see :attr:`sync_failures` and
    :meth:`retry_failed_syncs`. Marking everything as read waits for the
    backend first.
    """

    def __init__(
        self,
        gateway: NotificationGateway,
        change_feed: ChangeFeed,
        *,
        play_sound: SoundPlayer | None = None,
        show_toast: ToastPresenter | None = None,
        limit: int = FEED_LIMIT,
        sync_grace_period: float = 2.0,
    ) -> None:
        self._gateway = gateway
        self._change_feed = change_feed
        self._play_sound = play_sound
        self._show_toast = show_toast
        self._limit = limit
        self._sync_grace_period = sync_grace_period

        self._recipient_id: str | None = None
        self._entries: list[FeedEntry] = []
        self._loading = False
        self._generation = 0
        self._subscription: ChangeSubscription | None = None
        self._listener: asyncio.Task[None] | None = None
        self._sync_tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def for_session(
        cls,
        base_url: str,
        token: str,
        *,
        play_sound: SoundPlayer | None = None,
        show_toast: ToastPresenter | None = None,
    ) -> "NotificationFeed":
        """Build the feed for a signed-in session talking to ``base_url``."""

        return cls(
            HttpNotificationGateway.connect(base_url, token),
            WebSocketChangeFeed(base_url, token),
            play_sound=play_sound,
            show_toast=show_toast,
        )

    # -- read side -----------------------------------------------------

    @property
    def recipient_id(self) -> str | None:
        return self._recipient_id

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(entry.notification for entry in self._entries)

    @property
    def entries(self) -> tuple[FeedEntry, ...]:
        return tuple(self._entries)

    @property
    def unread_count(self) -> int:
        return sum(1 for entry in self._entries if not entry.notification.is_read)

    @property
    def sync_failures(self) -> tuple[int, ...]:
        return tuple(
            entry.notification.id
            for entry in self._entries
            if entry.sync_state is SyncState.SYNC_FAILED and entry.notification.id is not None
        )

    # -- lifecycle -----------------------------------------------------

    async def open(self, recipient_id: str) -> None:
        await self.set_recipient(recipient_id)

    async def set_recipient(self, recipient_id: str | None) -> None:
        """Switch the feed to ``recipient_id``; ``None`` signs the feed out."""

        await self._teardown()
        self._generation += 1
        generation = self._generation
        self._recipient_id = recipient_id
        self._entries = []
        if recipient_id is None:
            self._loading = False
            return

        self._loading = True
        subscription = await self._subscribe(recipient_id)
        notifications = await self._fetch(recipient_id)
        if generation != self._generation:
            if subscription is not None:
                await subscription.close()
            return

        self._entries = [FeedEntry(notification) for notification in notifications]
        self._loading = False
        if subscription is not None:
            self._subscription = subscription
            self._listener = asyncio.create_task(self._listen(subscription))

    async def close(self) -> None:
        """Sign the feed out and release the gateway it owns."""

        await self.set_recipient(None)
        aclose = getattr(self._gateway, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "NotificationFeed":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _subscribe(self, recipient_id: str) -> ChangeSubscription | None:
        try:
            return await self._change_feed.subscribe(recipient_id)
        except Exception:
            logger.exception("Could not subscribe to notification inserts for %s", recipient_id)
            return None

    async def _fetch(self, recipient_id: str) -> list[Notification]:
        try:
            notifications = await self._gateway.fetch_recent(recipient_id, limit=self._limit)
        except Exception:
            logger.exception("Error fetching notifications")
            return []
        return list(notifications)[: self._limit]

    async def _teardown(self) -> None:
        listener, self._listener = self._listener, None
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            await subscription.close()
        if listener is not None and not listener.done():
            listener.cancel()
            try:
                await listener
            except asyncio.CancelledError:
                pass
        pending = list(self._sync_tasks)
        if pending:
            # In-flight read flags get a grace period before cancellation.
            _, unfinished = await asyncio.wait(pending, timeout=self._sync_grace_period)
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)
        self._sync_tasks.clear()

    # -- realtime ------------------------------------------------------

    async def _listen(self, subscription: ChangeSubscription) -> None:
        async for notification in subscription:
            self.handle_insert(notification)

    def handle_insert(self, notification: Notification) -> bool:
        """Prepend an inserted notification; returns ``False`` for duplicates."""

        if notification.recipient_id != self._recipient_id:
            return False
        if any(entry.notification.id == notification.id for entry in self._entries):
            return False

        self._entries.insert(0, FeedEntry(notification))
        self._alert(notification)
        return True

    def _alert(self, notification: Notification) -> None:
        if self._play_sound is not None:
            try:
                self._play_sound()
            except Exception as exc:
                logger.info("Audio play failed: %s", exc)
        if self._show_toast is not None:
            try:
                self._show_toast(notification.title, notification.message)
            except Exception:
                logger.exception("Could not display notification toast")

    # -- mutations -----------------------------------------------------

    def mark_as_read(self, notification_id: int) -> asyncio.Task[None] | None:
        """Flag ``notification_id`` as read now and persist it in the background.

        Must be called from the event loop driving the feed. Returns the
        persistence task, or ``None`` when there was nothing to update.
        """

        entry = self._find(notification_id)
        if entry is None or self._recipient_id is None:
            return None
        if entry.notification.is_read and entry.sync_state is not SyncState.SYNC_FAILED:
            return None

        entry.notification = replace(entry.notification, is_read=True)
        entry.sync_state = SyncState.PENDING
        return self._schedule_sync(self._recipient_id, notification_id)

    async def mark_all_as_read(self) -> bool:
        """Persist read state for all unread rows, then update memory."""

        recipient_id = self._recipient_id
        if recipient_id is None:
            return False
        generation = self._generation
        try:
            await self._gateway.mark_all_as_read(recipient_id)
        except Exception:
            logger.exception("Error marking all as read")
            return False
        if generation != self._generation:
            return False

        for entry in self._entries:
            if not entry.notification.is_read:
                entry.notification = replace(entry.notification, is_read=True)
            entry.sync_state = SyncState.CONFIRMED
        return True

    async def retry_failed_syncs(self) -> None:
        """Re-send the read flag of every entry whose persistence failed."""

        tasks = [
            task
            for task in (self.mark_as_read(notification_id) for notification_id in self.sync_failures)
            if task is not None
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def wait_for_pending_syncs(self) -> None:
        if self._sync_tasks:
            await asyncio.gather(*list(self._sync_tasks), return_exceptions=True)

    def _schedule_sync(self, recipient_id: str, notification_id: int) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(
            self._persist_read(recipient_id, notification_id, self._generation)
        )
        self._sync_tasks.add(task)
        task.add_done_callback(self._sync_tasks.discard)
        return task

    async def _persist_read(self, recipient_id: str, notification_id: int, generation: int) -> None:
        try:
            await self._gateway.mark_as_read(recipient_id, notification_id)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Error syncing read status for notification %s", notification_id)
            state = SyncState.SYNC_FAILED
        else:
            state = SyncState.CONFIRMED

        if generation != self._generation:
            return
        entry = self._find(notification_id)
        if entry is not None:
            entry.sync_state = state

    def _find(self, notification_id: int) -> FeedEntry | None:
        for entry in self._entries:
            if entry.notification.id == notification_id:
                return entry
        return None


__all__ = ["FEED_LIMIT", "FeedEntry", "NotificationFeed", "SyncState"]
