"""
services/paginator.py
---------------------
Paged display of shop items with in-place navigation.

Responsibilities:
    - Split an item list into fixed-size pages (`paginate`).
    - Render one page as a message (`render`).
    - Track one `ViewerSession` per posted message, move it on ◀️ / ▶️
      presses and expire it after a fixed lifetime (`ViewerRegistry`).
"""

import asyncio
import html
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

from apscheduler.jobstores.base import JobLookupError
from telegram.error import TelegramError
from telegram.ext import CallbackContext, Job, JobQueue

from models.display import DisplayUnit, MessageRef
from models.item import Item
from services.transport import TelegramTransport
from utils.logger import get_logger

logger = get_logger(__name__)

PAGE_SIZE = 5
DEFAULT_LIFETIME_SECONDS = 60.0
SHOP_TITLE = "Fortnite Item Shop"


class PageIndexError(IndexError):
    """Raised when a page outside the page set is requested."""


class Direction(str, Enum):
    PREV = "prev"
    NEXT = "next"


class ViewerState(Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True)
class PageSet:
    """Items partitioned into consecutive pages of `page_size` items."""
    pages: tuple[tuple[Item, ...], ...]
    page_size: int

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def is_empty(self) -> bool:
        return not self.pages

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self):
        return iter(self.pages)

    def __getitem__(self, index: int) -> tuple[Item, ...]:
        return self.pages[index]


def paginate(items: Sequence[Item], page_size: int = PAGE_SIZE) -> PageSet:
    """
    Split items into pages, preserving order.

    Raises:
        ValueError: If page_size is less than 1.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    items = tuple(items)
    page_count = math.ceil(len(items) / page_size)
    pages = tuple(items[i * page_size:(i + 1) * page_size] for i in range(page_count))
    return PageSet(pages=pages, page_size=page_size)


def page_indicator(page_index: int, page_count: int) -> str:
    return f"{page_index + 1}/{page_count}"


def render(page_set: PageSet, page_index: int, title: str = SHOP_TITLE) -> DisplayUnit:
    """
    Render one page as an HTML message.

    The preview image is taken from the last item on the page that has one.

    Raises:
        PageIndexError: If page_index is outside the page set.
    """
    if not 0 <= page_index < page_set.page_count:
        raise PageIndexError(
            f"page {page_index} out of range for {page_set.page_count} pages"
        )

    lines = [f"<b>{html.escape(title)} (Page {page_indicator(page_index, page_set.page_count)})</b>"]
    image_url = None
    for item in page_set[page_index]:
        lines.append("")
        lines.append(f"<b>{html.escape(item.name)}</b>")
        lines.append(f"Price: {html.escape(str(item.price))} V-Bucks")
        lines.append(f"Rarity: {html.escape(item.rarity)}")
        if item.image_url:
            image_url = item.image_url

    return DisplayUnit(text="\n".join(lines), image_url=image_url)


@dataclass
class ViewerSession:
    """
    Live pagination state of one posted message.

    State machine: ACTIVE(page_index) --next/prev--> ACTIVE(page_index ± 1),
    ACTIVE --timeout--> EXPIRED. Moves past either end are no-ops.
    """
    message: MessageRef
    page_set: PageSet
    expires_at: float
    page_index: int = 0
    state: ViewerState = ViewerState.ACTIVE
    job: Optional[Union[Job, asyncio.Task]] = field(default=None, repr=False)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def total_pages(self) -> int:
        return self.page_set.page_count

    @property
    def has_navigation(self) -> bool:
        return self.total_pages > 1

    @property
    def is_active(self) -> bool:
        return self.state is ViewerState.ACTIVE

    def step(self, direction: Direction) -> bool:
        """Apply a navigation signal; return True if the page changed."""
        if not self.is_active:
            return False
        if direction is Direction.NEXT and self.page_index + 1 < self.total_pages:
            self.page_index += 1
            return True
        if direction is Direction.PREV and self.page_index > 0:
            self.page_index -= 1
            return True
        return False

    def expire(self) -> None:
        self.state = ViewerState.EXPIRED

    def render(self, title: str = SHOP_TITLE) -> DisplayUnit:
        return render(self.page_set, self.page_index, title)


class ViewerRegistry:
    """
    Registry of active viewer sessions keyed by message identity.

    Expiry is scheduled on the application's job queue when one is
    available, otherwise as a plain asyncio task.
    """

    def __init__(self, transport: TelegramTransport, job_queue: Optional[JobQueue] = None,
                 lifetime_seconds: float = DEFAULT_LIFETIME_SECONDS, title: str = SHOP_TITLE):
        self.transport = transport
        self.job_queue = job_queue
        self.lifetime_seconds = lifetime_seconds
        self.title = title
        self._sessions: dict[MessageRef, ViewerSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, message: MessageRef) -> Optional[ViewerSession]:
        return self._sessions.get(message)

    async def create_viewer(self, chat_id: Union[int, str], page_set: PageSet) -> ViewerSession:
        """
        Post the first page and start a session bound to the posted message.

        Navigation buttons are attached only when there is more than one page.

        Raises:
            ValueError: If the page set is empty.
            telegram.error.TelegramError: If posting the message fails.
        """
        if page_set.is_empty:
            raise ValueError("cannot open a viewer on an empty page set")

        unit = render(page_set, 0, self.title)
        message = await self.transport.send(chat_id, unit, with_navigation=page_set.page_count > 1)

        session = ViewerSession(
            message=message,
            page_set=page_set,
            expires_at=time.time() + self.lifetime_seconds,
        )
        self._sessions[message] = session
        session.job = self._schedule_expiry(message)
        logger.info(
            f"Viewer opened on message {message.message_id} "
            f"({page_set.page_count} pages, {self.lifetime_seconds:.0f}s lifetime)"
        )
        return session

    async def navigate(self, message: MessageRef, direction: Direction, from_bot: bool = False) -> bool:
        """
        Move the viewer bound to `message` one page and edit it in place.

        Returns:
            True if the displayed page changed. Signals from bots, for
            unknown or expired messages, or past either end return False.
        """
        if from_bot:
            return False
        session = self._sessions.get(message)
        if session is None:
            logger.debug(f"No active viewer for message {message.message_id}")
            return False

        async with session.lock:
            previous = session.page_index
            if not session.step(direction):
                return False
            try:
                await self.transport.update(message, session.render(self.title), with_navigation=True)
            except TelegramError as e:
                session.page_index = previous
                logger.error(f"Failed to update viewer on message {message.message_id}: {e}")
                return False
        logger.debug(f"Viewer {message.message_id} moved to page {session.page_index + 1}")
        return True

    async def expire(self, message: MessageRef) -> None:
        """End the session for `message` and remove its navigation buttons."""
        session = self._sessions.pop(message, None)
        if session is None:
            return

        async with session.lock:
            session.expire()
            self._cancel_job(session)
            # Also called for single-page viewers, where there is nothing to remove.
            try:
                await self.transport.remove_navigation(message)
            except TelegramError as e:
                logger.warning(f"Could not remove navigation from message {message.message_id}: {e}")
        logger.info(f"Viewer on message {message.message_id} expired.")

    async def shutdown(self) -> None:
        """Expire every live session."""
        for message in list(self._sessions):
            await self.expire(message)

    # ── Expiry scheduling ─────────────────────────────────

    def _schedule_expiry(self, message: MessageRef) -> Union[Job, asyncio.Task]:
        if self.job_queue is not None:
            return self.job_queue.run_once(
                self._expire_job,
                when=self.lifetime_seconds,
                data=message,
                name=f"viewer:{message.chat_id}:{message.message_id}",
            )
        return asyncio.create_task(self._expire_later(message))

    async def _expire_job(self, context: CallbackContext) -> None:
        message = context.job.data
        session = self._sessions.get(message)
        if session is not None:
            # A fired run_once job is already gone from the scheduler.
            session.job = None
        await self.expire(message)

    async def _expire_later(self, message: MessageRef) -> None:
        await asyncio.sleep(self.lifetime_seconds)
        await self.expire(message)

    @staticmethod
    def _cancel_job(session: ViewerSession) -> None:
        job, session.job = session.job, None
        if job is None:
            return
        if isinstance(job, asyncio.Task):
            # The task may be the one running this expiry.
            if job is not asyncio.current_task():
                job.cancel()
        else:
            try:
                job.schedule_removal()
            except JobLookupError:
                # The scheduler is already stopped during application shutdown.
                logger.debug(f"Expiry job {job.name} already gone from the scheduler")
