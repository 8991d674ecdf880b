"""Fire-and-forget email notifications.

Request handlers call ``notify``, which only enqueues. A background task
drains the queue and hands each message to the mailer in a worker thread.
Delivery failures are logged and dropped; they never reach the caller.
"""
import asyncio
import logging

from social_api.services.email_templates import EmailComposer, EmailMessage
from social_api.services.mailer import Mailer

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, mailer: Mailer, composer: EmailComposer, maxsize: int = 1000):
        self.mailer = mailer
        self.composer = composer
        self._queue: asyncio.Queue[EmailMessage | None] = asyncio.Queue(maxsize=maxsize)
        self._worker: asyncio.Task | None = None

    async def start(self) -> None:
        if self._worker is None:
            self._worker = asyncio.create_task(self._run(), name="notification-dispatcher")

    async def stop(self) -> None:
        """Deliver what is already queued, then stop the worker."""
        if self._worker is None:
            return
        await self._queue.put(None)
        await self._worker
        self._worker = None

    async def join(self) -> None:
        """Wait until every queued message has been handled."""
        await self._queue.join()

    def notify(self, message: EmailMessage | None) -> None:
        if message is None or not message.to:
            return
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Notification queue full; dropping %r to %s", message.subject, message.to)

    async def _run(self) -> None:
        while True:
            message = await self._queue.get()
            try:
                if message is None:
                    return
                await asyncio.to_thread(self.mailer.send, message)
            except Exception:
                logger.exception("Failed to send %r to %s", message.subject, message.to)
            finally:
                self._queue.task_done()

    # Event helpers used by the endpoints.

    def registered(self, email: str, username: str) -> None:
        self.notify(self.composer.registration(email, username))

    def logged_in(self, email: str, username: str) -> None:
        self.notify(self.composer.login(email, username))

    def post_created(self, email: str, username: str, title: str) -> None:
        self.notify(self.composer.post_created(email, username, title))

    def post_updated(self, email: str, username: str, title: str) -> None:
        self.notify(self.composer.post_updated(email, username, title))

    def post_deleted(self, email: str, username: str, title: str) -> None:
        self.notify(self.composer.post_deleted(email, username, title))
