from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import suppress

from account_activation.infrastructure.db.pool import close_pool, open_pool
from account_activation.infrastructure.email.http_smtp_adapter import (
    HttpSmtpEmailAdapter,
)
from account_activation.infrastructure.http.client import (
    close_http_client,
    open_http_client,
)
from account_activation.infrastructure.outbox.dispatcher import (
    OutboxDispatcher,
    RetryPolicy,
)
from account_activation.logging import setup_logging
from account_activation.settings import get_settings

logger = logging.getLogger(__name__)


async def _run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, env=settings.app_env)

    pool = await open_pool()
    logger.info("worker: pool opened")

    # the adapter borrows the shared client; close_http_client() owns shutdown
    email = HttpSmtpEmailAdapter(
        base_url=settings.smtp_base_url, client=await open_http_client()
    )
    dispatcher = OutboxDispatcher(
        pool=pool,
        email_adapter=email,
        batch_size=settings.outbox_batch_size,
        poll_interval=settings.outbox_poll_interval_ms / 1000,
        retry_policy=RetryPolicy(
            base=settings.outbox_retry_base_seconds,
            max_delay=settings.outbox_retry_max_delay_seconds,
        ),
    )

    stop = asyncio.Event()

    def _on_signal(*_: object) -> None:
        logger.info("worker: stop signal received")
        stop.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with suppress(NotImplementedError):
            loop.add_signal_handler(sig, _on_signal)

    worker_task = asyncio.create_task(dispatcher.run_forever())
    logger.info("worker: started run_forever loop")

    await stop.wait()

    worker_task.cancel()
    with suppress(asyncio.CancelledError):
        await worker_task

    await email.aclose()
    await close_http_client()
    await close_pool()
    logger.info("worker: stopped cleanly")


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":
    main()
