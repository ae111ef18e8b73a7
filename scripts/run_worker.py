"""Run the delivery queue workers until interrupted."""

from __future__ import annotations

import argparse
import logging
import signal
import threading

from alnet.application.use_cases.notifications import cleanup_old_notifications
from alnet.domain.entities import DELIVERY_QUEUES
from alnet.infrastructure.database import SessionLocal, initialize_database
from alnet.infrastructure.queue import QueueWorker

logger = logging.getLogger("alnet.worker")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Consume AlNet delivery queues.")
    parser.add_argument(
        "--queue",
        default="all",
        choices=(*DELIVERY_QUEUES, "all"),
        help="Queue to consume (default: all)",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=None,
        help="Seconds to wait when a queue is empty (default: from settings)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Drain the currently due jobs and exit",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    initialize_database()

    session = SessionLocal()
    try:
        cleanup_old_notifications(session)
    finally:
        session.close()

    queues = DELIVERY_QUEUES if args.queue == "all" else (args.queue,)
    workers = [QueueWorker(queue) for queue in queues]

    if args.once:
        for worker in workers:
            processed = worker.run_once()
            logger.info("Processed %s jobs from %s", processed, worker.queue)
        return

    stop = threading.Event()
    signal.signal(signal.SIGINT, lambda *_: stop.set())
    signal.signal(signal.SIGTERM, lambda *_: stop.set())

    threads = [
        threading.Thread(
            target=worker.run_forever,
            kwargs={"poll_interval": args.poll_interval, "stop_event": stop},
            name=f"worker-{worker.queue}",
        )
        for worker in workers
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


if __name__ == "__main__":
    main()
