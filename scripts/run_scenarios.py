#!/usr/bin/env python3
# ABOUTME: Demo harness that drives the token bucket and leaky bucket limiters
# ABOUTME: Replays a burst of requests and shows grants, denials and replenishment in the log

import argparse
import sys
import threading
import time
from collections import deque

from loguru import logger

from admission import LeakyBucketRateLimiter, TokenBucketRateLimiter
from admission.config import LoggerConfig, setup_logging


def run_token_bucket(requests: int, capacity: int, refill_rate: int, refill_interval: float) -> int:
    """Retry each request until admitted, sleeping one second after a denial."""
    pending = deque(range(1, requests + 1))
    workers = []

    with TokenBucketRateLimiter(capacity, refill_rate, refill_interval) as limiter:
        while pending:
            request_id = pending[0]
            if limiter.consume(request_id):
                pending.popleft()
                # Simulated work for the admitted request
                worker = threading.Thread(target=time.sleep, args=(1.0,))
                worker.start()
                workers.append(worker)
            else:
                time.sleep(1.0)

        logger.info("All requests processed")
        for worker in workers:
            worker.join()

        logger.info(f"Final stats: {limiter.stats().model_dump()}")
    return 0


def run_leaky_bucket(requests: int, capacity: int, leak_interval: float) -> int:
    """Fire two concurrent waves of requests separated by one leak interval."""
    limiter = LeakyBucketRateLimiter(capacity, leak_interval)

    def handle(request_id: int) -> None:
        if limiter.allow():
            logger.info(f"Request allowed {request_id}")
        else:
            logger.info(f"Request denied {request_id}")
        time.sleep(0.2)

    threads = []
    for wave in range(2):
        if wave:
            time.sleep(leak_interval)
        for request_id in range(requests):
            thread = threading.Thread(target=handle, args=(request_id,))
            thread.start()
            threads.append(thread)

    for thread in threads:
        thread.join()

    logger.info(f"Final stats: {limiter.stats().model_dump()}")
    return 0


def main():
    """Main function with command line argument parsing."""
    parser = argparse.ArgumentParser(description="Run admission control demo scenarios")
    parser.add_argument("--requests", type=int, default=10, help="Number of requests per wave")
    parser.add_argument("--capacity", type=int, default=5, help="Bucket capacity")
    parser.add_argument("--log-level", default="DEBUG", help="Console log level")

    subparsers = parser.add_subparsers(dest="strategy", required=True)

    token_parser = subparsers.add_parser("token-bucket", help="Background refill scenario")
    token_parser.add_argument("--refill-rate", type=int, default=2, help="Tokens added per tick")
    token_parser.add_argument("--refill-interval", type=float, default=2.0, help="Seconds between ticks")

    leaky_parser = subparsers.add_parser("leaky-bucket", help="Lazy replenishment scenario")
    leaky_parser.add_argument("--leak-interval", type=float, default=0.5, help="Seconds per credit")

    args = parser.parse_args()
    setup_logging(LoggerConfig(console_level=args.log_level.upper(), enqueue=False))

    if args.strategy == "token-bucket":
        return run_token_bucket(args.requests, args.capacity, args.refill_rate, args.refill_interval)
    return run_leaky_bucket(args.requests, args.capacity, args.leak_interval)


if __name__ == "__main__":
    sys.exit(main())
