"""Batched dispatch into a fixed pool of polite workers.

The dispatcher feeds the shared queue in groups of ``batch_size`` and rests
``network_pause`` seconds between groups. Each of the ``max_concurrency``
workers handles one domain at a time and waits ``request_delay`` seconds
before taking the next one.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from .config import ScanConfig
from .probe import make_client
from .verify import verify_domain

logger = logging.getLogger(__name__)

_STOP = object()


@dataclass
class ScanSummary:
    dispatched: int = 0
    positives: int = 0
    batches: list = field(default_factory=list)


def iter_domains(lines):
    for line in lines:
        domain = line.strip()
        if domain:
            yield domain


def batched(domains, size):
    batch = []
    for domain in domains:
        batch.append(domain)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


async def dispatch(domains, queue, batch_size, pause, sleep=asyncio.sleep):
    """Enqueue every domain once, pausing between groups. Returns group sizes."""
    sizes = []
    for batch in batched(domains, batch_size):
        if sizes:
            await sleep(pause)
        for domain in batch:
            await queue.put(domain)
        sizes.append(len(batch))
        logger.debug("batch %d enqueued (%d domains)", len(sizes), len(batch))
    return sizes


async def _worker(n, queue, client, sink, verify, config, sleep, summary):
    while True:
        domain = await queue.get()
        if domain is _STOP:
            queue.task_done()
            logger.debug("worker %d done", n)
            return
        try:
            if await verify(client, domain, config.request_timeout):
                summary.positives += 1
                await sink.record(domain)
        except Exception as e:
            # per-domain failures stop here
            print(f"[ERROR] Unexpected failure while processing {domain}: {e!r}")
            logger.exception("worker %d failed on %s", n, domain)
        finally:
            queue.task_done()
        await sleep(config.request_delay)


async def run_scan(domains, sink, config=None, client=None, verify=verify_domain, sleep=asyncio.sleep):
    """Scan ``domains`` and send every positive to ``sink``.

    Args:
        domains: iterable of lines; surrounding whitespace is trimmed, blanks skipped
        sink: object with an async ``record(domain)`` method
        config: ScanConfig, defaults to the module constants
        client: httpx.AsyncClient to reuse (one is created and closed if None)
        verify: coroutine function (client, domain, timeout) -> bool
        sleep: coroutine used for the batch pause and worker delay

    Returns:
        ScanSummary once every worker has drained the queue.
    """
    config = config or ScanConfig()
    summary = ScanSummary()
    queue = asyncio.Queue(maxsize=config.max_concurrency)

    own_client = client is None
    if own_client:
        client = make_client(config)

    workers = [
        asyncio.create_task(_worker(i, queue, client, sink, verify, config, sleep, summary))
        for i in range(config.max_concurrency)
    ]
    try:
        summary.batches = await dispatch(
            iter_domains(domains), queue, config.batch_size, config.network_pause, sleep
        )
        for _ in workers:
            await queue.put(_STOP)
        await asyncio.gather(*workers)
    except BaseException:
        for task in workers:
            task.cancel()
        raise
    finally:
        if own_client:
            await client.aclose()

    summary.dispatched = sum(summary.batches)
    return summary
