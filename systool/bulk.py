"""Running DNS operations over many domains with a pool of workers."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Any

from systool.consistency import ConsistencyChecker
from systool.records import BulkResult, BulkSummary, DNSRecordType
from systool.resolver import DNSQueryError, Resolver

ProgressCallback = Callable[[int, int, str, bool], None]


def _now() -> datetime:
    return datetime.now().astimezone()


def _run(domain: str, operation: Callable[[], Any]) -> BulkResult:
    started = _now()
    data: Any = None
    error: BaseException | None = None
    try:
        data = operation()
    except DNSQueryError as exc:
        data = exc.result
        error = exc
    except Exception as exc:  # one failing domain must not stop the run
        error = exc
    return BulkResult(
        domain=domain,
        success=error is None,
        start_time=started,
        end_time=_now(),
        error=error,
        data=data,
    )


class BulkProcessor:
    """Runs one kind of DNS operation for each domain in a list."""

    def __init__(
        self,
        resolver: Resolver,
        concurrency: int,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self.resolver = resolver
        self.consistency_checker = ConsistencyChecker(resolver)
        self.concurrency = concurrency
        self.progress_callback = progress_callback

    def _process(self, domains: Sequence[str], work: Callable[[str], BulkResult]) -> BulkSummary:
        started = time.monotonic()
        total = len(domains)
        results: list[BulkResult] = []
        successful = 0

        if self.concurrency >= 1 and domains:
            with ThreadPoolExecutor(max_workers=self.concurrency) as pool:
                futures = [pool.submit(work, domain) for domain in domains]
                for future in as_completed(futures):
                    result = future.result()
                    results.append(result)
                    if result.success:
                        successful += 1
                    if self.progress_callback is not None:
                        self.progress_callback(len(results), total, result.domain, result.success)

        return BulkSummary(
            total_domains=total,
            successful=successful,
            failed=total - successful,
            duration=time.monotonic() - started,
            results=results,
        )

    def process_query(
        self, domains: Iterable[str], record_type: DNSRecordType | str, nameservers: Sequence[str]
    ) -> BulkSummary:
        """Query each domain against the first of the given nameservers."""
        nameserver = nameservers[0]
        return self._process(
            list(domains),
            lambda domain: _run(domain, lambda: self.resolver.query(domain, record_type, nameserver)),
        )

    def process_propagation(
        self, domains: Iterable[str], record_type: DNSRecordType | str, nameservers: Sequence[str]
    ) -> BulkSummary:
        """Check propagation of each domain across the given nameservers."""
        servers = list(nameservers)
        return self._process(
            list(domains),
            lambda domain: _run(
                domain, lambda: self.resolver.check_propagation(domain, record_type, servers)
            ),
        )

    def process_consistency(self, domains: Iterable[str], nameservers: Sequence[str]) -> BulkSummary:
        """Check each domain for consistency issues; found issues still count as success."""
        servers = list(nameservers)
        return self._process(
            list(domains),
            lambda domain: _run(
                domain, lambda: self.consistency_checker.check_consistency(domain, servers)
            ),
        )