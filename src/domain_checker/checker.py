"""
Sequential domain checking with a fixed delay between checks.

whois servers rate-limit or block bursts, so domains are checked one at a
time, in the order given, with a pause after every check.
"""

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Callable

from .resolver import CheckResult, DomainResolver

DEFAULT_DELAY_MS = 350


@dataclass
class FixedDelayLimiter:
    """Waits a fixed delay after each check."""

    delay: float = DEFAULT_DELAY_MS / 1000

    async def pause(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)


class DomainChecker:
    """
    Checks domains one by one, preserving input order.

    Usage:
        checker = DomainChecker(delay=0.35)
        async for result in checker.iter_results(["example.com", "example.io"]):
            print(result.domain, result.available)
    """

    def __init__(
        self,
        resolver: DomainResolver | None = None,
        delay: float = DEFAULT_DELAY_MS / 1000,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.resolver = resolver or DomainResolver()
        self.limiter = FixedDelayLimiter(delay=delay)

    async def iter_results(
        self,
        domains: list[str],
        on_start: Callable[[str], None] | None = None,
    ) -> AsyncIterator[CheckResult]:
        """
        Yield one result per domain as soon as it is ready.

        on_start, if given, is called with each domain before it is checked.
        """
        for domain in domains:
            if on_start:
                on_start(domain)
            result = await self.resolver.resolve(domain)
            yield result
            await self.limiter.pause()

    async def check_domains(self, domains: list[str]) -> list[CheckResult]:
        """Check all domains and return results in input order."""
        return [result async for result in self.iter_results(domains)]

    async def check_domain(self, domain: str) -> CheckResult:
        """Check a single domain (no delay)."""
        return await self.resolver.resolve(domain)


async def check_domains_async(
    domains: list[str],
    delay: float = DEFAULT_DELAY_MS / 1000,
    resolver: DomainResolver | None = None,
) -> list[CheckResult]:
    """
    Convenience function for checking domains without building a checker.

    Args:
        domains: Fully qualified domain names, checked in this order
        delay: Seconds to wait after every check
        resolver: Resolver to use (default: DNS + system whois)

    Returns:
        List of CheckResult objects, one per domain, in input order
    """
    checker = DomainChecker(resolver=resolver, delay=delay)
    return await checker.check_domains(domains)


def check_domains(
    domains: list[str],
    delay: float = DEFAULT_DELAY_MS / 1000,
    resolver: DomainResolver | None = None,
) -> list[CheckResult]:
    """Synchronous wrapper for check_domains_async."""
    return asyncio.run(check_domains_async(domains, delay=delay, resolver=resolver))
