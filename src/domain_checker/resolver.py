"""
Domain availability resolver.

Classifies one fully qualified domain as taken, available or undetermined:

1. DNS probe: A, NS and MX records are queried in order. The first type that
   resolves proves the domain is registered.
2. whois heuristic: when DNS finds nothing, the system ``whois`` tool is run
   and its text output is matched against the phrase table in ``signals``.

Every call yields exactly one CheckResult. Failures never propagate; a whois
that cannot be run or times out gives an undetermined result.
"""

import asyncio
import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

import dns.asyncresolver
import dns.exception

from .signals import DEFAULT_SIGNALS, WhoisSignals

logger = logging.getLogger(__name__)

# Probed in order; the first one that resolves is reported
DNS_RECORD_TYPES = ("A", "NS", "MX")

WHOIS_COMMAND = "whois"
DEFAULT_WHOIS_TIMEOUT = 8.0
DEFAULT_DNS_TIMEOUT = 5.0


class Availability(Enum):
    """Tri-state outcome of a domain check."""

    AVAILABLE = "available"
    TAKEN = "taken"
    UNDETERMINED = "undetermined"  # check manually

    def as_json(self) -> bool | None:
        """JSON value: true, false or null."""
        if self is Availability.AVAILABLE:
            return True
        if self is Availability.TAKEN:
            return False
        return None


class Method(str, Enum):
    """Which signal produced a verdict."""

    DNS_A = "dns:A"
    DNS_NS = "dns:NS"
    DNS_MX = "dns:MX"
    WHOIS_RECORD = "whois:record"
    WHOIS_REGISTRAR = "whois:registrar"
    WHOIS_FREE = "whois:free"
    DNS_CLEAN_WHOIS_TLD = "dns-clean+whois-tld"
    TIMEOUT = "timeout"

    @classmethod
    def for_record_type(cls, rdtype: str) -> "Method":
        return cls(f"dns:{rdtype.upper()}")

    @property
    def is_dns(self) -> bool:
        return self.value.startswith("dns:")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CheckResult:
    """Result of a single domain check."""

    domain: str
    available: Availability
    method: Method

    def __post_init__(self) -> None:
        if not self.domain:
            raise ValueError("CheckResult requires a domain")
        if self.method.is_dns and self.available is not Availability.TAKEN:
            raise ValueError(f"{self.method.value} result must be taken")

    def to_dict(self) -> dict:
        return {
            "domain": self.domain,
            "available": self.available.as_json(),
            "method": self.method.value,
        }


class WhoisError(Exception):
    """The whois tool could not be run, failed, or timed out."""


WhoisRunner = Callable[[str, float], Awaitable[str]]


def _run_whois_sync(domain: str, timeout: float, command: str) -> str:
    try:
        result = subprocess.run(
            [command, domain],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise WhoisError(f"{command} timed out after {timeout:g}s") from e
    except FileNotFoundError as e:
        raise WhoisError(f"{command} not found") from e
    except OSError as e:
        raise WhoisError(f"{command} failed to start: {e}") from e
    except ValueError as e:
        # Arguments with NUL bytes or unencodable characters
        raise WhoisError(f"{command} rejected {domain!r}: {e}") from e

    if result.returncode != 0:
        raise WhoisError(f"{command} exited with status {result.returncode}")
    return result.stdout


async def run_whois(domain: str, timeout: float, command: str = WHOIS_COMMAND) -> str:
    """
    Run ``whois <domain>`` and return its stdout.

    The process runs in a worker thread so the event loop stays free.
    Raises WhoisError if the tool is missing, exits non-zero, or runs
    longer than ``timeout`` seconds.
    """
    return await asyncio.to_thread(_run_whois_sync, domain, timeout, command)


def classify_whois(
    output: str,
    domain: str,
    signals: WhoisSignals = DEFAULT_SIGNALS,
) -> tuple[Availability, Method]:
    """
    Classify raw whois text for a domain whose DNS probe found nothing.

    Matching is case-insensitive substring search, in this order:
    explicit record line, free phrase, taken phrase. With no match at all
    the domain is reported available (soft verdict: many registries only
    return TLD-level boilerplate for unregistered names).
    """
    out = output.lower()
    domain_key = domain.lower()

    if any(line in out for line in signals.record_lines(domain_key)):
        return Availability.TAKEN, Method.WHOIS_RECORD

    for phrase in signals.free:
        if phrase in out:
            return Availability.AVAILABLE, Method.WHOIS_FREE

    for phrase in signals.taken:
        if phrase in out:
            return Availability.TAKEN, Method.WHOIS_REGISTRAR

    return Availability.AVAILABLE, Method.DNS_CLEAN_WHOIS_TLD


class DomainResolver:
    """
    Two-stage availability resolver (DNS probe, then whois).

    Usage:
        resolver = DomainResolver()
        result = await resolver.resolve("example.com")

    ``dns_resolver`` is anything with an async ``resolve(qname, rdtype)``
    (defaults to dnspython's async resolver). ``whois`` is an async callable
    ``(domain, timeout) -> str`` that raises WhoisError on failure.
    """

    def __init__(
        self,
        dns_resolver=None,
        whois: WhoisRunner | None = None,
        whois_timeout: float = DEFAULT_WHOIS_TIMEOUT,
        dns_timeout: float = DEFAULT_DNS_TIMEOUT,
        record_types: tuple[str, ...] = DNS_RECORD_TYPES,
        signals: WhoisSignals = DEFAULT_SIGNALS,
    ) -> None:
        self._dns = dns_resolver
        self._whois = whois or run_whois
        self.whois_timeout = whois_timeout
        self.dns_timeout = dns_timeout
        self.record_types = tuple(t.upper() for t in record_types)
        self.signals = signals

        # Every probed type needs a method tag
        for rdtype in self.record_types:
            Method.for_record_type(rdtype)

    def _get_dns_resolver(self):
        if self._dns is None:
            resolver = dns.asyncresolver.Resolver()
            resolver.lifetime = self.dns_timeout
            self._dns = resolver
        return self._dns

    async def probe_dns(self, domain: str) -> Method | None:
        """Return the method tag of the first record type that resolves, if any."""
        try:
            resolver = self._get_dns_resolver()
        except dns.exception.DNSException as e:
            logger.warning("DNS resolver unavailable, skipping DNS probe: %s", type(e).__name__)
            return None

        for rdtype in self.record_types:
            try:
                answer = await resolver.resolve(domain, rdtype)
            except (dns.exception.DNSException, OSError) as e:
                logger.debug("%s %s: %s", domain, rdtype, type(e).__name__)
                continue

            if answer is not None and len(answer) > 0:
                return Method.for_record_type(rdtype)

        return None

    async def query_whois(self, domain: str) -> CheckResult:
        """Classify a domain from whois output alone."""
        try:
            output = await self._whois(domain, self.whois_timeout)
        except (WhoisError, OSError) as e:
            logger.debug("%s whois failed: %s", domain, e)
            return CheckResult(domain, Availability.UNDETERMINED, Method.TIMEOUT)

        available, method = classify_whois(output or "", domain, self.signals)
        return CheckResult(domain, available, method)

    async def resolve(self, domain: str) -> CheckResult:
        """Check one fully qualified domain. Never raises."""
        method = await self.probe_dns(domain)
        if method is not None:
            return CheckResult(domain, Availability.TAKEN, method)
        return await self.query_whois(domain)
