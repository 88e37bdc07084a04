"""
Whois phrase tables.

Registries answer whois queries in free text with no shared schema, so
availability is guessed from substrings. The phrases below are matched
against lower-cased output, in the order listed. Registries keep adding
new phrasings; extend the table here (or via ``extra_free_signals`` /
``extra_taken_signals`` in the config file) rather than in the resolver.
"""

from dataclasses import dataclass

# "{domain}" is replaced with the lower-cased domain being checked
RECORD_LINE_PATTERNS = (
    "domain name: {domain}",
    "domain: {domain}",
)

# Phrases that strongly indicate the domain is free
FREE_SIGNALS = (
    "no match for",
    "not found",
    "no data found",
    "no entries found",
    "status: free",
    "is available",
    "domain not found",
)

# Phrases that strongly indicate the domain is registered
TAKEN_SIGNALS = (
    "registrar:",
    "creation date:",
    "created:",
)


@dataclass(frozen=True)
class WhoisSignals:
    """Ordered phrase table used by the whois classifier."""

    record_patterns: tuple[str, ...] = RECORD_LINE_PATTERNS
    free: tuple[str, ...] = FREE_SIGNALS
    taken: tuple[str, ...] = TAKEN_SIGNALS

    def record_lines(self, domain: str) -> list[str]:
        """Explicit record lines for a (lower-cased) domain."""
        return [p.format(domain=domain) for p in self.record_patterns]

    def extended(
        self,
        free: list[str] | tuple[str, ...] = (),
        taken: list[str] | tuple[str, ...] = (),
    ) -> "WhoisSignals":
        """Return a copy with extra phrases appended after the built-in ones."""
        extra_free = tuple(p.lower() for p in free if p and p.lower() not in self.free)
        extra_taken = tuple(p.lower() for p in taken if p and p.lower() not in self.taken)
        return WhoisSignals(
            record_patterns=self.record_patterns,
            free=self.free + extra_free,
            taken=self.taken + extra_taken,
        )


DEFAULT_SIGNALS = WhoisSignals()
