"""
Domain Checker MCP Server

Exposes the DNS + whois availability check as MCP tools.
"""

import json

from mcp.server.fastmcp import FastMCP

from .checker import DomainChecker
from .config import ConfigError, Settings, configure_logging, load_settings
from .names import expand_domains, normalize_extensions
from .output import group_results
from .resolver import Availability

# Logs go to stderr; stdout carries the MCP protocol.
# Set DOMAIN_CHECKER_DEBUG=1 to see per-domain DNS/whois details.
configure_logging()

# Server version
VERSION = "0.1.0"

# Initialize the MCP server
mcp = FastMCP("domain-checker")
mcp._mcp_server.version = VERSION


def _get_checker(settings: Settings) -> DomainChecker:
    """Checker configured from the config file and environment."""
    return settings.build_checker()


@mcp.tool()
def version() -> str:
    """
    Get the version of the Domain Checker MCP server.

    Returns:
        Version string including server name and version number.
    """
    return f"Domain Checker MCP Server version {VERSION}"


@mcp.tool()
def get_default_extensions() -> str:
    """
    Get the extensions checked when none are given.

    Returns:
        JSON with the list of default extensions (e.g. ".com").
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        return json.dumps({"error": str(e)})
    return json.dumps({"extensions": settings.extensions})


@mcp.tool()
async def check_domains(
    names: list[str],
    extensions: list[str] | None = None,
    onlyReportAvailable: bool = False
) -> str:
    """
    Check whether domain names are likely registered or available.

    Each name is combined with every extension and checked with DNS lookups
    (A, NS, MX), falling back to the system whois tool. Domains are checked
    one at a time with a short pause between checks, so large batches are slow.

    Args:
        names: Base names to check (e.g. ["myapp", "coolsite"])
        extensions: Extensions to combine with each name (default: .com, .io, .app, .org)
        onlyReportAvailable: If true, leave out taken and undetermined domains

    Returns:
        JSON with per-domain results (available is true, false or null, plus
        the method that decided it), lists of available/taken/undetermined
        domains, and summary counts. "Available" is a heuristic; confirm with
        a registrar before buying.
    """
    if not names:
        return json.dumps({"error": "No domain names provided"})

    try:
        settings = load_settings()
    except ConfigError as e:
        return json.dumps({"error": str(e)})

    if extensions is None:
        extensions = settings.extensions
    else:
        extensions = normalize_extensions(extensions)
        if not extensions:
            return json.dumps({"error": "No valid extensions provided"})

    domains = expand_domains(names, extensions)
    if not domains:
        return json.dumps({"error": "No valid domain names after expansion"})

    checker = _get_checker(settings)
    results = await checker.check_domains(domains)
    groups = group_results(results)

    available = [r.domain for r in groups[Availability.AVAILABLE]]
    response = {"available": available}

    if onlyReportAvailable:
        response["results"] = [r.to_dict() for r in groups[Availability.AVAILABLE]]
    else:
        response["results"] = [r.to_dict() for r in results]
        response["taken"] = [r.domain for r in groups[Availability.TAKEN]]
        response["undetermined"] = [r.domain for r in groups[Availability.UNDETERMINED]]

    response["summary"] = {
        "checked": len(results),
        "available": len(available),
        "taken": len(groups[Availability.TAKEN]),
        "undetermined": len(groups[Availability.UNDETERMINED]),
    }
    return json.dumps(response)


if __name__ == "__main__":
    mcp.run()
