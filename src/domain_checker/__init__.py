"""
Domain Checker

Check whether domain names are likely registered or available, using DNS
lookups with a fallback to the system whois tool.
"""

__version__ = "0.1.0"


def main():
    """Main entry point for the CLI (and the MCP server with --mcp)."""
    from .cli import main as cli_main
    cli_main()


def show_config(settings=None):
    """Show current configuration."""
    from .config import ENV_DEBUG, get_config_file, is_debug, load_settings

    if settings is None:
        settings = load_settings()

    print("Configuration")
    print("=" * 50)
    print()

    config_file = get_config_file()
    print(f"Config file: {config_file}")
    print(f"  Exists: {config_file.exists()}")
    print()

    def source(key: str) -> str:
        return settings.sources.get(key, "default")

    print(f"Extensions:     {','.join(settings.extensions)}  ({source('extensions')})")
    print(f"Delay:          {settings.delay_ms} ms  ({source('delay_ms')})")
    print(f"whois timeout:  {settings.whois_timeout:g} s  ({source('whois_timeout')})")
    print(f"DNS timeout:    {settings.dns_timeout:g} s  ({source('dns_timeout')})")

    if settings.extra_free_signals or settings.extra_taken_signals:
        print()
        print("Extra whois phrases:")
        for phrase in settings.extra_free_signals:
            print(f"  free:  {phrase}")
        for phrase in settings.extra_taken_signals:
            print(f"  taken: {phrase}")

    print()
    print(f"Debug logging: {'on' if is_debug() else 'off'} (set {ENV_DEBUG}=1 to enable)")
