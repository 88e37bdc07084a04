"""
Configuration for domain-checker.

Settings lookup order (later wins):
1. Built-in defaults
2. Config file (~/.config/domain-checker/config.json)
3. Environment variables (DOMAIN_CHECKER_*)
4. Command-line flags (applied by the CLI)

Example config.json:
    {
      "extensions": [".com", ".io", ".dev"],
      "delay_ms": 500,
      "whois_timeout": 10,
      "extra_free_signals": ["no object found"]
    }
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .checker import DEFAULT_DELAY_MS, DomainChecker
from .names import DEFAULT_EXTENSIONS, normalize_extensions
from .resolver import DEFAULT_DNS_TIMEOUT, DEFAULT_WHOIS_TIMEOUT, DomainResolver
from .signals import DEFAULT_SIGNALS, WhoisSignals

logger = logging.getLogger(__name__)

ENV_EXTENSIONS = "DOMAIN_CHECKER_EXTENSIONS"
ENV_DELAY = "DOMAIN_CHECKER_DELAY"
ENV_WHOIS_TIMEOUT = "DOMAIN_CHECKER_WHOIS_TIMEOUT"
ENV_DNS_TIMEOUT = "DOMAIN_CHECKER_DNS_TIMEOUT"
ENV_DEBUG = "DOMAIN_CHECKER_DEBUG"


class ConfigError(ValueError):
    """A configuration value could not be parsed."""


@dataclass
class Settings:
    """Resolved configuration for a run."""

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    delay_ms: int = DEFAULT_DELAY_MS
    whois_timeout: float = DEFAULT_WHOIS_TIMEOUT
    dns_timeout: float = DEFAULT_DNS_TIMEOUT
    extra_free_signals: list[str] = field(default_factory=list)
    extra_taken_signals: list[str] = field(default_factory=list)
    sources: dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def delay(self) -> float:
        """Delay between checks in seconds."""
        return self.delay_ms / 1000

    def whois_signals(self) -> WhoisSignals:
        return DEFAULT_SIGNALS.extended(
            free=self.extra_free_signals,
            taken=self.extra_taken_signals,
        )

    def build_checker(self) -> DomainChecker:
        """Sequential checker using these timeouts, phrases and delay."""
        resolver = DomainResolver(
            whois_timeout=self.whois_timeout,
            dns_timeout=self.dns_timeout,
            signals=self.whois_signals(),
        )
        return DomainChecker(resolver=resolver, delay=self.delay)


def get_config_dir() -> Path:
    """Get the config directory for this app."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return base / 'domain-checker'


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / 'config.json'


def load_config(path: Path | None = None) -> dict:
    """Read the config file. Missing or invalid files give an empty dict."""
    config_file = path or get_config_file()
    if not config_file.exists():
        return {}

    try:
        config = json.loads(config_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring config file %s: %s", config_file, e)
        return {}

    if not isinstance(config, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", config_file)
        return {}
    return config


def is_debug() -> bool:
    return os.environ.get(ENV_DEBUG, "").lower() not in ("", "0", "false", "no")


def _parse_number(name: str, value, kind=float):
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if number < 0:
        raise ConfigError(f"{name} must not be negative")
    return number


def _string_list(name: str, value) -> list[str]:
    """A string or list of strings from the config file; other entries are dropped."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        logger.warning("Ignoring %s in config file: expected a list of strings", name)
        return []

    entries = []
    for item in value:
        if isinstance(item, str):
            entries.append(item)
        else:
            logger.warning("Ignoring %s entry %r in config file: not a string", name, item)
    return entries


def _phrase_list(name: str, value) -> list[str]:
    return [p.strip().lower() for p in _string_list(name, value) if p.strip()]


def load_settings(config_path: Path | None = None, environ: dict | None = None) -> Settings:
    """
    Build Settings from defaults, the config file and the environment.

    Raises ConfigError for values that are not valid numbers.
    """
    env = os.environ if environ is None else environ
    settings = Settings()

    config = load_config(config_path)
    source = f"config file ({config_path or get_config_file()})"

    if "extensions" in config:
        extensions = normalize_extensions(_string_list("extensions", config["extensions"]))
        if extensions:
            settings.extensions = extensions
            settings.sources["extensions"] = source
    if "delay_ms" in config:
        settings.delay_ms = _parse_number("delay_ms", config["delay_ms"], int)
        settings.sources["delay_ms"] = source
    if "whois_timeout" in config:
        settings.whois_timeout = _parse_number("whois_timeout", config["whois_timeout"])
        settings.sources["whois_timeout"] = source
    if "dns_timeout" in config:
        settings.dns_timeout = _parse_number("dns_timeout", config["dns_timeout"])
        settings.sources["dns_timeout"] = source
    settings.extra_free_signals = _phrase_list("extra_free_signals", config.get("extra_free_signals", []))
    settings.extra_taken_signals = _phrase_list("extra_taken_signals", config.get("extra_taken_signals", []))

    if value := env.get(ENV_EXTENSIONS):
        extensions = normalize_extensions(value)
        if extensions:
            settings.extensions = extensions
            settings.sources["extensions"] = "environment variable"
    if value := env.get(ENV_DELAY):
        settings.delay_ms = _parse_number(ENV_DELAY, value, int)
        settings.sources["delay_ms"] = "environment variable"
    if value := env.get(ENV_WHOIS_TIMEOUT):
        settings.whois_timeout = _parse_number(ENV_WHOIS_TIMEOUT, value)
        settings.sources["whois_timeout"] = "environment variable"
    if value := env.get(ENV_DNS_TIMEOUT):
        settings.dns_timeout = _parse_number(ENV_DNS_TIMEOUT, value)
        settings.sources["dns_timeout"] = "environment variable"

    return settings


def configure_logging() -> None:
    """Log to stderr; debug records only when DOMAIN_CHECKER_DEBUG is set."""
    logging.basicConfig(
        level=logging.DEBUG if is_debug() else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
