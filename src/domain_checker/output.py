"""
Rendering and exporting check results.

Console output is colourized only when writing to a terminal.
"""

import csv
import io
import json
import sys
from pathlib import Path
from typing import TextIO

from .resolver import Availability, CheckResult

COLUMN_WIDTH = 30
RULE = "─" * 50

_ANSI = {
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "green": "\x1b[32m",
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
}
_RESET = "\x1b[0m"


class Palette:
    """ANSI styling that turns into a no-op when disabled."""

    def __init__(self, enabled: bool):
        self.enabled = enabled

    @classmethod
    def for_stream(cls, stream: TextIO) -> "Palette":
        isatty = getattr(stream, "isatty", None)
        return cls(bool(isatty and isatty()))

    def _wrap(self, style: str, text: str) -> str:
        if not self.enabled:
            return text
        return f"{_ANSI[style]}{text}{_RESET}"

    def bold(self, text: str) -> str:
        return self._wrap("bold", text)

    def dim(self, text: str) -> str:
        return self._wrap("dim", text)

    def green(self, text: str) -> str:
        return self._wrap("green", text)

    def red(self, text: str) -> str:
        return self._wrap("red", text)

    def yellow(self, text: str) -> str:
        return self._wrap("yellow", text)


class ConsoleReporter:
    """Progressive per-domain lines followed by a summary."""

    def __init__(self, stream: TextIO | None = None, quiet: bool = False, palette: Palette | None = None):
        self.stream = stream or sys.stdout
        self.quiet = quiet
        self.palette = palette or Palette.for_stream(self.stream)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def header(self, total: int) -> None:
        c = self.palette
        self._write(f"\n{c.bold('Domain Checker')}  {c.dim(f'DNS + whois · {total} domain(s)')}\n\n")

    def before_check(self, domain: str) -> None:
        """Print the domain column while its check is running."""
        if not self.quiet:
            self._write(f"  {domain.ljust(COLUMN_WIDTH)}")

    def report(self, result: CheckResult) -> None:
        c = self.palette
        label = result.domain.ljust(COLUMN_WIDTH)

        if result.available is Availability.AVAILABLE:
            line = f"  {label}{c.green('✓  available')}"
            if self.quiet:
                self._write(f"{line}\n")
            else:
                self._write(f"\r{line}\n")
        elif self.quiet:
            return
        elif result.available is Availability.TAKEN:
            self._write(f"{c.dim('✗  taken')}{c.dim(f'  ({result.method.value})')}\n")
        else:
            self._write(f"{c.yellow('?  check manually')}\n")

    def summary(self, results: list[CheckResult]) -> None:
        c = self.palette
        groups = group_results(results)
        available = groups[Availability.AVAILABLE]
        manual = groups[Availability.UNDETERMINED]
        taken = groups[Availability.TAKEN]

        lines = [f"\n{RULE}", "", c.green(f"Available ({len(available)})")]
        if available:
            lines.extend(f"  {c.green(r.domain)}" for r in available)
        else:
            lines.append(c.dim("  none"))

        if manual:
            lines.extend(["", c.yellow(f"Check manually ({len(manual)})")])
            lines.extend(f"  {c.yellow(r.domain)}" for r in manual)

        lines.extend([
            "",
            c.dim(f"Taken: {len(taken)}"),
            f"\n{RULE}",
            c.dim("\nTip: Always confirm with a registrar before purchasing.\n"),
        ])
        self._write("\n".join(lines) + "\n")

    def saved(self, path: str | Path) -> None:
        self._write(self.palette.dim(f"\nResults saved → {path}") + "\n")


def group_results(results: list[CheckResult]) -> dict[Availability, list[CheckResult]]:
    """Split results by availability, keeping their order."""
    groups = {state: [] for state in Availability}
    for r in results:
        groups[r.available].append(r)
    return groups


def results_to_json(results: list[CheckResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False) + "\n"


def _csv_value(value: bool | None) -> str:
    if value is None:
        return "null"
    return "true" if value else "false"


def results_to_csv(results: list[CheckResult]) -> str:
    """CSV with columns domain,available,method; available is true/false/null."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["domain", "available", "method"])
    for r in results:
        writer.writerow([r.domain, _csv_value(r.available.as_json()), r.method.value])
    return buffer.getvalue()


def save_results(results: list[CheckResult], path: str | Path) -> Path:
    """Write results as CSV if the path ends in .csv, JSON otherwise."""
    path = Path(path)
    if path.suffix.lower() == ".csv":
        content = results_to_csv(results)
    else:
        content = results_to_json(results)
    path.write_text(content, encoding="utf-8")
    return path
