"""Runs named stress cases one after another and reports each outcome."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from src.catalog_admin.core.errors import CatalogError


class CheckFailed(Exception):
    """A stress case observed something other than the expected outcome."""


def expect(condition: bool, message: str) -> None:
    if not condition:
        raise CheckFailed(message)


@dataclass
class CaseResult:
    name: str
    passed: bool
    duration_ms: float
    error: str | None = None


class StressRunner:
    """Executes cases, printing ``Testing <name>... PASS/FAIL``.

    A failing case never stops the batch; its error (and the database
    ``details`` / ``hint`` when present) is printed and the next case runs.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self.results: list[CaseResult] = []

    async def run(self, name: str, case: Callable[[], Awaitable[None]]) -> bool:
        self._console.print(f"Testing {name}... ", end="")
        start = time.perf_counter()
        try:
            await case()
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            self._console.print("[red]❌ FAIL[/red]")
            self._console.print(f"  [red]Error:[/red] {exc}")
            if isinstance(exc, CatalogError):
                if exc.code:
                    self._console.print(f"  Code: {exc.code}")
                if exc.details:
                    self._console.print(f"  Details: {exc.details}")
                if exc.hint:
                    self._console.print(f"  Hint: {exc.hint}")
            if exc.__cause__ is not None:
                self._console.print(f"  Cause: {exc.__cause__}")
            self.results.append(CaseResult(name, False, duration_ms, str(exc)))
            return False

        duration_ms = (time.perf_counter() - start) * 1000
        self._console.print("[green]✅ PASS[/green]")
        self.results.append(CaseResult(name, True, duration_ms))
        return True

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.passed)

    def summary_table(self, title: str) -> Table:
        table = Table(title=title)
        table.add_column("Case", style="cyan")
        table.add_column("Result")
        table.add_column("Time (ms)", justify="right", style="dim")
        table.add_column("Error", style="red")

        for result in self.results:
            table.add_row(
                result.name,
                "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]",
                f"{result.duration_ms:.0f}",
                result.error or "",
            )
        return table
