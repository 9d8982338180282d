#!/usr/bin/env python3
"""
Results UI
==========
Rich-based terminal rendering for generated secrets.

Provides:
- Results table with optional entropy column
- Strength meter bar scaled to ui.meter_scale_bits
- Label colors per strength band

Usage:
    from passg.ui import ResultsView

    view = ResultsView()
    view.add("hG7qL2zA!x", estimate_password_entropy("hG7qL2zA!x"))
    view.render()
"""

from dataclasses import dataclass
from typing import List, Optional

from rich.console import Console
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text
from rich import box

from .settings import get_setting
from .strength import EntropyResult, StrengthLabel

LABEL_STYLES = {
    StrengthLabel.WEAK: "bold red",
    StrengthLabel.STRONG: "yellow",
    StrengthLabel.VERY_STRONG: "green",
    StrengthLabel.QUANTUM_RESISTANT: "bold cyan",
}


@dataclass
class ResultEntry:
    """One generated value for the results table."""
    value: str
    entropy: Optional[EntropyResult] = None


def strength_text(result: EntropyResult) -> Text:
    """'<bits> bits - <label>' colored by band."""
    return Text(f"{result.bits} bits - {result.label.value}", style=LABEL_STYLES[result.label])


def strength_meter(result: EntropyResult, width: int = 20) -> ProgressBar:
    """Bar that fills at ui.meter_scale_bits."""
    scale = get_setting("ui.meter_scale_bits", 128)
    return ProgressBar(total=100, completed=result.meter_percent(scale), width=width)


class ResultsView:
    """
    Table of generated values.

    Example:
        view = ResultsView(title="Passwords")
        for pw in passwords:
            view.add(pw, estimate_password_entropy(pw))
        view.render()
    """

    def __init__(self, title: str = None, console: Console = None):
        self.title = title
        self.console = console or Console()
        self.entries: List[ResultEntry] = []

    def add(self, value: str, entropy: EntropyResult = None):
        self.entries.append(ResultEntry(value=value, entropy=entropy))

    def build_table(self) -> Table:
        show_strength = any(e.entropy is not None for e in self.entries)

        table = Table(title=self.title, box=box.SIMPLE_HEAD, show_lines=False)
        table.add_column("#", justify="right", style="dim", width=4)
        table.add_column("Value", style="bold", overflow="fold")
        if show_strength:
            table.add_column("Strength")
            table.add_column("Meter")

        for i, entry in enumerate(self.entries, 1):
            # Text() keeps generated brackets from being parsed as markup
            row = [str(i), Text(entry.value)]
            if show_strength:
                if entry.entropy is not None:
                    row.extend([strength_text(entry.entropy), strength_meter(entry.entropy)])
                else:
                    row.extend(["-", ""])
            table.add_row(*row)
        return table

    def render(self):
        self.console.print(self.build_table())


def render_entropy(password: str, result: EntropyResult, console: Console = None):
    """Print a single strength verdict with meter."""
    console = console or Console()
    table = Table(box=None, show_header=False)
    table.add_column()
    table.add_column()
    table.add_row("Password", Text(password))
    table.add_row("Length", str(len(password)))
    table.add_row("Entropy", strength_text(result))
    table.add_row("Meter", strength_meter(result, width=30))
    console.print(table)
