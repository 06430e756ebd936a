"""Interactive selection prompt and the table layout used to show konfs."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Sequence, TextIO

from konf.errors import KonfError
from konf.store import Metadata

MIN_COLUMN_LEN = 7  # length of the longest word in the label line


class PromptError(KonfError):
    """The selection prompt was aborted or failed."""


def _styler(*codes: str) -> Callable[[str], str]:
    prefix = "\x1b[" + ";".join(codes) + "m"
    return lambda text: f"{prefix}{text}\x1b[0m"


_bold = _styler("1")
_faint = _styler("2")
_green = _styler("32")
_cyan = _styler("36")


def _plain_active(item: Any) -> str:
    return f"▸ {_cyan(_bold(str(item)))}"


def _plain_inactive(item: Any) -> str:
    return f"  {item}"


def fuzzy_match(source: str, target: str) -> bool:
    """True if all characters of source appear in target in the same order."""
    remaining = iter(target)
    return all(char in remaining for char in source)


@dataclass
class Select:
    """A list of items the user picks one of, optionally narrowed by searching."""

    label: str
    items: Sequence[Any]
    active: Callable[[Any], str] = _plain_active
    inactive: Callable[[Any], str] = _plain_inactive
    searcher: Callable[[str, int], bool] | None = None
    size: int = 15
    hide_selected: bool = True
    start_in_search_mode: bool = False
    stdin: TextIO | None = None
    stdout: TextIO | None = None

    def _matches(self, query: str) -> list[int]:
        if not query:
            return list(range(len(self.items)))
        if self.searcher is None:
            return [i for i, item in enumerate(self.items) if fuzzy_match(query, str(item))]
        return [i for i, _ in enumerate(self.items) if self.searcher(query, i)]

    def _render(self, out: TextIO, shown: list[int], hidden: int, query: str) -> None:
        out.write(self.label + "\n")
        if not shown:
            out.write(_faint("No results") + "\n")
        for position, index in enumerate(shown, 1):
            render = self.active if position == 1 else self.inactive
            out.write(f"{position:>3}) {render(self.items[index])}\n")
        if hidden:
            out.write(_faint(f"     ... {hidden} more, type to narrow the search") + "\n")
        if self.start_in_search_mode or query:
            out.write(f"Search [{query}]: ")
        else:
            out.write("Pick a number or type to search: ")
        out.flush()

    def run(self) -> int:
        """Show the prompt and return the position of the chosen item."""
        out = self.stdout or sys.stderr
        inp = self.stdin or sys.stdin
        query = ""
        while True:
            matches = self._matches(query)
            shown = matches[: max(self.size, 1)]
            self._render(out, shown, len(matches) - len(shown), query)
            try:
                line = inp.readline()
            except KeyboardInterrupt:
                raise PromptError("^C") from None
            if not line:
                raise PromptError("^D")
            answer = line.strip()
            if not answer:
                if shown:
                    return self._choose(out, shown[0])
                query = ""
                continue
            if answer.isascii() and answer.isdigit():
                choice = int(answer)
                if 1 <= choice <= len(shown):
                    return self._choose(out, shown[choice - 1])
                out.write(f"invalid choice {choice}\n")
                continue
            query = answer

    def _choose(self, out: TextIO, index: int) -> int:
        if not self.hide_selected:
            out.write(_green(f"✔ {self.items[index]}") + "\n")
        return index


RunFunc = Callable[[Select], int]


def terminal(select: Select) -> int:
    """Run a prompt in the user's terminal and return the selected position."""
    try:
        return select.run()
    except PromptError as exc:
        raise PromptError(f"prompt failed {exc}") from exc
    except OSError as exc:
        raise PromptError(f"prompt failed {exc}") from exc


def fuzzy_filter_konf(search_term: str, item: Metadata) -> bool:
    """Fuzzy-match a search term against all columns of a konf's metadata."""
    return fuzzy_match(search_term, f"{item.context} {item.cluster} {item.file}")


def trunc(length: int, text: str) -> str:
    """Cut text to at most length characters; a non-positive length keeps it whole."""
    if length <= 0 or len(text) < length:
        return text
    return text[:length]


def repeat(count: int, text: str) -> str:
    """Repeat text count times."""
    if count < 0:
        raise ValueError("negative repeat count")
    return text * count


@dataclass(frozen=True)
class TableTemplates:
    """Renders konf metadata as fixed-width table rows."""

    width: int
    label: str

    def _row(self, prefix: str, item: Metadata, style: Callable[[str], str]) -> str:
        cells = (
            style(trunc(self.width, value + repeat(self.width, " ")))
            for value in (item.context, item.cluster, item.file)
        )
        return prefix + " | ".join(cells) + " |"

    def inactive(self, item: Metadata) -> str:
        """Row for an item that is not highlighted."""
        return self._row("  ", item, lambda text: text)

    def active(self, item: Metadata) -> str:
        """Row for the highlighted item."""
        return self._row("▸ ", item, lambda text: _cyan(_bold(text)))


def new_table_output_templates(max_column_len: int) -> TableTemplates:
    """Table layout with columns at most max_column_len wide (never below 7)."""
    width = max(max_column_len, MIN_COLUMN_LEN)
    label = (
        "  Context" + " " * (width - 7)
        + " | " + "Cluster" + " " * (width - 7)
        + " | " + "File" + " " * (width - 4) + " "
    )
    return TableTemplates(width=width, label=label)