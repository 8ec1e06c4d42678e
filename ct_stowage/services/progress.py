from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

Document loading (PDF text extraction in particular) is the only slow step of
a run, so the bar advances once per loaded document. In non-TTY environments
(CI, redirected output) no bar is created.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker for the documents of one run."""

    def __init__(self, total_documents: int, *, description: str = "Loading documents") -> None:
        self.total_documents = total_documents
        self.description = description
        self.current_document = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_documents,
                desc=description,
                unit="doc",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_document(self, path: Path) -> None:
        self.current_document += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({path.name})")

    def finish_document(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
