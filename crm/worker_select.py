from __future__ import annotations

"""Selection model behind the multi-worker picker.

Only active workers are offered. Selection keeps the order in which
workers were picked, since the first one is shown as the lead worker.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from .models import ServiceWorker


@dataclass
class WorkerSelection:
    workers: List[ServiceWorker] = field(default_factory=list)
    selected_ids: List[int] = field(default_factory=list)
    placeholder: str = "Select service workers..."

    def options(self, query: str = "") -> List[ServiceWorker]:
        """Active workers whose name or skills contain `query` (case-insensitive)."""
        needle = query.strip().lower()
        out: List[ServiceWorker] = []
        for w in self.workers:
            if not w.is_active:
                continue
            if needle and needle not in w.full_name.lower() and needle not in (w.skills or "").lower():
                continue
            out.append(w)
        return out

    def is_selected(self, worker_id: int) -> bool:
        return worker_id in self.selected_ids

    def toggle(self, worker_id: int) -> List[int]:
        if worker_id in self.selected_ids:
            self.selected_ids = [i for i in self.selected_ids if i != worker_id]
        else:
            self.selected_ids = self.selected_ids + [worker_id]
        return self.selected_ids

    def remove(self, worker_id: int) -> List[int]:
        self.selected_ids = [i for i in self.selected_ids if i != worker_id]
        return self.selected_ids

    def set_selected(self, worker_ids: Iterable[int]) -> List[int]:
        """Replace the selection, dropping duplicates but keeping order."""
        self.selected_ids = list(dict.fromkeys(int(i) for i in worker_ids))
        return self.selected_ids

    def clear(self) -> None:
        self.selected_ids = []

    def selected_workers(self) -> List[ServiceWorker]:
        """Selected workers in selection order; ids not in `workers` are skipped."""
        by_id = {w.id: w for w in self.workers}
        return [by_id[i] for i in self.selected_ids if i in by_id]

    def summary(self) -> str:
        names = [w.full_name for w in self.selected_workers()]
        return ", ".join(names) if names else self.placeholder


__all__ = ["WorkerSelection"]
