"""In-memory record store for credit applications"""

import random
import threading
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from credit_monitor.domain.models import SCORE_CEILING, SCORE_FLOOR, ApplicationRecord


class RecordStore:
    """
    Canonical ordered collection of application records.

    Every operation holds the same lock, so readers never see a half-applied
    write. Writers build a new tuple and swap it in; a snapshot already handed
    out keeps pointing at the old tuple and never changes.
    """

    def __init__(
        self,
        records: Iterable[ApplicationRecord] = (),
        rng: Optional[random.Random] = None,
        score_min: int = SCORE_FLOOR,
        score_max: int = SCORE_CEILING,
        max_delta: int = 5,
    ):
        if max_delta < 0:
            raise ValueError(f"max_delta must be non-negative, got {max_delta}")
        self._records: Tuple[ApplicationRecord, ...] = tuple(records)
        self._lock = threading.Lock()
        self.rng = rng or random.Random()
        self.score_min = score_min
        self.score_max = score_max
        self.max_delta = max_delta

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def snapshot(self) -> Tuple[ApplicationRecord, ...]:
        """Point-in-time view of the collection"""
        with self._lock:
            return self._records

    def get(self, record_id: str) -> Optional[ApplicationRecord]:
        with self._lock:
            return next((record for record in self._records if record.id == record_id), None)

    def replace_all(self, records: Iterable[ApplicationRecord]) -> None:
        """Swap in a whole new collection"""
        new_records = tuple(records)
        with self._lock:
            self._records = new_records

    def perturb_one(self) -> Optional[ApplicationRecord]:
        """
        Nudge one random record's credit score by up to +/- max_delta.

        The new score is clamped to [score_min, score_max]; risk_level is left
        as generated. No-op on an empty store.

        Returns:
            The updated record, or None if the store is empty
        """
        with self._lock:
            if not self._records:
                return None

            index = self.rng.randrange(len(self._records))
            record = self._records[index]
            delta = self.rng.randint(-self.max_delta, self.max_delta)
            new_score = max(self.score_min, min(self.score_max, record.credit_score + delta))

            updated = replace(record, credit_score=new_score)
            records = list(self._records)
            records[index] = updated
            self._records = tuple(records)
            return updated
