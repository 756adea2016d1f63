"""Monitor session - owns the store, the active filters, and the derived views"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from credit_monitor.config import Settings
from credit_monitor.domain.analytics import build_overview, summarize
from credit_monitor.domain.exceptions import InvalidFilterCriteriaError
from credit_monitor.domain.filtering import apply_filters, default_criteria, update_criteria
from credit_monitor.domain.generator import generate_records
from credit_monitor.domain.models import (
    AnalyticsSummary,
    ApplicationRecord,
    FilterCriteria,
    PortfolioOverview,
)
from credit_monitor.infrastructure.observability.logging import (
    log_feed_tick,
    log_filters_updated,
    log_regenerated,
)
from credit_monitor.infrastructure.observability.metrics import (
    filter_update_counter,
    record_views,
    regeneration_counter,
)
from credit_monitor.infrastructure.store.repository import RecordStore

SUBSET_CHANGED = "subset_changed"
SUMMARY_CHANGED = "summary_changed"

Listener = Callable[[str, "MonitorSession"], None]


@dataclass(frozen=True)
class SessionView:
    """Consistent read of the session taken under one lock"""

    revision: int
    records: Tuple[ApplicationRecord, ...]
    subset: Tuple[ApplicationRecord, ...]
    summary: AnalyticsSummary
    criteria: FilterCriteria
    has_active_filters: bool


class MonitorSession:
    """
    Single owner of the application population and everything derived from it.

    Writes go through update_filters, reset_filters, regenerate and
    perturb_one. Each write recomputes the filtered subset and the summary
    under the session lock, bumps `revision`, then notifies listeners
    synchronously with SUBSET_CHANGED followed by SUMMARY_CHANGED.
    """

    def __init__(
        self,
        store: RecordStore,
        criteria: Optional[FilterCriteria] = None,
        rng: Optional[random.Random] = None,
        record_count: int = 50,
        recent_limit: int = 5,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.record_count = record_count
        self.recent_limit = recent_limit
        self._default_criteria = criteria or default_criteria(store.score_min, store.score_max)
        self._criteria = self._default_criteria
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._subset: Tuple[ApplicationRecord, ...] = ()
        self._summary = AnalyticsSummary.no_data()
        self._revision = 0
        with self._lock:
            self._recompute()

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "MonitorSession":
        """Build a session seeded with a freshly generated population"""
        rng = random.Random(app_settings.random_seed)
        store = RecordStore(
            generate_records(app_settings.record_count, rng=rng),
            rng=rng,
            score_min=app_settings.score_min,
            score_max=app_settings.score_max,
            max_delta=app_settings.score_perturbation,
        )
        return cls(
            store,
            rng=rng,
            record_count=app_settings.record_count,
            recent_limit=app_settings.recent_applications_limit,
        )

    # Reads

    @property
    def revision(self) -> int:
        with self._lock:
            return self._revision

    @property
    def default_criteria(self) -> FilterCriteria:
        return self._default_criteria

    @property
    def has_active_filters(self) -> bool:
        """True when the criteria differ from this session's defaults"""
        with self._lock:
            return self._criteria != self._default_criteria

    def view(self) -> SessionView:
        """Revision and every derived view from the same commit"""
        with self._lock:
            # Store writes only happen under this lock, so the snapshot matches the subset
            return SessionView(
                revision=self._revision,
                records=self.store.snapshot(),
                subset=self._subset,
                summary=self._summary,
                criteria=self._criteria,
                has_active_filters=self._criteria != self._default_criteria,
            )

    def get_records(self) -> Tuple[ApplicationRecord, ...]:
        return self.store.snapshot()

    def get_record(self, record_id: str) -> Optional[ApplicationRecord]:
        return self.store.get(record_id)

    def get_filtered_records(self) -> Tuple[ApplicationRecord, ...]:
        with self._lock:
            return self._subset

    def get_summary(self) -> AnalyticsSummary:
        with self._lock:
            return self._summary

    def get_criteria(self) -> FilterCriteria:
        with self._lock:
            return self._criteria

    def get_overview(self) -> PortfolioOverview:
        return build_overview(self.store.snapshot(), self.recent_limit)

    def overview_view(self) -> Tuple[int, PortfolioOverview]:
        """Overview paired with the revision it was built from"""
        with self._lock:
            return self._revision, build_overview(self.store.snapshot(), self.recent_limit)

    # Writes

    def update_filters(self, **changes: Any) -> FilterCriteria:
        """
        Merge a partial filter update and recompute the derived views.

        Raises:
            InvalidFilterCriteriaError: Prior criteria are kept unchanged
        """
        with self._lock:
            try:
                criteria = update_criteria(self._criteria, changes)
            except InvalidFilterCriteriaError as e:
                filter_update_counter.labels(outcome="rejected").inc()
                logging.warning(f"Rejected filter update: {e}", extra={"step": "filters_rejected"})
                raise
            self._criteria = criteria
            self._recompute()
            filter_update_counter.labels(outcome="accepted").inc()
            log_filters_updated(list(changes), len(self._subset), len(self.store), self._revision)
        self._notify()
        return criteria

    def reset_filters(self) -> FilterCriteria:
        """Restore the default criteria (matches the whole population)"""
        with self._lock:
            self._criteria = self._default_criteria
            self._recompute()
            filter_update_counter.labels(outcome="accepted").inc()
            log_filters_updated(["reset"], len(self._subset), len(self.store), self._revision)
        self._notify()
        return self._default_criteria

    def regenerate(self) -> None:
        """Replace the whole population with a fresh one; ids restart at app_1"""
        records = generate_records(self.record_count, rng=self.rng)
        with self._lock:
            self.store.replace_all(records)
            self._recompute()
            regeneration_counter.inc()
            log_regenerated(len(records), self._revision)
        self._notify()

    def perturb_one(self) -> Optional[ApplicationRecord]:
        """Apply one live feed update. No-op (no notification) on an empty store."""
        with self._lock:
            updated = self.store.perturb_one()
            if updated is None:
                log_feed_tick(None, None, self._revision)
                return None
            self._recompute()
            log_feed_tick(updated.id, updated.credit_score, self._revision)
        self._notify()
        return updated

    # Notifications

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """End the session: drop all listeners"""
        with self._lock:
            self._listeners.clear()

    def _recompute(self) -> None:
        # Caller holds self._lock
        records = self.store.snapshot()
        self._subset = tuple(apply_filters(records, self._criteria))
        self._summary = summarize(self._subset, rng=self.rng)
        self._revision += 1
        record_views(len(records), self._summary)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for event in (SUBSET_CHANGED, SUMMARY_CHANGED):
            for listener in listeners:
                try:
                    listener(event, self)
                except Exception:
                    logging.exception(f"Change listener failed on {event}", extra={"step": "notify"})
