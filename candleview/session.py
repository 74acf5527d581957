"""Chart session: the current candle series, its overlays, and change hooks.

A session owns exactly one candle series at a time. Loading a new file
replaces the series wholesale; changing overlay parameters only recomputes
the overlays. Listeners are told which of the two happened so a renderer
can reset its view on new data but keep pan/zoom on parameter tweaks.
"""

import itertools
import logging
from typing import Callable, Iterable, Mapping, Optional, Sequence

from candleview.indicators import DEFAULT_OVERLAYS, compute_overlays
from candleview.ingest.compiler import CompileResult, RawRow, compile_report
from candleview.models import CandleSeries, ColumnMapping, IndicatorPoint, IndicatorSpec

logger = logging.getLogger(__name__)

SeriesListener = Callable[[CandleSeries], None]
OverlayListener = Callable[[CandleSeries, Mapping[str, list[IndicatorPoint]]], None]


class ChartSession:
    """Holds one candle series and recomputes overlays when inputs change."""

    def __init__(
        self,
        overlays: Sequence[IndicatorSpec] = DEFAULT_OVERLAYS,
        assume_milliseconds: bool = False,
    ):
        """Initialize an empty session.

        Args:
            overlays: Overlay specs to compute for every series.
            assume_milliseconds: Read digit-only dates as epoch milliseconds.
        """
        self.assume_milliseconds = assume_milliseconds
        self._specs: tuple[IndicatorSpec, ...] = tuple(overlays)
        self._series: CandleSeries = ()
        self._generation = 0
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._last_result: Optional[CompileResult] = None

        self._overlays: dict[str, list[IndicatorPoint]] = {}
        self._overlay_key: Optional[tuple] = None

        self._series_listeners: list[SeriesListener] = []
        self._overlay_listeners: list[OverlayListener] = []

        self._refresh_overlays()

    @property
    def series(self) -> CandleSeries:
        return self._series

    @property
    def generation(self) -> int:
        """Incremented every time the series is replaced."""
        return self._generation

    @property
    def specs(self) -> tuple[IndicatorSpec, ...]:
        return self._specs

    @property
    def overlays(self) -> dict[str, list[IndicatorPoint]]:
        return dict(self._overlays)

    @property
    def last_result(self) -> Optional[CompileResult]:
        """Compile report of the most recently accepted load."""
        return self._last_result

    def on_series_replaced(self, listener: SeriesListener) -> None:
        """Register a callback for new data (e.g. reset the chart view)."""
        self._series_listeners.append(listener)

    def on_overlays_changed(self, listener: OverlayListener) -> None:
        """Register a callback for recomputed overlays (redraw lines only)."""
        self._overlay_listeners.append(listener)

    def begin_load(self) -> int:
        """Start a load and return its token. Only the newest token can finish."""
        self._latest_token = next(self._tokens)
        return self._latest_token

    def finish_load(
        self,
        token: int,
        rows: Iterable[RawRow],
        mapping: ColumnMapping,
    ) -> bool:
        """Compile rows for a load started with begin_load.

        Results of a load superseded by a later begin_load are discarded,
        so a slow parse cannot overwrite a newer file.

        Returns:
            True if the series was replaced, False if the load was stale.
        """
        if token != self._latest_token:
            logger.info("Discarding stale load %d (latest is %d)", token, self._latest_token)
            return False

        result = compile_report(rows, mapping, self.assume_milliseconds)
        self._last_result = result
        self._replace_series(result.candles)
        return True

    def load(self, rows: Iterable[RawRow], mapping: ColumnMapping) -> CompileResult:
        """Compile and install rows in one step."""
        self.finish_load(self.begin_load(), rows, mapping)
        return self._last_result

    def clear(self) -> None:
        """Drop the current series. Pending loads become stale."""
        self.begin_load()
        self._last_result = None
        self._replace_series(())

    def set_overlays(self, specs: Iterable[IndicatorSpec]) -> None:
        """Replace overlay parameters. Identical specs are a no-op.

        Raises:
            ValueError: If two specs share a name. The old specs stay active.
        """
        previous = self._specs
        self._specs = tuple(specs)
        try:
            self._refresh_overlays()
        except ValueError:
            self._specs = previous
            raise

    def _replace_series(self, series: CandleSeries) -> None:
        self._series = series
        self._generation += 1
        for listener in self._series_listeners:
            listener(series)
        self._refresh_overlays()

    def _refresh_overlays(self) -> None:
        key = (self._generation, self._specs)
        if key == self._overlay_key:
            return
        self._overlays = compute_overlays(self._series, self._specs)
        self._overlay_key = key
        for listener in self._overlay_listeners:
            listener(self._series, self.overlays)
