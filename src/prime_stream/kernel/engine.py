from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from prime_stream.adapters.log_sinks import NullLogSink
from prime_stream.config.models import StreamConfig, default_config
from prime_stream.domain.entries import MarkerEntry, MarkerKind, ValueEntry
from prime_stream.kernel.scheduler import CancellationToken, CooperativeScheduler, TimerHandle
from prime_stream.observability import StreamLogger
from prime_stream.ports.clock import Clock
from prime_stream.ports.prime_checker import PrimeChecker
from prime_stream.presentation.view import is_near_bottom
from prime_stream.services.history_buffer import HistoryBuffer
from prime_stream.services.position_resolver import resolve
from prime_stream.services.prime_checker import build_prime_checker
from prime_stream.services.prime_generator import ForwardSearch, previous_primes
from prime_stream.services.reveal_scheduler import RevealScheduler
from prime_stream.services.stream_state import StreamState

Listener = Callable[[StreamState], None]


class StreamEngine:
    """Drives the synchronized prime stream on a cooperative scheduler.

    Three activities share one StreamState:
    - generator: one forward search step per run, then reschedules itself;
    - trickle: fixed-interval reveal while the consumer is at the live edge;
    - demand: one-shot reveal queued by request_more().

    All of them run on the same scheduler, so a buffer append (with its paired
    eviction and reveal cursor decrement) is never observed half-done.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        config: StreamConfig | None = None,
        oracle: PrimeChecker | None = None,
        logger: StreamLogger | None = None,
    ) -> None:
        self.config = config if config is not None else default_config()
        self.clock = clock
        self.oracle = oracle if oracle is not None else build_prime_checker(self.config.generator.oracle)
        base_logger = logger if logger is not None else StreamLogger(sink=NullLogSink())
        self.logger = base_logger.child("engine")
        self.state = StreamState(
            buffer=HistoryBuffer(self.config.buffer.max_size),
            sync_threshold=self.config.reveal.sync_threshold,
        )
        self.reveal = RevealScheduler(self.state, batch_size=self.config.reveal.batch_size)
        self.scheduler = CooperativeScheduler(clock, on_error=self._on_task_error)
        self.token = CancellationToken()
        self._search: ForwardSearch | None = None
        self._listeners: list[Listener] = []
        self._handles: list[TimerHandle] = []
        self._started = False

    @property
    def running(self) -> bool:
        return self._started and not self.token.cancelled

    @property
    def current_prime(self) -> int:
        return self.state.stream_cursor

    def start(self) -> None:
        # Join the stream: derive the cursor from wall time, prefill context, mark the join.
        if self._started:
            raise RuntimeError("StreamEngine already started")
        self._started = True
        stream_cfg = self.config.stream

        cursor = resolve(self.clock.wall_ms(), epoch_ms=stream_cfg.epoch_ms, velocity=stream_cfg.velocity)
        self.state.stream_cursor = cursor
        self._search = ForwardSearch(cursor)

        for value in previous_primes(cursor, stream_cfg.prefill_count, self.oracle):
            self.state.append(ValueEntry(value))
        prefilled = self.state.length
        self.state.append(MarkerEntry(MarkerKind.CONNECTION_ESTABLISHED, self._wall_time()))
        # The prefill is already history: show all of it immediately.
        self.state.reveal(self.state.length)

        self.logger.info("stream joined", cursor=cursor, prefilled=prefilled)

        self._schedule_generator()
        self._handles.append(
            self.scheduler.call_every(
                self.config.reveal.trickle_interval_ms,
                self._trickle_step,
                token=self.token,
                name="trickle",
            )
        )
        self._notify()

    def stop(self) -> None:
        if self.token.cancelled:
            return
        self.token.cancel()
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
        self.logger.info("stream stopped", cursor=self.state.stream_cursor, buffered=self.state.length)

    def run_for(self, duration_ms: float, *, max_steps: int | None = None) -> int:
        return self.scheduler.run_for(duration_ms, max_steps=max_steps)

    def request_more(self) -> None:
        # Demand trigger from the consumer's visibility sentinel.
        if not self.running:
            return
        self._prune_handles("demand")
        self._handles.append(self.scheduler.call_soon(self._demand_step, name="demand"))

    def set_consumer_live(self, live: bool) -> None:
        self.state.consumer_live = live

    def observe_scroll(self, scroll_height: float, scroll_top: float, client_height: float) -> bool:
        # Derive the consumer state from scroll geometry using the configured live edge.
        live = is_near_bottom(
            scroll_height,
            scroll_top,
            client_height,
            threshold_px=self.config.reveal.live_edge_px,
        )
        self.set_consumer_live(live)
        return live

    def mark_offline(self) -> None:
        self.state.append(MarkerEntry(MarkerKind.OFFLINE, self._wall_time()))
        self.logger.warning("stream marked offline", cursor=self.state.stream_cursor)
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _schedule_generator(self) -> None:
        self._prune_handles("generator")
        self._handles.append(
            self.scheduler.call_later(
                self.config.generator.step_interval_ms,
                self._generator_step,
                name="generator",
            )
        )

    def _prune_handles(self, name: str) -> None:
        # Drop finished one-shot handles so the list does not grow with every step.
        self._handles = [h for h in self._handles if h.name != name or not h.done]

    def _generator_step(self) -> None:
        if self.token.cancelled:
            return
        try:
            self._advance()
        finally:
            # A failed step is a no-op; the next step retries from unchanged state.
            if not self.token.cancelled:
                self._schedule_generator()

    def _advance(self) -> None:
        assert self._search is not None
        found = self._search.step(self.oracle, self.config.generator.search_budget)
        if found is None:
            return
        self.state.stream_cursor = found
        self.state.append(ValueEntry(found))
        self.reveal.ensure_initial_window()
        self._notify()

    def _trickle_step(self) -> None:
        if self.reveal.on_tick():
            self._notify()

    def _demand_step(self) -> None:
        if self.token.cancelled:
            return
        if self.reveal.on_demand():
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def _on_task_error(self, name: str, exc: Exception) -> None:
        self.logger.error(
            "stream step failed",
            task=name,
            error=type(exc).__name__,
            detail=str(exc),
        )

    def _wall_time(self) -> datetime:
        return datetime.fromtimestamp(self.clock.wall_ms() / 1000, tz=UTC)
