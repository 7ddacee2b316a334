"""
Orchestrator - owns the session state and runs Gate -> Client -> Filter
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import InferenceError
from .gate import AnalysisGate, AnalysisRequest
from .history import Outcome, OutcomeHistory, is_valid_value
from .inference_client import InferenceClient
from .monitors import AnalysisMonitor
from .recommendation_filter import filter_prediction
from .schemas import Prediction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot handed to the presentation layer"""
    history: Tuple[Outcome, ...]  # newest first
    busy: bool
    current_prediction: Optional[Prediction]
    prediction_visible: bool
    notice: Optional[str] = None


@dataclass(frozen=True)
class AddOutcome:
    value: int


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class DismissPrediction:
    pass


Intent = Union[AddOutcome, Undo, Clear, DismissPrediction]


class Orchestrator:
    """Single-writer state machine over one tracking session.

    History mutations apply synchronously. Analyses run as a background task
    on the running event loop, one call at a time; each call is tagged with
    the history revision it was issued for and its result is dropped if the
    history has changed since.
    """

    def __init__(self, client: InferenceClient, gate: Optional[AnalysisGate] = None,
                 monitor: Optional[AnalysisMonitor] = None):
        self.client = client
        self.gate = gate or AnalysisGate()
        self.monitor = monitor or AnalysisMonitor()
        self.history = OutcomeHistory()
        self.busy = False
        self.current_prediction: Optional[Prediction] = None
        self.prediction_visible = False
        self.notice: Optional[str] = None
        self.analysis_count = 0
        self._task: Optional[asyncio.Task] = None
        self._rerun = False

    @property
    def state(self) -> SessionState:
        return SessionState(
            history=self.history.snapshot(),
            busy=self.busy,
            current_prediction=self.current_prediction,
            prediction_visible=self.prediction_visible,
            notice=self.notice,
        )

    def dispatch(self, intent: Intent) -> bool:
        """Apply a presentation intent; returns False when it was rejected or a no-op"""
        if isinstance(intent, AddOutcome):
            return self.add_outcome(intent.value)
        if isinstance(intent, Undo):
            return self.undo()
        if isinstance(intent, Clear):
            self.clear()
            return True
        if isinstance(intent, DismissPrediction):
            self.dismiss_prediction()
            return True
        raise TypeError(f"Unknown intent: {intent!r}")

    def add_outcome(self, value: int) -> bool:
        """Record a winner and trigger an analysis if the gate allows it"""
        if self.busy:
            logger.warning(f"Rejected outcome {value}: analysis in progress")
            return False
        if not is_valid_value(value):
            logger.warning(f"Rejected outcome {value!r}: must be 1..6")
            return False

        loop = self._loop_for(len(self.history) + 1)
        self.history.append(value)
        self.notice = None
        if self.gate.evaluate(self.history) is not None:
            self._schedule_analysis(loop)
        return True

    def undo(self) -> bool:
        """Remove the newest winner; re-analyze or reset depending on what remains"""
        if len(self.history) == 0:
            logger.debug("Undo ignored: history is empty")
            return False

        loop = self._loop_for(len(self.history) - 1)
        self.history.remove_head()
        self.notice = None
        if len(self.history) >= self.gate.min_history:
            self._schedule_analysis(loop)
        else:
            self.current_prediction = None
            self.prediction_visible = False
            self.busy = False
            self._rerun = False
        return True

    def clear(self):
        """Reset the session; any outstanding result becomes stale"""
        self.history.clear()
        self.current_prediction = None
        self.prediction_visible = False
        self.notice = None
        self.busy = False
        self._rerun = False
        logger.info("History cleared")

    def dismiss_prediction(self):
        self.current_prediction = None
        self.prediction_visible = False

    async def wait_idle(self):
        """Wait until no analysis call is outstanding"""
        while self._task is not None:
            await self._task

    async def aclose(self):
        """Finish the outstanding analysis and release the inference client"""
        await self.wait_idle()
        await self.client.aclose()

    def _loop_for(self, size_after: int) -> Optional[asyncio.AbstractEventLoop]:
        # Resolved before any mutation so a missing loop leaves the state untouched
        if size_after < self.gate.min_history:
            return None
        return asyncio.get_running_loop()

    def _schedule_analysis(self, loop: asyncio.AbstractEventLoop):
        # A call already in flight picks the request up once it returns
        self.busy = True
        self._rerun = True
        if self._task is None:
            self._task = loop.create_task(self._analysis_loop())

    async def _analysis_loop(self):
        try:
            while self._rerun:
                self._rerun = False
                request = self.gate.evaluate(self.history)
                if request is None:
                    break
                await self._analyze(request, self.history.revision)
        finally:
            self.busy = False
            self._rerun = False
            self._task = None

    async def _analyze(self, request: AnalysisRequest, revision: int):
        self.analysis_count += 1
        analysis_id = self.analysis_count
        self.monitor.record_started()
        start_time = time.time()
        logger.info(f"Analysis {analysis_id}: {len(request.winners)} winners at revision {revision}")

        prediction = None
        error = None
        try:
            prediction = await self.client.infer(request)
        except InferenceError as e:
            error = e

        latency = time.time() - start_time
        if revision != self.history.revision:
            logger.info(f"Analysis {analysis_id} discarded: history moved to revision {self.history.revision}")
            self.monitor.record_outcome("stale", latency)
            return

        if error is not None:
            logger.error(f"Analysis {analysis_id} failed: {error}")
            self.current_prediction = None
            self.prediction_visible = False
            self.notice = f"Analysis failed: {error}"
            self.monitor.record_outcome("failed", latency)
            return

        accepted = filter_prediction(prediction)
        if accepted is None:
            logger.info(f"Analysis {analysis_id}: low confidence {prediction.confidence}, not surfaced")
            self.current_prediction = None
            self.prediction_visible = False
            self.monitor.record_outcome("filtered", latency)
        else:
            logger.info(f"Analysis {analysis_id}: confidence {accepted.confidence}, "
                        f"recommending {accepted.recommended_values}")
            self.current_prediction = accepted
            self.prediction_visible = True
            self.monitor.record_outcome("surfaced", latency)
