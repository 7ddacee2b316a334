"""
Race Signal Server - FastAPI adapter over one tracking session
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .inference_client import InferenceClient
from .llm_engines import create_engine
from .orchestrator import Orchestrator, SessionState
from .schemas import OutcomeIn, OutcomeOut, PredictionOut, StateOut
from .settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Global instances
orchestrator: Optional[Orchestrator] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the session on startup, tear it down on shutdown"""
    global orchestrator

    logger.info("Starting Race Signal server...")
    client = InferenceClient(create_engine(settings))
    orchestrator = Orchestrator(client)
    logger.info(f"Session ready with {client.engine.name} engine")

    yield

    logger.info("Shutting down Race Signal server...")
    await orchestrator.aclose()
    orchestrator = None


app = FastAPI(
    title="Race Signal",
    description="Race outcome tracking with AI recommendations",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _session() -> Orchestrator:
    if not orchestrator:
        raise HTTPException(status_code=503, detail="Session not initialized")
    return orchestrator


def _state_out(state: SessionState) -> StateOut:
    prediction = None
    if state.current_prediction is not None:
        prediction = PredictionOut(
            confidence=state.current_prediction.confidence,
            recommended_horses=list(state.current_prediction.recommended_values),
            reasoning=state.current_prediction.reasoning,
        )
    return StateOut(
        history=[
            OutcomeOut(id=item.id, value=item.value, observed_at=item.observed_at)
            for item in state.history
        ],
        busy=state.busy,
        current_prediction=prediction,
        prediction_visible=state.prediction_visible,
        notice=state.notice,
    )


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    session = orchestrator
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": time.time(),
        "engine": session.client.engine.get_stats() if session else None
    }


@app.get("/state", response_model=StateOut)
async def get_state():
    return _state_out(_session().state)


@app.post("/outcomes", response_model=StateOut)
async def add_outcome(outcome: OutcomeIn):
    """Record a winner; rejected while an analysis is running"""
    session = _session()
    if not session.add_outcome(outcome.value):
        raise HTTPException(status_code=409, detail="Analysis in progress")
    return _state_out(session.state)


@app.post("/undo", response_model=StateOut)
async def undo():
    session = _session()
    session.undo()
    return _state_out(session.state)


@app.post("/clear", response_model=StateOut)
async def clear():
    session = _session()
    session.clear()
    return _state_out(session.state)


@app.post("/dismiss", response_model=StateOut)
async def dismiss():
    session = _session()
    session.dismiss_prediction()
    return _state_out(session.state)


@app.get("/metrics")
async def get_metrics():
    """Get analysis metrics"""
    return _session().monitor.get_metrics()


def main():
    """Main entry point for running the server"""
    import uvicorn

    uvicorn.run(
        "racesignal.server:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
