import logging
from datetime import date
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .errors import CatalogUnavailableError
from .generator import ProgramGenerator
from .models import (
    AlternativeRequest,
    AlternativeResponse,
    GeneratedProgram,
    GeneratedSession,
    GenerationParameters,
)

settings = Settings.from_env()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Workout Plan Engine API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

generator = ProgramGenerator()


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/generate-program", response_model=GeneratedProgram)
def generate_program(request: GenerationParameters, on: Optional[date] = None):
    try:
        return generator.generate_program(request, today=on)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@app.post("/todays-session", response_model=GeneratedSession)
def todays_session(request: GenerationParameters, on: Optional[date] = None):
    try:
        session = generator.todays_session(request, today=on)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if session is None:
        raise HTTPException(status_code=404, detail="No session scheduled")
    return session


@app.post("/exercise-alternative", response_model=AlternativeResponse)
def exercise_alternative(body: AlternativeRequest, on: Optional[date] = None):
    try:
        alt = generator.find_alternative(body.exercise_id, body.parameters, today=on)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return AlternativeResponse(alternative=alt.summary() if alt else None)


def run():
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
