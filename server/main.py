"""FastAPI backend exposing script analysis to the browser UI.

The server is stateless: every request carries the script text and the
current character list, and the response carries the recomputed state.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from stylist.characters import Character, CharacterSet, DuplicateCharacterError
from stylist.config import load_config
from stylist.discovery import health_check
from stylist.pipeline import Analysis, add_character, analyze, delete_character, rename_character
from stylist.script_parser import parse_script

logger = logging.getLogger(__name__)

app = FastAPI(title="Script Stylist")
app.state.config = load_config()
app.state.ai_client = None


class CharacterIn(BaseModel):
    name: str
    confidence: float = Field(1.0, ge=0.0, le=1.0)
    dialogue_count: int = Field(0, ge=0)


class CharacterOut(BaseModel):
    name: str
    confidence: float
    dialogue_count: int


class ScriptIn(BaseModel):
    script: str


class StateIn(BaseModel):
    script: str
    characters: list[CharacterIn] = []


class AddIn(StateIn):
    name: str


class RenameIn(StateIn):
    old: str
    new: str


class DeleteIn(StateIn):
    name: str


class AnalysisOut(BaseModel):
    characters: list[CharacterOut]
    attributions: list[str | None]
    source: str | None = None
    fallback_reason: str | None = None


def _to_out(analysis: Analysis) -> AnalysisOut:
    return AnalysisOut(
        characters=[
            CharacterOut(name=c.name, confidence=c.confidence, dialogue_count=c.dialogue_count)
            for c in analysis.characters
        ],
        attributions=[c.name if c else None for c in analysis.attributions()],
        source=analysis.source.value if analysis.source else None,
        fallback_reason=analysis.fallback_reason,
    )


def _state(request: Request, body: StateIn) -> Analysis:
    try:
        characters = CharacterSet(
            Character(c.name, c.confidence, c.dialogue_count) for c in body.characters
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return Analysis(parse_script(body.script), characters, config=request.app.state.config)


def _apply(func, *args) -> Analysis:
    try:
        return func(*args)
    except DuplicateCharacterError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown character: {exc.args[0]}") from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/health")
async def health() -> dict[str, object]:
    """Report discovery providers and whether each can run."""
    return {"status": "ok", "providers": health_check()}


@app.post("/analyze")
def analyze_endpoint(body: ScriptIn, request: Request) -> AnalysisOut:
    """Discover characters in the uploaded script and attribute its lines."""
    analysis = analyze(
        body.script,
        ai_client=request.app.state.ai_client,
        config=request.app.state.config,
    )
    return _to_out(analysis)


@app.post("/attribute")
def attribute_endpoint(body: StateIn, request: Request) -> AnalysisOut:
    """Count and attribute lines for a caller-supplied character list."""
    analysis = _state(request, body)
    characters = analysis.characters.with_counts(analysis.counts())
    return _to_out(Analysis(analysis.script, characters, config=analysis.config))


@app.post("/characters/add")
def add_endpoint(body: AddIn, request: Request) -> AnalysisOut:
    return _to_out(_apply(add_character, _state(request, body), body.name))


@app.post("/characters/rename")
def rename_endpoint(body: RenameIn, request: Request) -> AnalysisOut:
    return _to_out(_apply(rename_character, _state(request, body), body.old, body.new))


@app.post("/characters/delete")
def delete_endpoint(body: DeleteIn, request: Request) -> AnalysisOut:
    return _to_out(_apply(delete_character, _state(request, body), body.name))


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="127.0.0.1", port=8000)
