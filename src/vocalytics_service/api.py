from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from vocalytics.lexicon import DEFAULT_LEXICON, load_lexicon
from vocalytics.pipeline import analyze, coerce_transcript

from .config import load_settings
from .logging_setup import setup_logging
from .models import AnalyzeRequest, AnalyzeResponse

load_dotenv()
settings = load_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

lexicon = load_lexicon(settings.lexicon_path) if settings.lexicon_path else DEFAULT_LEXICON

app = FastAPI(title="Vocalytics - heuristic transcript analysis", version="1.0.0")


@app.get("/health")
def health() -> dict:
  return {"ok": True}


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_transcript(req: AnalyzeRequest) -> AnalyzeResponse:
  text = coerce_transcript(req.transcript)
  if len(text) > settings.max_transcript_chars:
    logger.warning("Rejected transcript of %s chars (limit %s)", len(text), settings.max_transcript_chars)
    raise HTTPException(status_code=413, detail="Transcript too large")

  result = analyze(
    text,
    [w.model_dump() for w in req.words],
    [u.model_dump() for u in req.utterances],
    lexicon,
  )
  return AnalyzeResponse.model_validate(result.to_dict())
