from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

Level = Literal["negative", "neutral", "positive"]


class TimedWordIn(BaseModel):
  word: str = Field(default="", description="Recognized word")
  start: float = Field(default=0.0, description="Seconds from call start")
  end: float = Field(default=0.0, description="Seconds from call start")
  confidence: float = Field(default=1.0, description="Recognizer confidence 0..1")


class UtteranceIn(BaseModel):
  speaker: Union[int, str] = Field(default="", description="Diarization label (e.g. 0, 1)")
  start: float = 0.0
  end: float = 0.0
  text: str = ""


class AnalyzeRequest(BaseModel):
  transcript: Union[str, dict[str, Any], None] = Field(
    default=None, description="Plain text, or an object with a text/transcript/content field"
  )
  words: list[TimedWordIn] = Field(default_factory=list, description="Optional word-level timing")
  utterances: list[UtteranceIn] = Field(default_factory=list, description="Optional diarized utterances")


class SegmentOut(BaseModel):
  id: int
  speaker_role: Literal["Agent", "Customer"]
  text: str
  start_time: float
  end_time: float
  confidence_score: int = Field(..., ge=0, le=98)
  events: list[str] = Field(default_factory=list)


class RatingsOut(BaseModel):
  negative: str
  neutral: str
  positive: str


class SubMetricOut(BaseModel):
  name: str
  ratings: RatingsOut
  active_rating: Level
  active_label: str
  analysis: str


class MetricOut(BaseModel):
  name: str
  scores: tuple[int, int, int] = Field(..., description="(negative, neutral, positive) display weights")
  justification: str
  analysis: str
  sub_metrics: list[SubMetricOut] = Field(default_factory=list)


class SectionOut(BaseModel):
  name: str
  scores: tuple[int, int, int]
  metrics: list[MetricOut]


class AnalyzeResponse(BaseModel):
  segments: list[SegmentOut]
  scorecard: list[SectionOut]
  overall_score: Optional[float] = Field(default=None, ge=0, le=100, description="Weighted 0..100 call score")
  recommendations: list[str] = Field(default_factory=list, description="Coaching recommendations")
  fallback: bool = False
  reason: Optional[str] = None
