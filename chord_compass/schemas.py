from pydantic import BaseModel, Field
from typing import Literal, Optional, List

VoicingType = Literal[
    "shell-major",
    "shell-minor",
    "shell-dominant",
    "triad",
    "full",
    "partial",
    "unknown",
]

KeyMode = Literal["major", "minor"]

class ChordSuggestion(BaseModel):
    root: str
    quality: str
    display_name: str
    confidence: int = Field(ge=0, le=100)
    voicing_type: VoicingType
    missing_intervals: List[str] = []
    present_intervals: List[str] = []

class VoicingAnalysis(BaseModel):
    pitch_classes: List[str] = []
    bass_note: Optional[str] = None
    voicing_type: Optional[VoicingType] = None
    suggestions: List[ChordSuggestion] = []

class DetectedChord(BaseModel):
    name: str
    alternatives: List[str] = []
    bass_note: str
    is_slash_chord: bool
    pitch_classes: List[str] = []

class KeyMatch(BaseModel):
    root: str
    mode: KeyMode
    display: str
    score: int
    reason: str
    fifths: int
    use_flats: bool
