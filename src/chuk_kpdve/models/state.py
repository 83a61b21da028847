"""
Harmony state summaries - serializable views of an analysis.

HarmonyState itself is a mutable, fixed-capacity working object. These
models are the frozen snapshot handed to callers that want JSON or a
plain record of every interpretation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CandidateSummary(BaseModel):
    """One interpretation of a chord."""

    kpdve: int = Field(..., ge=0, description="Packed KPDVE")
    key: int = Field(..., description="Key axis")
    pattern: int = Field(..., description="Pattern axis")
    degree: int = Field(..., description="Degree axis")
    voicing: int = Field(..., description="Voicing axis")
    extension: int = Field(..., description="Extension axis")
    dve: int = Field(..., ge=0, description="Shape with key and pattern undone")
    ve: int = Field(..., ge=0, description="Minimized shape")

    model_config = {"frozen": True}


class HarmonyStateSummary(BaseModel):
    """
    Snapshot of a resolved harmony state.
    """

    encoded_state: int = Field(..., description="Validity bit, KPDVE and chroma packed together")
    chromatic_notes: int = Field(..., ge=0, le=0xFFF, description="Chroma mask (C at bit 0)")
    circle_notes: int = Field(..., ge=0, le=0xFFF, description="Circle mask (F at bit 0)")
    kpdve: int = Field(..., description="Chosen packed KPDVE")
    kpdve_tuple: tuple[int, int, int, int, int] = Field(..., description="Chosen KPDVE axes")
    dve: int = Field(..., description="Chosen DVE value")
    ve: int = Field(..., description="Chosen VE value")
    is_valid: bool = Field(..., description="False when the chord has no interpretation")
    min_index: int = Field(..., ge=0, description="Index of the chosen candidate")
    candidates: list[CandidateSummary] = Field(
        default_factory=list, description="Every interpretation, in enumeration order"
    )

    model_config = {"frozen": True}

    @property
    def candidate_count(self) -> int:
        return len(self.candidates)
