"""Pydantic models for claim-assembler payloads and stored traversal snapshots.

Field aliases accept the camelCase names used by the assembler alongside the
snake_case ones. Unknown keys are ignored so richer assembler output (signals,
geometry, leverage scores) passes through validation untouched.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from claimpath.domain.model import ClaimStatus, GateAnswer  # noqa: TC001


class ClaimPathBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ClaimPayload(ClaimPathBaseModel):
    id: str = Field(min_length=1)
    label: str
    text: str = ""
    type: str | None = None
    supporters: list[int] = Field(default_factory=list["int"])
    provenance_ids: list[str] = Field(
        default_factory=list["str"],
        validation_alias=AliasChoices("provenance_ids", "sourceStatementIds"),
    )


class EdgePayload(ClaimPathBaseModel):
    source: str = Field(validation_alias=AliasChoices("from", "source"))
    target: str = Field(validation_alias=AliasChoices("to", "target"))
    type: str
    question: str | None = None
    provenance_ids: list[str] = Field(
        default_factory=list["str"],
        validation_alias=AliasChoices("provenance_ids", "sourceStatementIds"),
    )


class ConditionalPayload(ClaimPathBaseModel):
    id: str = Field(min_length=1)
    affected_claims: list[str] = Field(
        default_factory=list["str"],
        validation_alias=AliasChoices("affected_claims", "affectedClaims"),
    )
    condition: str = ""
    question: str | None = None
    provenance_ids: list[str] = Field(
        default_factory=list["str"],
        validation_alias=AliasChoices("provenance_ids", "sourceStatementIds"),
    )


class ClaimGraphPayload(ClaimPathBaseModel):
    total_perspectives: int = Field(
        ge=0,
        validation_alias=AliasChoices("total_perspectives", "modelCount"),
    )
    claims: list[ClaimPayload] = Field(default_factory=list["ClaimPayload"])
    edges: list[EdgePayload] = Field(default_factory=list["EdgePayload"])
    conditionals: list[ConditionalPayload] = Field(default_factory=list["ConditionalPayload"])


class ConditionalResolutionPayload(ClaimPathBaseModel):
    kind: Literal["conditional"] = "conditional"
    forcing_point_id: str
    answer: GateAnswer
    user_input: str | None = None
    gate_id: str | None = None


class ConflictResolutionPayload(ClaimPathBaseModel):
    kind: Literal["conflict"] = "conflict"
    forcing_point_id: str
    selected_claim_id: str
    selected_label: str = ""
    rejected_claim_ids: list[str] = Field(default_factory=list["str"])


ResolutionPayload = Annotated[
    ConditionalResolutionPayload | ConflictResolutionPayload,
    Field(discriminator="kind"),
]


class TraversalSnapshotPayload(ClaimPathBaseModel):
    """Persisted traversal state for one conversation turn."""

    turn_id: str
    claim_status: dict[str, ClaimStatus]
    resolutions: list[ResolutionPayload] = Field(default_factory=list["ResolutionPayload"])
    path_steps: list[str] = Field(default_factory=list["str"])
