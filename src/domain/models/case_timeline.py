"""Case timeline domain models.

The case store owns the timeline; the engine only reads it. Deadlines
computed from it are written back as a structured ``stage -> Deadline``
map (see CaseStoreProtocol), never as concatenated field names.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType

from src.domain.models.karin_stage import KarinStage


@dataclass(frozen=True)
class CaseTimeline:
    """Stage start dates for one case.

    Attributes:
        case_id: Case identifier in the external case store.
        created_on: Case creation date.
        current_stage: Stage the case is currently in.
        region: Region code used for regional holidays, if known.
        stage_starts: Date each stage began (absent if not started).
        approved_extensions: Total approved extension days per stage.
    """

    case_id: str
    created_on: date
    current_stage: KarinStage = field(default=KarinStage.COMPLAINT_FILED)
    region: str | None = field(default=None)
    stage_starts: Mapping[KarinStage, date] = field(default_factory=dict)
    approved_extensions: Mapping[KarinStage, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.case_id:
            raise ValueError("case_id must not be empty")
        for stage, days in self.approved_extensions.items():
            if days < 0:
                raise ValueError(f"approved extension for {stage.value} must be >= 0")
        # Freeze caller-supplied dicts so the timeline stays read-only.
        object.__setattr__(self, "stage_starts", MappingProxyType(dict(self.stage_starts)))
        object.__setattr__(
            self, "approved_extensions", MappingProxyType(dict(self.approved_extensions))
        )

    def start_of(self, stage: KarinStage) -> date | None:
        return self.stage_starts.get(stage)

    def extension_for(self, stage: KarinStage) -> int:
        return self.approved_extensions.get(stage, 0)

    def with_stage_start(self, stage: KarinStage, started_on: date) -> CaseTimeline:
        """Return a copy with a stage start recorded."""
        starts = dict(self.stage_starts)
        starts[stage] = started_on
        return CaseTimeline(
            case_id=self.case_id,
            created_on=self.created_on,
            current_stage=self.current_stage,
            region=self.region,
            stage_starts=starts,
            approved_extensions=self.approved_extensions,
        )

    def with_current_stage(self, stage: KarinStage) -> CaseTimeline:
        return CaseTimeline(
            case_id=self.case_id,
            created_on=self.created_on,
            current_stage=stage,
            region=self.region,
            stage_starts=self.stage_starts,
            approved_extensions=self.approved_extensions,
        )

    def with_extension(self, stage: KarinStage, total_days: int) -> CaseTimeline:
        """Return a copy with the total approved extension for a stage."""
        extensions = dict(self.approved_extensions)
        extensions[stage] = total_days
        return CaseTimeline(
            case_id=self.case_id,
            created_on=self.created_on,
            current_stage=self.current_stage,
            region=self.region,
            stage_starts=self.stage_starts,
            approved_extensions=extensions,
        )


@dataclass(frozen=True)
class ExtensionAudit:
    """Audit record written onto a case when an extension is approved.

    Attributes:
        stage: The extended stage.
        extension_days: Total approved extension days for the stage.
        justification: Justification given by the requester.
        approved_by: Name of the approver.
        approved_at: When the approval was recorded.
    """

    stage: KarinStage
    extension_days: int
    justification: str
    approved_by: str
    approved_at: datetime

    def __post_init__(self) -> None:
        if self.extension_days <= 0:
            raise ValueError("extension_days must be positive")
        if self.approved_at.tzinfo is None:
            raise ValueError("approved_at must be timezone-aware (UTC)")
