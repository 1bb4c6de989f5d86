"""Karin-law stage domain models.

This module defines the statutory stage catalog for Karin-law
investigations:
- KarinStage: Closed enumeration of procedure stages
- BusinessDayRegime: Weekday set used for business-day counting
- DurationUnit: Whether a stage counts business or calendar days
- StageDefinition: Deadline rule for a single stage
- StageCatalog: Versioned, immutable set of stage definitions

Only stages with a statutory deadline appear in a catalog. Looking up any
other stage raises UnknownStageError.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from src.domain.errors.deadline import UnknownStageError


class KarinStage(str, Enum):
    """Stages of the Karin-law investigation procedure."""

    COMPLAINT_FILED = "complaint_filed"
    RECEPTION = "reception"
    SUBSANATION = "subsanation"
    DT_NOTIFICATION = "dt_notification"
    SUSESO_NOTIFICATION = "suseso_notification"
    PRECAUTIONARY_MEASURES = "precautionary_measures"
    DECISION_TO_INVESTIGATE = "decision_to_investigate"
    INVESTIGATION = "investigation"
    REPORT_CREATION = "report_creation"
    REPORT_APPROVAL = "report_approval"
    INVESTIGATION_COMPLETE = "investigation_complete"
    FINAL_REPORT = "final_report"
    DT_SUBMISSION = "dt_submission"
    DT_RESOLUTION = "dt_resolution"
    MEASURES_ADOPTION = "measures_adoption"
    SANCTIONS = "sanctions"
    THIRD_PARTY = "third_party"
    SUBCONTRACTING = "subcontracting"
    CLOSED = "closed"

    @classmethod
    def parse(cls, value: str | KarinStage) -> KarinStage:
        """Convert a raw stage identifier into a KarinStage.

        Args:
            value: Stage identifier such as ``"investigation"``.

        Returns:
            The matching KarinStage.

        Raises:
            UnknownStageError: If the identifier is not a known stage.
        """
        if isinstance(value, KarinStage):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownStageError(stage=str(value)) from None


class BusinessDayRegime(str, Enum):
    """Weekday sets for business-day counting."""

    ADMINISTRATIVE = "administrative"
    """Monday to Friday."""

    JUDICIAL = "judicial"
    """Monday to Saturday."""

    @property
    def weekdays(self) -> frozenset[int]:
        """``date.weekday()`` values that count (Monday == 0)."""
        if self is BusinessDayRegime.JUDICIAL:
            return frozenset(range(6))
        return frozenset(range(5))


class DurationUnit(str, Enum):
    """Unit a stage duration is expressed in."""

    BUSINESS_DAY = "business_day"
    CALENDAR_DAY = "calendar_day"

    @property
    def label(self) -> str:
        return "business days" if self is DurationUnit.BUSINESS_DAY else "calendar days"


@dataclass(frozen=True, eq=True)
class StageDefinition:
    """Statutory deadline rule for one stage.

    Attributes:
        stage: The stage this rule applies to.
        base_days: Statutory duration (non-negative).
        unit: Business or calendar days.
        regime: Weekday set used when counting business days.
        extendable: Whether an extension may be requested.
        max_extension_days: Legal cap on extensions, in the stage's unit.
        description: Human-readable description of the deadline.
        next_action: The action that must happen before the deadline.
        article: Statutory article reference.
        external_entity: Deadline is owned by an outside authority.
        start_anchors: Stages whose recorded start date anchors this stage,
            in order of preference. May include the stage itself.
        falls_back_to_case_creation: Use the case creation date when no
            anchor stage has started.
    """

    stage: KarinStage
    base_days: int
    description: str
    next_action: str
    article: str
    unit: DurationUnit = field(default=DurationUnit.BUSINESS_DAY)
    regime: BusinessDayRegime = field(default=BusinessDayRegime.ADMINISTRATIVE)
    extendable: bool = field(default=False)
    max_extension_days: int = field(default=0)
    external_entity: bool = field(default=False)
    start_anchors: tuple[KarinStage, ...] = field(default=())
    falls_back_to_case_creation: bool = field(default=False)

    def __post_init__(self) -> None:
        """Validate definition fields after initialization.

        Raises:
            ValueError: If any field validation fails.
        """
        if self.base_days < 0:
            raise ValueError(f"base_days must be >= 0, got {self.base_days}")
        if self.max_extension_days < 0:
            raise ValueError(
                f"max_extension_days must be >= 0, got {self.max_extension_days}"
            )
        if not self.extendable and self.max_extension_days:
            raise ValueError("max_extension_days requires extendable=True")
        if not self.start_anchors and not self.falls_back_to_case_creation:
            raise ValueError(
                f"stage {self.stage.value} needs an anchor stage or case creation"
            )


class StageCatalog(Mapping[KarinStage, StageDefinition]):
    """Versioned, immutable mapping of stage to definition.

    Exactly one definition per stage. Iteration follows insertion order,
    which is the order stages are processed during recomputation.

    Example:
        >>> catalog = StageCatalog(version="test", definitions=[...])
        >>> catalog.get_definition(KarinStage.INVESTIGATION).base_days
        30
    """

    def __init__(
        self,
        version: str,
        definitions: list[StageDefinition] | tuple[StageDefinition, ...],
    ) -> None:
        """Initialize the catalog.

        Args:
            version: Catalog version label.
            definitions: Stage definitions.

        Raises:
            ValueError: If a stage appears more than once.
        """
        by_stage: dict[KarinStage, StageDefinition] = {}
        for definition in definitions:
            if definition.stage in by_stage:
                raise ValueError(f"duplicate definition for {definition.stage.value}")
            by_stage[definition.stage] = definition
        self._version = version
        self._definitions = MappingProxyType(by_stage)

    @property
    def version(self) -> str:
        return self._version

    def __getitem__(self, stage: KarinStage) -> StageDefinition:
        return self._definitions[stage]

    def __iter__(self) -> Iterator[KarinStage]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def get_definition(self, stage: KarinStage | str) -> StageDefinition:
        """Look up the definition for a stage.

        Args:
            stage: Stage or raw stage identifier.

        Returns:
            The stage's definition.

        Raises:
            UnknownStageError: If the stage has no definition.
        """
        parsed = KarinStage.parse(stage)
        definition = self._definitions.get(parsed)
        if definition is None:
            raise UnknownStageError(stage=parsed.value, catalog_version=self._version)
        return definition

    def __repr__(self) -> str:
        return f"StageCatalog(version={self._version!r}, stages={len(self)})"


DEFAULT_STAGE_CATALOG_VERSION = "ley-21643/2024"

DEFAULT_STAGE_CATALOG = StageCatalog(
    version=DEFAULT_STAGE_CATALOG_VERSION,
    definitions=(
        StageDefinition(
            stage=KarinStage.RECEPTION,
            base_days=0,
            description="Immediate reception of the complaint",
            next_action="Implement precautionary measures",
            article="Art. 3, Ley Karin",
            falls_back_to_case_creation=True,
        ),
        StageDefinition(
            stage=KarinStage.SUBSANATION,
            base_days=5,
            description="Period to correct missing complaint information",
            next_action="Complete the required information",
            article="Art. 4, Ley Karin",
            start_anchors=(KarinStage.SUBSANATION,),
        ),
        StageDefinition(
            stage=KarinStage.DT_NOTIFICATION,
            base_days=3,
            description="Notification to the Labour Directorate (DT)",
            next_action="Send the official notification",
            article="Art. 5, Ley Karin",
            start_anchors=(KarinStage.RECEPTION,),
            falls_back_to_case_creation=True,
        ),
        StageDefinition(
            stage=KarinStage.SUSESO_NOTIFICATION,
            base_days=5,
            description="Notification to SUSESO / mutual insurer",
            next_action="Send the official notification",
            article="Art. 5, Ley Karin",
            start_anchors=(KarinStage.RECEPTION,),
            falls_back_to_case_creation=True,
        ),
        StageDefinition(
            stage=KarinStage.PRECAUTIONARY_MEASURES,
            base_days=3,
            description="Implementation of precautionary measures",
            next_action="Define and implement measures",
            article="Art. 6, Ley Karin",
            start_anchors=(KarinStage.RECEPTION,),
            falls_back_to_case_creation=True,
        ),
        StageDefinition(
            stage=KarinStage.INVESTIGATION,
            base_days=30,
            description="Complete investigation",
            next_action="Conduct the investigation and prepare the report",
            article="Art. 8, Ley Karin",
            extendable=True,
            max_extension_days=30,
            start_anchors=(KarinStage.DECISION_TO_INVESTIGATE, KarinStage.INVESTIGATION),
        ),
        StageDefinition(
            stage=KarinStage.DT_SUBMISSION,
            base_days=2,
            description="Submission of the case file to the DT",
            next_action="Send the complete case file",
            article="Art. 10, Ley Karin",
            start_anchors=(KarinStage.INVESTIGATION_COMPLETE,),
        ),
        StageDefinition(
            stage=KarinStage.DT_RESOLUTION,
            base_days=30,
            description="DT resolution",
            next_action="Await the DT ruling",
            article="Art. 11, Ley Karin",
            external_entity=True,
            start_anchors=(KarinStage.DT_SUBMISSION,),
        ),
        StageDefinition(
            stage=KarinStage.MEASURES_ADOPTION,
            base_days=15,
            description="Adoption of ordered measures",
            next_action="Implement the required measures",
            article="Art. 12, Ley Karin",
            unit=DurationUnit.CALENDAR_DAY,
            start_anchors=(KarinStage.DT_RESOLUTION,),
        ),
    ),
)
