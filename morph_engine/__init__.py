"""
Morph Engine - 레오파드 게코 모프 교배 계산기

두 부모의 유전자좌별 유전자형으로 자손 모프 확률을 계산하는 엔진
"""

from .models import (
    InheritanceType,
    RecessiveStatus,
    DominantStatus,
    CodominantStatus,
    MorphDefinition,
    LocusOutcome,
    TraitDescriptor,
    CombinedOutcome,
    CalculationResult
)

from .genetics import (
    AlleleMapper,
    GeneticsEngine
)

from .combiner import (
    combine_results,
    generate_display_name
)

from .validator import (
    AlbinoIncompatibilityError,
    GenotypeValidator,
    GenotypeIssue,
    IssueKind,
    ValidationReport,
    validate_genotypes
)

from .catalog import (
    MorphCatalog,
    default_catalog
)

from .calculator import (
    CalculatorConfig,
    MorphCalculator,
    calculate
)

from .planner import (
    ComboDefinition,
    PairingKind,
    PairingPattern,
    BreedingPlan,
    BreedingPlanner,
    default_combos
)

from .visualizer import (
    ChartConfig,
    OutcomeVisualizer
)


__version__ = "1.0.0"
__all__ = [
    # Models
    "InheritanceType",
    "RecessiveStatus",
    "DominantStatus",
    "CodominantStatus",
    "MorphDefinition",
    "LocusOutcome",
    "TraitDescriptor",
    "CombinedOutcome",
    "CalculationResult",

    # Genetics
    "AlleleMapper",
    "GeneticsEngine",

    # Combiner
    "combine_results",
    "generate_display_name",

    # Validator
    "AlbinoIncompatibilityError",
    "GenotypeValidator",
    "GenotypeIssue",
    "IssueKind",
    "ValidationReport",
    "validate_genotypes",

    # Catalog
    "MorphCatalog",
    "default_catalog",

    # Calculator
    "CalculatorConfig",
    "MorphCalculator",
    "calculate",

    # Planner
    "ComboDefinition",
    "PairingKind",
    "PairingPattern",
    "BreedingPlan",
    "BreedingPlanner",
    "default_combos",

    # Visualizer
    "ChartConfig",
    "OutcomeVisualizer",
]
