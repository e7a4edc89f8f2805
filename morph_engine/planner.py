"""
planner.py - 역산 교배 계획
목표 콤보 모프를 얻기 위한 부모 페어링 패턴을 제안하고
각 패턴의 출현 확률을 계산기로 직접 구한다
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .models import (
    MorphDefinition, InheritanceType, RecessiveStatus, DominantStatus,
    CodominantStatus, CalculationResult
)
from .combiner import is_het_carrier
from .genetics import round_percent
from .calculator import MorphCalculator


logger = logging.getLogger(__name__)


DEFAULT_COMBOS = [
    {
        'id': 'raptor', 'name': 'RAPTOR', 'local_name': '랩터',
        'components': ['tremper_albino', 'eclipse'],
        'note': 'Ruby-eyed Albino Patternless Tremper Orange의 약자',
    },
    {
        'id': 'radar', 'name': 'RADAR', 'local_name': '레이더',
        'components': ['bell_albino', 'eclipse'],
    },
    {
        'id': 'typhoon', 'name': 'Typhoon', 'local_name': '타이푼',
        'components': ['rainwater_albino', 'eclipse'],
    },
    {
        'id': 'blazing_blizzard', 'name': 'Blazing Blizzard', 'local_name': '블레이징 블리자드',
        'components': ['tremper_albino', 'blizzard'],
    },
    {
        'id': 'diablo_blanco', 'name': 'Diablo Blanco', 'local_name': '디아블로 블랑코',
        'components': ['tremper_albino', 'blizzard', 'eclipse'],
    },
    {
        'id': 'snow_raptor', 'name': 'Snow RAPTOR', 'local_name': '스노우 랩터',
        'components': ['mack_snow', 'tremper_albino', 'eclipse'],
    },
    {
        'id': 'dreamsicle', 'name': 'Dreamsicle', 'local_name': '드림시클',
        'components': ['enigma', 'mack_snow', 'tremper_albino', 'eclipse'],
        'note': '에니그마 증후군 발현 가능성이 있는 라인',
    },
]


# 발현 개체(비주얼)로 간주하는 접합 상태
VISUAL_STATUS = {
    InheritanceType.RECESSIVE: RecessiveStatus.HOMOZYGOUS,
    InheritanceType.DOMINANT: DominantStatus.HETEROZYGOUS,
    InheritanceType.CODOMINANT: CodominantStatus.HOMOZYGOUS,
}


@dataclass(frozen=True)
class ComboDefinition:
    """여러 유전자좌를 동시에 발현한 콤보 모프"""
    id: str
    name: str
    components: Tuple[str, ...]
    local_name: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'components': list(self.components),
            'local_name': self.local_name,
            'note': self.note,
        }


def combo_from_record(record: Dict) -> ComboDefinition:
    if not isinstance(record, dict) or not record.get('id') or not record.get('components'):
        raise ValueError(f"콤보 레코드에는 id와 components가 필요합니다: {record!r}")
    return ComboDefinition(
        id=record['id'],
        name=record.get('name') or record['id'],
        components=tuple(record['components']),
        local_name=record.get('local_name'),
        note=record.get('note'),
    )


def default_combos() -> List[ComboDefinition]:
    return [combo_from_record(r) for r in DEFAULT_COMBOS]


class PairingKind(Enum):
    """부모 페어링 패턴"""
    BOTH_VISUAL = "both_visual"      # 가장 빠름
    HET_X_HET = "het_x_het"          # 부모 구하기 쉬움
    VISUAL_X_HET = "visual_x_het"    # 절충

    @property
    def label(self) -> str:
        return _PAIRING_LABELS[self]


_PAIRING_LABELS = {
    PairingKind.BOTH_VISUAL: "양쪽 부모 모두 발현",
    PairingKind.HET_X_HET: "het 보인자끼리 교배",
    PairingKind.VISUAL_X_HET: "발현 × het 보인자",
}


@dataclass
class PairingPattern:
    """
    제안 페어링 하나
    probability는 자손이 모든 구성 모프를 발현할 확률(%)
    알비노 계통 충돌 등으로 계산이 거부되면 error에 사유가 들어감
    """
    kind: PairingKind
    parent1: Dict[str, str]
    parent2: Dict[str, str]
    probability: Optional[float] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind.value,
            'label': self.kind.label,
            'parent1': dict(self.parent1),
            'parent2': dict(self.parent2),
            'probability': self.probability,
            'error': self.error,
        }


@dataclass
class BreedingPlan:
    """목표 모프에 대한 역산 결과"""
    target: str
    components: List[str]
    patterns: List[PairingPattern] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    skipped_components: List[str] = field(default_factory=list)

    @property
    def best(self) -> Optional[PairingPattern]:
        """계산 가능한 패턴 중 확률이 가장 높은 것"""
        valid = [p for p in self.patterns if p.error is None]
        return max(valid, key=lambda p: p.probability) if valid else None

    def to_dict(self) -> Dict:
        return {
            'target': self.target,
            'components': list(self.components),
            'patterns': [p.to_dict() for p in self.patterns],
            'notes': list(self.notes),
            'skipped_components': list(self.skipped_components),
        }


def visual_genotype(morphs: Sequence[MorphDefinition]) -> Dict[str, str]:
    """모든 모프를 발현한 개체의 유전자형"""
    return {m.id: VISUAL_STATUS[m.inheritance].value for m in morphs}


def carrier_genotype(morphs: Sequence[MorphDefinition]) -> Dict[str, str]:
    """열성 모프는 het 보인자, 나머지는 발현 상태인 유전자형"""
    return {
        m.id: (RecessiveStatus.HETEROZYGOUS.value
               if m.inheritance == InheritanceType.RECESSIVE
               else VISUAL_STATUS[m.inheritance].value)
        for m in morphs
    }


class BreedingPlanner:
    """
    역산 교배 계획기

    목표 콤보의 구성 모프를 유전 방식별로 나누고 페어링 패턴을 만든 뒤,
    각 패턴을 MorphCalculator로 계산해 모든 구성 모프가 발현될 확률을 구한다.
    """

    def __init__(
        self,
        calculator: Optional[MorphCalculator] = None,
        combos: Optional[List[ComboDefinition]] = None
    ):
        self.calculator = calculator or MorphCalculator()
        self.morphs = self.calculator.morphs
        self.combos: Dict[str, ComboDefinition] = {}
        for combo in (combos if combos is not None else default_combos()):
            if combo.id in self.combos:
                raise ValueError(f"중복된 콤보 ID: {combo.id}")
            self.combos[combo.id] = combo

    def group_components(
        self,
        components: Sequence[str]
    ) -> Tuple[Dict[InheritanceType, List[MorphDefinition]], List[str]]:
        """구성 모프를 유전 방식별로 분류 (카탈로그에 없는 ID는 따로 반환)"""
        groups = {inheritance: [] for inheritance in InheritanceType}
        skipped = []
        for morph_id in components:
            morph = self.morphs.get(morph_id)
            if morph is None:
                if morph_id not in skipped:
                    skipped.append(morph_id)
                continue
            if morph not in groups[morph.inheritance]:
                groups[morph.inheritance].append(morph)
        return groups, skipped

    def expression_probability(self, result: CalculationResult, components: Sequence[str]) -> float:
        """모든 구성 모프가 겉으로 드러나는 자손의 확률 합"""
        wanted = set(components)
        total = 0.0
        for outcome in result:
            expressed = {
                t.locus for t in outcome.traits
                if not t.is_wild and not is_het_carrier(t, self.morphs)
            }
            if wanted <= expressed:
                total += outcome.probability
        return round_percent(total)

    def evaluate(
        self,
        kind: PairingKind,
        parent1: Dict[str, str],
        parent2: Dict[str, str],
        components: Sequence[str]
    ) -> PairingPattern:
        pattern = PairingPattern(kind=kind, parent1=parent1, parent2=parent2)
        result = self.calculator.calculate(parent1, parent2)
        if not result.is_valid:
            pattern.error = result.error
        else:
            pattern.probability = self.expression_probability(result, components)
        logger.debug("%s: %s", kind.value, pattern.error or f"{pattern.probability}%")
        return pattern

    def plan(self, components: Sequence[str], target: Optional[str] = None) -> BreedingPlan:
        """
        구성 모프 목록에 대한 역산 계획

        Raises:
            ValueError: 카탈로그에 있는 구성 모프가 하나도 없을 때
        """
        groups, skipped = self.group_components(components)
        if skipped:
            logger.warning("카탈로그에 없는 구성 모프를 건너뜀: %s", ", ".join(skipped))

        ordered = [m for inheritance in InheritanceType for m in groups[inheritance]]
        if not ordered:
            raise ValueError(f"계산할 수 있는 구성 모프가 없습니다: {', '.join(components)}")

        ids = [m.id for m in ordered]
        plan = BreedingPlan(
            target=target or " ".join(m.name for m in ordered),
            components=ids,
            skipped_components=skipped
        )

        visual = visual_genotype(ordered)
        plan.patterns.append(self.evaluate(PairingKind.BOTH_VISUAL, visual, dict(visual), ids))

        if groups[InheritanceType.RECESSIVE]:
            carrier = carrier_genotype(ordered)
            plan.patterns.append(self.evaluate(PairingKind.HET_X_HET, carrier, dict(carrier), ids))
            plan.patterns.append(self.evaluate(PairingKind.VISUAL_X_HET, dict(visual), dict(carrier), ids))

        dominant = groups[InheritanceType.DOMINANT]
        if dominant:
            names = ", ".join(m.local_name or m.name for m in dominant)
            plan.notes.append(
                f"⚠️ 우성 유전자({names})는 het 보인자로 유지할 수 없으므로 "
                f"한쪽 부모는 발현 개체여야 합니다."
            )

        albinos = [m for m in groups[InheritanceType.RECESSIVE] if m.albino_group]
        if len(albinos) > 1:
            plan.notes.append(
                "⚠️ 여러 알비노 계통이 포함되어 있습니다. "
                "알비노 계통끼리는 호환되지 않으므로 주의하세요."
            )

        return plan

    def plan_combo(self, combo_id: str) -> BreedingPlan:
        """
        등록된 콤보 모프의 역산 계획

        Raises:
            KeyError: 등록되지 않은 콤보 ID
        """
        combo = self.combos[combo_id]
        plan = self.plan(combo.components, target=combo.name)
        if combo.note:
            plan.notes.insert(0, f"📝 {combo.note}")
        return plan

    def combo_genotype(self, combo_id: str) -> Tuple[Dict[str, str], Dict[str, str]]:
        """콤보를 계산기에 넣을 부모 쌍 (부모1은 모든 구성 모프 발현, 부모2는 노멀)"""
        components = self.combos[combo_id].components
        return visual_genotype([self.morphs[c] for c in components if c in self.morphs]), {}
