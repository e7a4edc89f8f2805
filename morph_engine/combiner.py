"""
combiner.py - 유전자좌 결과 조합 (독립의 법칙)
유전자좌별 분포를 곱해 자손 전체 분포를 만들고 정렬/정리/이름 부여
"""

from typing import List, Mapping, Tuple

from .models import (
    MorphDefinition, LocusOutcome, TraitDescriptor, CombinedOutcome,
    InheritanceType, RecessiveStatus
)
from .genetics import round_percent


NORMAL_LABEL = "Normal"
DEFAULT_MIN_PROBABILITY = 0.01


def is_het_carrier(trait: TraitDescriptor, morphs: Mapping[str, MorphDefinition]) -> bool:
    """열성 het (겉으로 드러나지 않는 보인자) 여부"""
    morph = morphs.get(trait.locus)
    return (
        morph is not None
        and morph.inheritance == InheritanceType.RECESSIVE
        and trait.status == RecessiveStatus.HETEROZYGOUS
    )


def generate_display_name(
    traits: List[TraitDescriptor],
    morphs: Mapping[str, MorphDefinition]
) -> str:
    """
    표시 이름 생성

    예: [Tremper Albino(발현), het Eclipse] -> "Tremper Albino het Eclipse"
    """
    visible = []
    het_names = []

    for t in traits:
        if t.is_wild:
            continue
        if is_het_carrier(t, morphs):
            het_names.append(morphs[t.locus].name)
        else:
            visible.append(t.phenotype)

    name = " ".join(visible) if visible else NORMAL_LABEL
    if het_names:
        name += f" het {', '.join(het_names)}"
    return name


def collect_health_warnings(
    traits: List[TraitDescriptor],
    morphs: Mapping[str, MorphDefinition]
) -> List[str]:
    """발현된 형질의 건강 경고 수집 (het 보인자는 제외)"""
    warnings = []
    for t in traits:
        if t.is_wild or is_het_carrier(t, morphs):
            continue
        morph = morphs.get(t.locus)
        if not morph or not morph.health_warning:
            continue
        text = morph.health_warning.replace("⚠️", "").strip()
        if text and text not in warnings:
            warnings.append(text)
    return warnings


def pruning_cutoff(min_probability: float) -> float:
    """이 값(%) 미만이면 반올림 후 min_probability 아래로 떨어짐"""
    return max(min_probability - 0.005, 0.0)


def combine_loci(
    locus_results: List[List[LocusOutcome]],
    min_probability: float = DEFAULT_MIN_PROBABILITY
) -> List[Tuple[List[TraitDescriptor], float]]:
    """
    유전자좌별 결과의 데카르트 곱 (누적 방식)

    첫 유전자좌의 결과에서 시작해 다음 유전자좌마다
    (누적 결과 x 유전자좌 결과) 쌍으로 교체한다.
    확률은 퍼센트이므로 곱할 때마다 100으로 나눈다.

    이후 유전자좌를 곱하면 확률은 줄어들기만 하므로, 이미 컷오프 아래인
    중간 결과는 바로 버린다. 남는 결과의 확률 합은 100 이하이므로
    누적 목록의 크기는 100 / 컷오프를 넘지 않는다.
    """
    if not locus_results:
        return []

    cutoff = pruning_cutoff(min_probability)

    def keep(probability):
        return probability > 0 and probability >= cutoff

    combined = [([o.trait], o.probability) for o in locus_results[0] if keep(o.probability)]

    for outcomes in locus_results[1:]:
        next_combined = []
        for traits, probability in combined:
            for outcome in outcomes:
                joint = probability * outcome.probability / 100
                if keep(joint):
                    next_combined.append((traits + [outcome.trait], joint))
        combined = next_combined

    return combined


def combine_results(
    locus_results: List[List[LocusOutcome]],
    morphs: Mapping[str, MorphDefinition],
    min_probability: float = DEFAULT_MIN_PROBABILITY
) -> List[CombinedOutcome]:
    """
    전체 유전자좌 결과를 조합해 최종 결과 목록 생성

    Args:
        locus_results: 유전자좌별 LocusOutcome 목록 (처음 등장한 순서)
        morphs: 모프 메타데이터
        min_probability: 이 값(퍼센트) 미만으로 반올림되는 결과는 제외

    Returns:
        확률 내림차순 CombinedOutcome 목록
    """
    if not locus_results:
        return [normal_outcome()]

    combined = combine_loci(locus_results, min_probability)

    # 확률 내림차순 (동률은 생성 순서 유지)
    combined.sort(key=lambda c: c[1], reverse=True)

    results = []
    for traits, probability in combined:
        rounded = round_percent(probability)
        if rounded < min_probability or rounded <= 0:
            continue
        results.append(CombinedOutcome(
            traits=traits,
            probability=rounded,
            display_name=generate_display_name(traits, morphs),
            health_warnings=collect_health_warnings(traits, morphs)
        ))

    return results


def normal_outcome() -> CombinedOutcome:
    """모든 유전자좌가 야생형일 때의 단일 결과"""
    return CombinedOutcome(traits=[], probability=100.0, display_name=NORMAL_LABEL)
