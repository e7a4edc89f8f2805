"""
calculator.py - 교배 결과 계산기
검증 → 유전자좌별 퍼넷 사각형 → 유전자좌 조합 파이프라인
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .models import MorphDefinition, ParentGenotype, CalculationResult
from .genetics import GeneticsEngine
from .combiner import combine_results, normal_outcome, DEFAULT_MIN_PROBABILITY
from .validator import GenotypeValidator, AlbinoIncompatibilityError
from .catalog import default_catalog


logger = logging.getLogger(__name__)


@dataclass
class CalculatorConfig:
    """계산 설정"""
    min_probability: float = DEFAULT_MIN_PROBABILITY   # 이 값(%) 미만 결과 제외
    warn_unknown_loci: bool = True                     # 카탈로그에 없는 유전자좌 로그 경고


class MorphCalculator:
    """
    모프 교배 계산기

    두 부모의 유전자형을 받아 자손 모프 확률 분포를 반환한다.
    상태를 갖지 않으므로 여러 호출자가 동시에 사용해도 안전하다.
    """

    def __init__(
        self,
        morphs: Optional[Mapping[str, MorphDefinition]] = None,
        config: Optional[CalculatorConfig] = None
    ):
        """
        Args:
            morphs: 모프 카탈로그 (None이면 기본 카탈로그)
            config: 계산 설정
        """
        self.morphs = morphs if morphs is not None else default_catalog()
        self.config = config or CalculatorConfig()
        self.validator = GenotypeValidator(self.morphs)

    def collect_loci(self, parent1: ParentGenotype, parent2: ParentGenotype) -> List[str]:
        """두 부모의 유전자좌를 처음 등장한 순서로 수집"""
        loci = []
        for locus in list(parent1) + list(parent2):
            if locus not in loci:
                loci.append(locus)
        return loci

    def has_active_loci(self, parent1: ParentGenotype, parent2: ParentGenotype) -> bool:
        """어느 한 부모라도 야생형이 아닌 유전자좌를 보유하는지"""
        for genotype in (parent1, parent2):
            for locus, status in genotype.items():
                morph = self.morphs.get(locus)
                if morph is not None and self.validator.is_active(morph, status):
                    return True
        return False

    def calculate(self, parent1: ParentGenotype, parent2: ParentGenotype) -> CalculationResult:
        """
        교배 결과 계산

        Args:
            parent1: 부모1 유전자형 {locus_id: status}
            parent2: 부모2 유전자형 {locus_id: status}

        Returns:
            CalculationResult - 검증 실패 시 error 설정, outcomes는 빈 목록
        """
        parent1 = parent1 or {}
        parent2 = parent2 or {}

        try:
            self.validator.check_albino_compatibility(parent1, parent2)
        except AlbinoIncompatibilityError as e:
            logger.info("알비노 계통 충돌로 계산 거부: %s", e)
            return CalculationResult(outcomes=[], error=str(e))

        skipped = self.validator.find_unknown_loci(parent1, parent2)
        if skipped and self.config.warn_unknown_loci:
            logger.warning("카탈로그에 없는 유전자좌를 건너뜀: %s", ", ".join(skipped))

        if not self.has_active_loci(parent1, parent2):
            return CalculationResult(outcomes=[normal_outcome()], skipped_loci=skipped)

        locus_results = []
        for locus in self.collect_loci(parent1, parent2):
            morph = self.morphs.get(locus)
            if morph is None:
                continue

            p1_status = parent1.get(locus, morph.inheritance.wild)
            p2_status = parent2.get(locus, morph.inheritance.wild)

            for parent, status in ((1, p1_status), (2, p2_status)):
                if not morph.inheritance.is_valid_status(status):
                    logger.warning("부모%d의 %s 상태 %r를 wild로 처리", parent, locus, status)

            locus_results.append(GeneticsEngine.solve_locus(morph, p1_status, p2_status))

        outcomes = combine_results(
            locus_results,
            self.morphs,
            min_probability=self.config.min_probability
        )
        logger.debug("유전자좌 %d개, 결과 %d개", len(locus_results), len(outcomes))

        return CalculationResult(outcomes=outcomes, skipped_loci=skipped)


def calculate(
    parent1: ParentGenotype,
    parent2: ParentGenotype,
    morphs: Optional[Mapping[str, MorphDefinition]] = None
) -> CalculationResult:
    """
    편의 함수: 교배 결과 계산

    Args:
        parent1: 부모1 유전자형
        parent2: 부모2 유전자형
        morphs: 모프 카탈로그 (None이면 기본 카탈로그)

    Returns:
        CalculationResult 객체
    """
    return MorphCalculator(morphs).calculate(parent1, parent2)
