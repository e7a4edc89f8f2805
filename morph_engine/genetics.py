"""
genetics.py - 멘델 유전 법칙 구현
접합 상태 → 대립유전자 변환, 유전자좌별 퍼넷 사각형 계산
"""

import math
from typing import List, Tuple, Dict

from .models import (
    MorphDefinition, LocusOutcome, InheritanceType, Status,
    RecessiveStatus, DominantStatus, CodominantStatus
)


# (가중치, (대립유전자1, 대립유전자2))
AlleleBranch = Tuple[float, Tuple[str, str]]


ALLELE_TABLE: Dict[Status, List[AlleleBranch]] = {
    # 열성: A = 야생형, a = 변이
    RecessiveStatus.WILD: [(1.0, ('A', 'A'))],
    RecessiveStatus.HETEROZYGOUS: [(1.0, ('A', 'a'))],
    RecessiveStatus.HOMOZYGOUS: [(1.0, ('a', 'a'))],
    RecessiveStatus.POSSIBLE_HET: [(0.5, ('A', 'A')), (0.5, ('A', 'a'))],

    # 우성: D = 변이, d = 야생형
    DominantStatus.WILD: [(1.0, ('d', 'd'))],
    DominantStatus.HETEROZYGOUS: [(1.0, ('D', 'd'))],
    DominantStatus.HOMOZYGOUS: [(1.0, ('D', 'D'))],

    # 공우성: S = 변이, s = 야생형
    CodominantStatus.WILD: [(1.0, ('s', 's'))],
    CodominantStatus.HETEROZYGOUS: [(1.0, ('S', 's'))],
    CodominantStatus.HOMOZYGOUS: [(1.0, ('S', 's'))],
    CodominantStatus.SUPER: [(1.0, ('S', 'S'))],
}


def round_percent(value: float, ndigits: int = 2) -> float:
    """소수점 반올림 (half-up, 0.125 -> 0.13)"""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


class AlleleMapper:
    """접합 상태를 대립유전자 조합(들)로 변환"""

    @staticmethod
    def get_alleles(inheritance: InheritanceType, status) -> List[AlleleBranch]:
        """
        유전 방식과 접합 상태로부터 대립유전자 분기 목록 반환

        Args:
            inheritance: 유전 방식
            status: 접합 상태 (문자열 또는 열거형)

        Returns:
            [(가중치, (allele1, allele2)), ...] - possible_het만 2개 분기
        """
        parsed = inheritance.parse_status(status)
        return ALLELE_TABLE[parsed]


class GeneticsEngine:
    """유전자좌 단위 퍼넷 사각형 계산 엔진"""

    @staticmethod
    def normalize_genotype(a1: str, a2: str) -> str:
        """유전자형 정규화 - 대문자(변이/야생 무관)를 앞에"""
        return a1 + a2 if a1 <= a2 else a2 + a1

    @staticmethod
    def punnett_square(
        p1_branches: List[AlleleBranch],
        p2_branches: List[AlleleBranch]
    ) -> Dict[str, float]:
        """
        두 부모의 대립유전자 분기에서 자손 유전자형 분포 계산

        분기 x 분기 x 2x2 칸을 모두 열거하고, 각 칸의 가중치
        (w1 * w2 * 0.25)를 정규화된 유전자형별로 합산한다.

        Returns:
            {genotype: 확률(0~1)} - 처음 등장한 순서 유지
        """
        outcomes: Dict[str, float] = {}

        for w1, p1_alleles in p1_branches:
            for w2, p2_alleles in p2_branches:
                for a1 in p1_alleles:
                    for a2 in p2_alleles:
                        genotype = GeneticsEngine.normalize_genotype(a1, a2)
                        outcomes[genotype] = outcomes.get(genotype, 0.0) + w1 * w2 * 0.25

        return outcomes

    @staticmethod
    def interpret_genotype(morph: MorphDefinition, genotype: str) -> Tuple[str, Status]:
        """유전자형에서 (표현형 이름, 접합 상태) 결정"""
        inheritance = morph.inheritance

        if inheritance == InheritanceType.RECESSIVE:
            if genotype == 'aa':
                return morph.name, RecessiveStatus.HOMOZYGOUS
            if genotype in ('Aa', 'aA'):
                return f"het {morph.name}", RecessiveStatus.HETEROZYGOUS
            return "Normal", RecessiveStatus.WILD

        if inheritance == InheritanceType.DOMINANT:
            if genotype == 'DD':
                return f"{morph.name} (Homozygous)", DominantStatus.HOMOZYGOUS
            if genotype in ('Dd', 'dD'):
                return morph.name, DominantStatus.HETEROZYGOUS
            return "Normal", DominantStatus.WILD

        # 공우성: 1카피 발현체는 표시용으로 homozygous 상태를 사용
        if genotype == 'SS':
            return morph.super_label, CodominantStatus.SUPER
        if genotype in ('Ss', 'sS'):
            return morph.name, CodominantStatus.HOMOZYGOUS
        return "Normal", CodominantStatus.WILD

    @staticmethod
    def solve_locus(morph: MorphDefinition, p1_status, p2_status) -> List[LocusOutcome]:
        """
        한 유전자좌의 교배 결과 계산

        Args:
            morph: 유전자좌 모프 정의
            p1_status: 부모1 접합 상태
            p2_status: 부모2 접합 상태

        Returns:
            LocusOutcome 목록 (확률은 퍼센트, 합계 100)
        """
        p1_branches = AlleleMapper.get_alleles(morph.inheritance, p1_status)
        p2_branches = AlleleMapper.get_alleles(morph.inheritance, p2_status)

        distribution = GeneticsEngine.punnett_square(p1_branches, p2_branches)

        results = []
        for genotype, probability in distribution.items():
            if probability <= 0:
                continue

            phenotype, status = GeneticsEngine.interpret_genotype(morph, genotype)
            results.append(LocusOutcome(
                locus=morph.id,
                genotype=genotype,
                phenotype=phenotype,
                status=status,
                probability=round_percent(probability * 100)
            ))

        return results
