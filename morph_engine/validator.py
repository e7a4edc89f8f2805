"""
validator.py - 부모 유전자형 검증 모듈
계산 전에 생물학적으로 불가능한 유전자형(복수 알비노 계통)을 거부
"""

import logging
from typing import List, Dict, Mapping, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

from .models import MorphDefinition, ParentGenotype


logger = logging.getLogger(__name__)


PARENT_LABELS = {1: "부모1", 2: "부모2"}


class AlbinoIncompatibilityError(Exception):
    """한 부모가 두 개 이상의 알비노 계통을 보유"""

    def __init__(self, parent: int, morph_names: List[str]):
        self.parent = parent
        self.morph_names = list(morph_names)
        super().__init__(
            f"{PARENT_LABELS.get(parent, f'부모{parent}')}(parent{parent})이(가) "
            f"여러 알비노 계통을 보유하고 있습니다: {', '.join(self.morph_names)}. "
            f"한 개체는 하나의 알비노 계통만 가질 수 있습니다."
        )


class IssueKind(Enum):
    """유전자형 입력 문제 종류"""
    ALBINO_CONFLICT = "albino_conflict"   # 계산 거부
    UNKNOWN_LOCUS = "unknown_locus"       # 해당 유전자좌 제외
    INVALID_STATUS = "invalid_status"     # wild로 처리

    @property
    def blocks_calculation(self) -> bool:
        return self is IssueKind.ALBINO_CONFLICT


@dataclass(frozen=True)
class GenotypeIssue:
    """부모 유전자형에서 발견된 문제 하나"""
    kind: IssueKind
    message: str
    parent: Optional[int] = None
    locus: Optional[str] = None
    status: Optional[str] = None
    morphs: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        body = {'kind': self.kind.value, 'message': self.message}
        if self.parent is not None:
            body['parent'] = self.parent
        if self.locus is not None:
            body['locus'] = self.locus
        if self.status is not None:
            body['status'] = self.status
        if self.morphs:
            body['morphs'] = list(self.morphs)
        return body


@dataclass
class ValidationReport:
    """
    검증 결과 - 발견된 문제 목록
    계산을 막는 문제(알비노 충돌)가 하나라도 있으면 무효
    """
    issues: List[GenotypeIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[GenotypeIssue]:
        return [i for i in self.issues if i.kind.blocks_calculation]

    @property
    def warnings(self) -> List[GenotypeIssue]:
        return [i for i in self.issues if not i.kind.blocks_calculation]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def of_kind(self, kind: IssueKind) -> List[GenotypeIssue]:
        return [i for i in self.issues if i.kind == kind]

    def to_dict(self) -> Dict:
        return {
            'is_valid': self.is_valid,
            'error_count': len(self.errors),
            'warning_count': len(self.warnings),
            'issues': [i.to_dict() for i in self.issues],
        }

    def __str__(self):
        if not self.issues:
            return "유전자형 검증 통과"
        return "\n".join(
            f"{'✗' if i.kind.blocks_calculation else '⚠️'} {i.message}"
            for i in self.issues
        )


class GenotypeValidator:
    """
    부모 유전자형 검증 클래스

    검증 항목:
    1. 알비노 계통 호환성 (부모별 활성 알비노 모프 1개 이하)
    2. 카탈로그에 없는 유전자좌 (건너뜀)
    3. 유전 방식에 맞지 않는 접합 상태 (야생형으로 처리)
    """

    def __init__(self, morphs: Mapping[str, MorphDefinition]):
        self.morphs = morphs

    def is_active(self, morph: MorphDefinition, status) -> bool:
        """야생형이 아닌 대립유전자를 보유하는지"""
        return morph.inheritance.parse_status(status) != morph.inheritance.wild

    def get_albino_morphs(self, genotype: ParentGenotype) -> List[str]:
        """부모가 보유한 알비노 계통 모프 이름 목록"""
        albinos = []
        for locus, status in genotype.items():
            morph = self.morphs.get(locus)
            if morph is None or not morph.albino_group:
                continue
            if self.is_active(morph, status):
                albinos.append(morph.name)
        return albinos

    def check_albino_compatibility(self, parent1: ParentGenotype, parent2: ParentGenotype):
        """
        알비노 계통 호환성 검사

        Raises:
            AlbinoIncompatibilityError: 한 부모가 2개 이상의 알비노 계통 보유
        """
        for parent, genotype in ((1, parent1), (2, parent2)):
            albinos = self.get_albino_morphs(genotype)
            if len(albinos) > 1:
                raise AlbinoIncompatibilityError(parent, albinos)

    def find_unknown_loci(self, *genotypes: ParentGenotype) -> List[str]:
        """카탈로그에 없는 유전자좌 ID (처음 등장한 순서, 중복 제거)"""
        unknown = []
        for genotype in genotypes:
            for locus in genotype:
                if locus not in self.morphs and locus not in unknown:
                    unknown.append(locus)
        return unknown

    def validate(
        self,
        parent1: ParentGenotype,
        parent2: ParentGenotype
    ) -> ValidationReport:
        """
        계산을 실행하지 않고 입력 문제만 수집
        알비노 충돌은 예외 대신 보고서 항목으로 기록
        """
        issues = []

        for parent, genotype in ((1, parent1), (2, parent2)):
            albinos = self.get_albino_morphs(genotype)
            if len(albinos) > 1:
                issues.append(GenotypeIssue(
                    kind=IssueKind.ALBINO_CONFLICT,
                    message=str(AlbinoIncompatibilityError(parent, albinos)),
                    parent=parent,
                    morphs=tuple(albinos)
                ))

        for locus in self.find_unknown_loci(parent1, parent2):
            issues.append(GenotypeIssue(
                kind=IssueKind.UNKNOWN_LOCUS,
                message=f"카탈로그에 없는 유전자좌는 계산에서 제외됩니다: {locus}",
                locus=locus
            ))

        for parent, genotype in ((1, parent1), (2, parent2)):
            for locus, status in genotype.items():
                morph = self.morphs.get(locus)
                if morph is None or morph.inheritance.is_valid_status(status):
                    continue
                text = _status_text(status)
                issues.append(GenotypeIssue(
                    kind=IssueKind.INVALID_STATUS,
                    message=(f"{PARENT_LABELS[parent]}의 {morph.name} 상태 {text}는 "
                             f"{morph.inheritance.value} 모프에 유효하지 않아 wild로 처리됩니다"),
                    parent=parent,
                    locus=locus,
                    status=text
                ))

        return ValidationReport(issues)


def _status_text(status) -> str:
    return status.value if isinstance(status, Enum) else str(status)


def validate_genotypes(
    morphs: Mapping[str, MorphDefinition],
    parent1: ParentGenotype,
    parent2: ParentGenotype,
    log: Optional[logging.Logger] = None
) -> ValidationReport:
    """편의 함수: 검증 후 경고 항목을 로그로 남김"""
    report = GenotypeValidator(morphs).validate(parent1, parent2)
    for issue in report.warnings:
        (log or logger).warning(issue.message)
    return report
