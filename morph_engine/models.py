"""
models.py - 핵심 데이터 모델 정의
유전 방식, 접합 상태, 모프 정의, 계산 결과 클래스
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Union, Type


class RecessiveStatus(Enum):
    """열성 유전 모프의 접합 상태"""
    WILD = "wild"
    HETEROZYGOUS = "heterozygous"      # het (보인자)
    HOMOZYGOUS = "homozygous"          # 발현
    POSSIBLE_HET = "possible_het"      # 50% 확률로 het


class DominantStatus(Enum):
    """우성 유전 모프의 접합 상태"""
    WILD = "wild"
    HETEROZYGOUS = "heterozygous"
    HOMOZYGOUS = "homozygous"


class CodominantStatus(Enum):
    """공우성 유전 모프의 접합 상태"""
    WILD = "wild"
    HETEROZYGOUS = "heterozygous"
    HOMOZYGOUS = "homozygous"    # 1카피 발현 (표시용으로 heterozygous와 동일 취급)
    SUPER = "super"              # 2카피 (슈퍼체)


Status = Union[RecessiveStatus, DominantStatus, CodominantStatus]


class InheritanceType(Enum):
    """유전 방식 정의"""
    RECESSIVE = "recessive"
    DOMINANT = "dominant"
    CODOMINANT = "codominant"

    @property
    def status_type(self) -> Type[Enum]:
        """이 유전 방식에서 유효한 접합 상태 열거형"""
        return _STATUS_TYPES[self]

    @property
    def wild(self) -> Status:
        return self.status_type.WILD

    def is_valid_status(self, value) -> bool:
        """상태 값이 이 유전 방식에서 유효한지"""
        if isinstance(value, Enum):
            value = value.value
        # 리스트 등 해시 불가능한 값도 비교할 수 있도록 튜플 사용
        return value in tuple(s.value for s in self.status_type)

    def parse_status(self, value) -> Status:
        """
        문자열 또는 열거형 값을 이 유전 방식의 접합 상태로 변환
        인식할 수 없는 값은 야생형으로 처리
        """
        if isinstance(value, self.status_type):
            return value
        if isinstance(value, Enum):
            value = value.value
        try:
            return self.status_type(value)
        except ValueError:
            return self.wild


_STATUS_TYPES = {
    InheritanceType.RECESSIVE: RecessiveStatus,
    InheritanceType.DOMINANT: DominantStatus,
    InheritanceType.CODOMINANT: CodominantStatus,
}


# 부모 유전자형: {locus_id: status}
ParentGenotype = Dict[str, Union[str, Status]]


@dataclass(frozen=True)
class MorphDefinition:
    """
    모프(유전자좌) 정의 - 외부에서 주어지는 읽기 전용 메타데이터
    - id: 유전자좌 ID (예: 'tremper_albino')
    - name: 표시 이름 (예: 'Tremper Albino')
    - inheritance: 유전 방식
    - super_form: 슈퍼체 이름 (공우성 전용)
    - albino_group: 알비노 계통 태그
    - health_warning: 건강 관련 경고 문구
    """
    id: str
    name: str
    inheritance: InheritanceType
    super_form: Optional[str] = None
    albino_group: Optional[str] = None
    health_warning: Optional[str] = None
    local_name: Optional[str] = None
    color: Optional[str] = None

    @property
    def super_label(self) -> str:
        """슈퍼체 표시 이름"""
        return self.super_form or f"Super {self.name}"

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.inheritance.value,
            'super_form': self.super_form,
            'albino_group': self.albino_group,
            'health_warning': self.health_warning,
            'local_name': self.local_name,
            'color': self.color,
        }


@dataclass
class LocusOutcome:
    """한 유전자좌의 교배 결과 (퍼넷 사각형 한 종류)"""
    locus: str
    genotype: str       # 정규화된 2문자 유전자형 (예: 'Aa')
    phenotype: str
    status: Status
    probability: float  # 퍼센트 (0~100)

    @property
    def trait(self) -> 'TraitDescriptor':
        return TraitDescriptor(
            locus=self.locus,
            phenotype=self.phenotype,
            status=self.status
        )


@dataclass(frozen=True)
class TraitDescriptor:
    """자손 한 개체의 유전자좌별 형질"""
    locus: str
    phenotype: str
    status: Status

    @property
    def is_wild(self) -> bool:
        return self.status.value == "wild"

    def to_dict(self) -> Dict:
        return {
            'locus': self.locus,
            'phenotype': self.phenotype,
            'status': self.status.value
        }


@dataclass
class CombinedOutcome:
    """전체 유전자좌를 조합한 자손 결과"""
    traits: List[TraitDescriptor]
    probability: float
    display_name: str = "Normal"
    health_warnings: List[str] = field(default_factory=list)

    @property
    def visible_traits(self) -> List[TraitDescriptor]:
        """야생형이 아닌 형질"""
        return [t for t in self.traits if not t.is_wild]

    def to_dict(self) -> Dict:
        return {
            'display_name': self.display_name,
            'probability': self.probability,
            'traits': [t.to_dict() for t in self.traits],
            'health_warnings': list(self.health_warnings)
        }

    def __repr__(self):
        return f"CombinedOutcome({self.display_name!r}, {self.probability}%)"


@dataclass
class CalculationResult:
    """
    calculate() 반환값
    검증 실패 시 error에 메시지가 들어가고 outcomes는 비어 있음
    """
    outcomes: List[CombinedOutcome] = field(default_factory=list)
    error: Optional[str] = None
    skipped_loci: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def total_probability(self) -> float:
        return round(sum(o.probability for o in self.outcomes), 2)

    def to_dict(self) -> Dict:
        return {
            'success': self.is_valid,
            'error': self.error,
            'results': [o.to_dict() for o in self.outcomes],
            'skipped_loci': list(self.skipped_loci)
        }

    def __iter__(self):
        return iter(self.outcomes)

    def __len__(self):
        return len(self.outcomes)
