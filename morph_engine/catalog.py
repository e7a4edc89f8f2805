"""
catalog.py - 모프 메타데이터 카탈로그
유전자좌 ID → MorphDefinition 읽기 전용 매핑, JSON 로딩, 기본 카탈로그
"""

import json
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional

from .models import MorphDefinition, InheritanceType


# 기본 레오파드 게코 모프 데이터
DEFAULT_MORPHS: List[Dict] = [
    # 열성 유전
    {
        'id': 'tremper_albino', 'name': 'Tremper Albino', 'type': 'recessive',
        'albino_group': 'tremper', 'local_name': '트렘퍼 알비노', 'color': '#F5CBA7',
    },
    {
        'id': 'bell_albino', 'name': 'Bell Albino', 'type': 'recessive',
        'albino_group': 'bell', 'local_name': '벨 알비노', 'color': '#F0B27A',
    },
    {
        'id': 'rainwater_albino', 'name': 'Rainwater Albino', 'type': 'recessive',
        'albino_group': 'rainwater', 'local_name': '레인워터 알비노', 'color': '#FAD7A0',
    },
    {
        'id': 'eclipse', 'name': 'Eclipse', 'type': 'recessive',
        'local_name': '이클립스', 'color': '#5D6D7E',
    },
    {
        'id': 'blizzard', 'name': 'Blizzard', 'type': 'recessive',
        'local_name': '블리자드', 'color': '#D6DBDF',
    },
    {
        'id': 'murphy_patternless', 'name': 'Murphy Patternless', 'type': 'recessive',
        'local_name': '머피 패턴리스', 'color': '#D5D8DC',
    },
    {
        'id': 'marble_eye', 'name': 'Marble Eye', 'type': 'recessive',
        'local_name': '마블 아이', 'color': '#85929E',
    },

    # 우성 유전
    {
        'id': 'enigma', 'name': 'Enigma', 'type': 'dominant',
        'health_warning': '⚠️ 에니그마 증후군(선회, 균형 장애 등 신경 증상)이 나타날 수 있습니다.',
        'local_name': '에니그마', 'color': '#A569BD',
    },
    {
        'id': 'white_and_yellow', 'name': 'White and Yellow', 'type': 'dominant',
        'health_warning': '⚠️ 일부 개체에서 신경 증상이 보고되어 있습니다.',
        'local_name': '화이트 앤 옐로우', 'color': '#F9E79F',
    },

    # 공우성
    {
        'id': 'mack_snow', 'name': 'Mack Snow', 'type': 'codominant',
        'super_form': 'Super Snow', 'local_name': '맥 스노우', 'color': '#EAECEE',
    },
    {
        'id': 'gem_snow', 'name': 'GEM Snow', 'type': 'codominant',
        'super_form': 'Super GEM Snow', 'local_name': 'GEM 스노우', 'color': '#F2F3F4',
    },
    {
        'id': 'lemon_frost', 'name': 'Lemon Frost', 'type': 'codominant',
        'super_form': 'Super Lemon Frost',
        'health_warning': '⚠️ 홍색소포종(종양) 발생 위험이 높습니다.',
        'local_name': '레몬 프로스트', 'color': '#F7DC6F',
    },
]


def morph_from_record(record: Dict) -> MorphDefinition:
    """딕셔너리 레코드 → MorphDefinition"""
    if not isinstance(record, dict):
        raise ValueError(f"모프 레코드는 객체여야 합니다: {record!r}")
    missing = [k for k in ('id', 'name', 'type') if not record.get(k)]
    if missing:
        raise ValueError(f"모프 레코드에 필수 항목이 없습니다: {', '.join(missing)} ({record!r})")

    try:
        inheritance = InheritanceType(record['type'])
    except ValueError:
        raise ValueError(
            f"알 수 없는 유전 방식: {record['type']!r} (모프 {record['id']})"
        ) from None

    super_form = record.get('super_form') or record.get('superForm')
    if super_form and inheritance != InheritanceType.CODOMINANT:
        raise ValueError(f"슈퍼체는 공우성 모프에만 지정할 수 있습니다: {record['id']}")

    return MorphDefinition(
        id=record['id'],
        name=record['name'],
        inheritance=inheritance,
        super_form=super_form,
        albino_group=record.get('albino_group') or record.get('albinoGroup'),
        health_warning=record.get('health_warning') or record.get('healthWarning'),
        local_name=record.get('local_name'),
        color=record.get('color'),
    )


class MorphCatalog(Mapping):
    """
    모프 카탈로그 - 유전자좌 ID로 조회하는 읽기 전용 매핑
    계산기는 이 매핑만 참조하며 수정하지 않는다
    """

    def __init__(self, morphs: Optional[List[MorphDefinition]] = None):
        self._morphs: Dict[str, MorphDefinition] = {}
        for morph in morphs or []:
            if morph.id in self._morphs:
                raise ValueError(f"중복된 모프 ID: {morph.id}")
            self._morphs[morph.id] = morph

    def __getitem__(self, morph_id: str) -> MorphDefinition:
        return self._morphs[morph_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._morphs)

    def __len__(self) -> int:
        return len(self._morphs)

    @classmethod
    def from_records(cls, records: List[Dict]) -> 'MorphCatalog':
        return cls([morph_from_record(r) for r in records])

    @classmethod
    def from_json(cls, path: str) -> 'MorphCatalog':
        """
        JSON 파일에서 카탈로그 로드
        최상위가 리스트이거나 {"morphs": [...]} 형태
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get('morphs', [])
        if not isinstance(data, list):
            raise ValueError(f"카탈로그 형식이 올바르지 않습니다: {path}")
        return cls.from_records(data)

    def by_inheritance(self, inheritance: InheritanceType) -> List[MorphDefinition]:
        """유전 방식별 모프 목록"""
        return [m for m in self._morphs.values() if m.inheritance == inheritance]

    def search(self, query: str) -> List[MorphDefinition]:
        """ID, 이름, 현지 이름으로 검색 (대소문자 무시)"""
        q = query.strip().lower()
        if not q:
            return list(self._morphs.values())
        return [
            m for m in self._morphs.values()
            if q in m.id.lower()
            or q in m.name.lower()
            or (m.local_name and q in m.local_name.lower())
        ]

    def to_dict(self) -> List[Dict]:
        return [m.to_dict() for m in self._morphs.values()]

    def __repr__(self):
        return f"MorphCatalog(morphs={len(self._morphs)})"


def default_catalog() -> MorphCatalog:
    """기본 모프 카탈로그"""
    return MorphCatalog.from_records(DEFAULT_MORPHS)
