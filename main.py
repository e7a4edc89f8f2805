"""
Morph Engine - 레오파드 게코 모프 교배 계산기
메인 실행 파일

사용법:
    python main.py -1 tremper_albino=homozygous -2 tremper_albino=heterozygous
    python main.py -1 mack_snow=homozygous -2 mack_snow=homozygous --json
    python main.py -1 enigma=heterozygous --chart result.png
    python main.py --list-morphs
    python main.py --plan raptor
    python main.py --plan tremper_albino eclipse enigma
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from morph_engine import (
    MorphCalculator, MorphCatalog, OutcomeVisualizer, BreedingPlanner,
    BreedingPlan, CalculationResult, InheritanceType, default_catalog
)


class MorphEngine:
    """
    Morph Engine 메인 클래스
    교배 계산 및 결과 출력/저장
    """

    def __init__(self, catalog: Optional[MorphCatalog] = None):
        """
        Args:
            catalog: 모프 카탈로그 (None이면 기본 카탈로그)
        """
        self.catalog = catalog if catalog is not None else default_catalog()
        self.calculator = MorphCalculator(self.catalog)
        self.visualizer = OutcomeVisualizer()
        self.planner = BreedingPlanner(self.calculator)

    def calculate(self, parent1: Dict[str, str], parent2: Dict[str, str]) -> CalculationResult:
        return self.calculator.calculate(parent1, parent2)

    def describe_parent(self, genotype: Dict[str, str]) -> str:
        """부모 유전자형 요약 문자열"""
        active = [
            f"{self.catalog[locus].name}({status})"
            for locus, status in genotype.items()
            if locus in self.catalog and status != 'wild'
        ]
        return ", ".join(active) if active else "Normal"

    def display_results(self, parent1, parent2, result: CalculationResult):
        """결과를 콘솔에 표시"""
        print(f"\n{'='*50}")
        print("🦎 Morph Engine - 교배 결과")
        print(f"{'='*50}")
        print(f"♂ 부모1: {self.describe_parent(parent1)}")
        print(f"♀ 부모2: {self.describe_parent(parent2)}")

        if not result.is_valid:
            print(f"\n❌ 오류: {result.error}")
            return

        if result.skipped_loci:
            print(f"\n⚠️ 제외된 유전자좌: {', '.join(result.skipped_loci)}")

        print("\n【자손 예상】")
        for outcome in result.outcomes:
            print(f"  {outcome.probability:>6.2f}%  {outcome.display_name}")
            for warning in outcome.health_warnings:
                print(f"           ⚠️ {warning}")

    def save_chart(self, result: CalculationResult, path: str):
        self.visualizer.save_to_file(result.outcomes, path, title="교배 결과")
        print(f"✓ 차트 저장: {path}")

    def plan(self, targets: List[str]) -> BreedingPlan:
        """등록된 콤보 ID 하나 또는 구성 모프 ID 목록으로 역산"""
        if len(targets) == 1 and targets[0] in self.planner.combos:
            return self.planner.plan_combo(targets[0])
        return self.planner.plan(targets)

    def display_plan(self, plan: BreedingPlan):
        """역산 결과를 콘솔에 표시"""
        print(f"\n{'='*50}")
        print(f"🔄 {plan.target} 역산 - 추천 페어링")
        print(f"{'='*50}")
        print(f"필요한 모프: {', '.join(self.catalog[c].name for c in plan.components)}")
        if plan.skipped_components:
            print(f"⚠️ 제외된 모프: {', '.join(plan.skipped_components)}")

        for i, pattern in enumerate(plan.patterns, 1):
            print(f"\n【패턴 {i}: {pattern.kind.label}】")
            print(f"  ♂ {self.describe_parent(pattern.parent1)}")
            print(f"  ♀ {self.describe_parent(pattern.parent2)}")
            if pattern.error:
                print(f"  ❌ {pattern.error}")
            else:
                print(f"  출현 확률: {pattern.probability:g}%")

        if plan.notes:
            print()
            for note in plan.notes:
                print(note)

    def display_catalog(self):
        """카탈로그를 유전 방식별로 표시"""
        for inheritance in InheritanceType:
            print(f"\n【{inheritance.value}】")
            for morph in self.catalog.by_inheritance(inheritance):
                extra = f" / {morph.super_label}" if inheritance == InheritanceType.CODOMINANT else ""
                print(f"  {morph.id:<20} {morph.name}{extra}")


def parse_genotype(tokens: Optional[List[str]]) -> Dict[str, str]:
    """
    'locus=status' 토큰 목록을 유전자형 딕셔너리로 변환
    상태를 생략하면 heterozygous로 간주
    """
    genotype = {}
    for token in tokens or []:
        locus, sep, status = token.partition('=')
        locus = locus.strip()
        if not locus:
            raise ValueError(f"잘못된 유전자형 표기: {token!r}")
        genotype[locus] = status.strip() if sep and status.strip() else 'heterozygous'
    return genotype


def parse_args(argv=None):
    """명령줄 인자 파싱"""
    parser = argparse.ArgumentParser(
        description="Morph Engine - 레오파드 게코 모프 교배 계산기"
    )

    parser.add_argument(
        '--parent1', '-1',
        nargs='*',
        default=[],
        metavar='LOCUS=STATUS',
        help="부모1 유전자형 (예: tremper_albino=homozygous)"
    )

    parser.add_argument(
        '--parent2', '-2',
        nargs='*',
        default=[],
        metavar='LOCUS=STATUS',
        help="부모2 유전자형"
    )

    parser.add_argument(
        '--catalog', '-c',
        type=str,
        default=None,
        help="모프 카탈로그 JSON 파일 (기본: 내장 카탈로그)"
    )

    parser.add_argument(
        '--chart',
        type=str,
        default=None,
        help="확률 차트 PNG 저장 경로"
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help="결과를 JSON으로 출력"
    )

    parser.add_argument(
        '--list-morphs',
        action='store_true',
        help="카탈로그 모프 목록 출력"
    )

    parser.add_argument(
        '--plan',
        nargs='+',
        default=None,
        metavar='COMBO_OR_MORPH',
        help="콤보 ID 또는 구성 모프 ID 목록으로 부모 페어링 역산"
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help="상세 로그 출력"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """메인 함수"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        catalog = MorphCatalog.from_json(args.catalog) if args.catalog else None
    except (OSError, ValueError) as e:
        print(f"❌ 카탈로그를 불러올 수 없습니다: {e}", file=sys.stderr)
        return 2
    engine = MorphEngine(catalog)

    if args.list_morphs:
        engine.display_catalog()
        return 0

    if args.plan:
        try:
            plan = engine.plan(args.plan)
        except ValueError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 2
        if args.json:
            print(json.dumps(plan.to_dict(), ensure_ascii=False, indent=2))
        else:
            engine.display_plan(plan)
        return 0

    try:
        parent1 = parse_genotype(args.parent1)
        parent2 = parse_genotype(args.parent2)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    result = engine.calculate(parent1, parent2)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        engine.display_results(parent1, parent2, result)

    if not result.is_valid:
        return 1

    if args.chart:
        engine.save_chart(result, args.chart)

    return 0


if __name__ == "__main__":
    sys.exit(main())
