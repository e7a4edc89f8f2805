"""
Morph Engine - Flask REST API
웹 서비스용 API 엔드포인트

실행: flask --app api run --debug
또는: python api.py
"""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from morph_engine import (
    MorphCalculator, OutcomeVisualizer, BreedingPlanner,
    InheritanceType, default_catalog, validate_genotypes
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)  # CORS 활성화

# 한 요청에서 허용하는 최대 유전자좌 수 (possible_het 조합 폭증 방지)
MAX_LOCI = 16

# 전역 객체 (읽기 전용)
catalog = default_catalog()
calculator = MorphCalculator(catalog)
visualizer = OutcomeVisualizer()
planner = BreedingPlanner(calculator)


def _error(message, status=400):
    return jsonify({'success': False, 'error': message}), status


def _read_parents(data):
    """요청 본문에서 두 부모 유전자형 추출 (잘못된 입력이면 ValueError)"""
    parent1 = data.get('parent1') or {}
    parent2 = data.get('parent2') or {}

    for label, genotype in (('parent1', parent1), ('parent2', parent2)):
        if not isinstance(genotype, dict):
            raise ValueError(f"{label}는 {{morph_id: status}} 형태의 객체여야 합니다")
        for locus, status in genotype.items():
            if not isinstance(status, str):
                raise ValueError(f"{label}.{locus}의 상태는 문자열이어야 합니다")

    loci = set(parent1) | set(parent2)
    if len(loci) > MAX_LOCI:
        raise ValueError(f"유전자좌는 최대 {MAX_LOCI}개까지 계산할 수 있습니다 (요청: {len(loci)}개)")

    return parent1, parent2


@app.route('/')
def index():
    """API 정보"""
    return jsonify({
        'name': 'Morph Engine API',
        'version': '1.0.0',
        'description': '레오파드 게코 모프 교배 계산 API',
        'endpoints': {
            '/morphs': 'GET - 모프 카탈로그 (type, q 필터)',
            '/morphs/<id>': 'GET - 모프 정보',
            '/calculate': 'POST - 교배 결과 계산',
            '/validate': 'POST - 부모 유전자형 검증',
            '/combos': 'GET - 콤보 모프 목록',
            '/plan': 'POST - 콤보 모프 역산 (부모 페어링 제안)'
        }
    })


@app.route('/morphs', methods=['GET'])
def list_morphs():
    """모프 카탈로그 목록"""
    morph_type = request.args.get('type')
    query = request.args.get('q', '')

    morphs = catalog.search(query)
    if morph_type:
        try:
            inheritance = InheritanceType(morph_type)
        except ValueError:
            return _error(f"알 수 없는 유전 방식: {morph_type}")
        morphs = [m for m in morphs if m.inheritance == inheritance]

    return jsonify({'morphs': [m.to_dict() for m in morphs]})


@app.route('/morphs/<morph_id>', methods=['GET'])
def get_morph(morph_id):
    """모프 정보"""
    morph = catalog.get(morph_id)
    if morph is None:
        return _error(f"모프를 찾을 수 없습니다: {morph_id}", 404)
    return jsonify(morph.to_dict())


@app.route('/calculate', methods=['POST'])
def calculate():
    """
    교배 결과 계산

    Request Body:
    {
        "parent1": {"tremper_albino": "homozygous"},   // 부모1 유전자형
        "parent2": {"tremper_albino": "heterozygous"}, // 부모2 유전자형
        "include_chart": false                         // 확률 차트 포함 (선택)
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('JSON 객체 본문이 필요합니다')

    try:
        parent1, parent2 = _read_parents(data)
    except ValueError as e:
        return _error(str(e))

    result = calculator.calculate(parent1, parent2)
    if not result.is_valid:
        return _error(result.error)

    body = result.to_dict()
    if data.get('include_chart'):
        chart = visualizer.draw(result.outcomes, title="교배 결과")
        body['chart'] = f"data:image/png;base64,{chart}"

    return jsonify(body)


@app.route('/validate', methods=['POST'])
def validate():
    """
    부모 유전자형 검증

    Request Body:
    {
        "parent1": {...},
        "parent2": {...}
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('JSON 객체 본문이 필요합니다')

    try:
        parent1, parent2 = _read_parents(data)
    except ValueError as e:
        return _error(str(e))

    report = validate_genotypes(catalog, parent1, parent2, log=logger)
    return jsonify({'success': True, 'validation': report.to_dict()})


@app.route('/combos', methods=['GET'])
def list_combos():
    """콤보 모프 목록"""
    return jsonify({'combos': [c.to_dict() for c in planner.combos.values()]})


@app.route('/plan', methods=['POST'])
def plan():
    """
    콤보 모프 역산

    Request Body:
    {
        "combo": "raptor"                           // 등록된 콤보 ID
    }
    또는
    {
        "components": ["tremper_albino", "eclipse"] // 구성 모프 ID 목록
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error('JSON 객체 본문이 필요합니다')

    combo_id = data.get('combo')
    components = data.get('components')

    if combo_id:
        if combo_id not in planner.combos:
            return _error(f"콤보를 찾을 수 없습니다: {combo_id}", 404)
        result = planner.plan_combo(combo_id)
        parent1, parent2 = planner.combo_genotype(combo_id)
        return jsonify({
            'success': True,
            'plan': result.to_dict(),
            'calculator': {'parent1': parent1, 'parent2': parent2}
        })

    if not isinstance(components, list) or not all(isinstance(c, str) for c in components):
        return _error('combo 또는 components(모프 ID 목록)가 필요합니다')
    if len(components) > MAX_LOCI:
        return _error(f"구성 모프는 최대 {MAX_LOCI}개까지 계산할 수 있습니다")

    try:
        result = planner.plan(components)
    except ValueError as e:
        return _error(str(e))
    return jsonify({'success': True, 'plan': result.to_dict()})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("=" * 50)
    print("Morph Engine API Server")
    print("=" * 50)
    print("Server starting at http://localhost:5000")
    print()
    app.run(debug=True, host='0.0.0.0', port=5000)
