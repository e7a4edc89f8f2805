import base64

import pytest

import api


@pytest.fixture
def client():
    api.app.config['TESTING'] = True
    return api.app.test_client()


def test_index(client):
    rv = client.get('/')
    assert rv.status_code == 200
    assert '/calculate' in rv.get_json()['endpoints']


def test_list_morphs_with_filters(client):
    rv = client.get('/morphs', query_string={'type': 'codominant'})
    assert rv.status_code == 200
    morphs = rv.get_json()['morphs']
    assert morphs
    assert all(m['type'] == 'codominant' for m in morphs)

    rv = client.get('/morphs', query_string={'q': 'albino'})
    ids = [m['id'] for m in rv.get_json()['morphs']]
    assert ids == ['tremper_albino', 'bell_albino', 'rainwater_albino']


def test_list_morphs_rejects_unknown_type(client):
    rv = client.get('/morphs', query_string={'type': 'polygenic'})
    assert rv.status_code == 400
    assert rv.get_json()['success'] is False


def test_get_morph(client):
    rv = client.get('/morphs/mack_snow')
    assert rv.status_code == 200
    assert rv.get_json()['super_form'] == 'Super Snow'

    assert client.get('/morphs/unknown').status_code == 404


def test_calculate(client):
    rv = client.post('/calculate', json={
        'parent1': {'tremper_albino': 'heterozygous'},
        'parent2': {'tremper_albino': 'heterozygous'},
    })
    assert rv.status_code == 200
    body = rv.get_json()
    assert body['success'] is True
    assert [(r['display_name'], r['probability']) for r in body['results']] == [
        ('Normal het Tremper Albino', 50.0),
        ('Normal', 25.0),
        ('Tremper Albino', 25.0),
    ]
    assert 'chart' not in body


def test_calculate_albino_conflict(client):
    rv = client.post('/calculate', json={
        'parent1': {},
        'parent2': {'tremper_albino': 'homozygous', 'rainwater_albino': 'heterozygous'},
    })
    assert rv.status_code == 400
    body = rv.get_json()
    assert body['success'] is False
    assert 'Rainwater Albino' in body['error']


def test_calculate_rejects_malformed_body(client):
    assert client.post('/calculate', data='not json').status_code == 400
    rv = client.post('/calculate', json={'parent1': ['eclipse']})
    assert rv.status_code == 400
    rv = client.post('/calculate', json={'parent1': {'eclipse': 2}})
    assert rv.status_code == 400


def test_calculate_limits_loci(client):
    parent1 = {f'locus_{i}': 'heterozygous' for i in range(api.MAX_LOCI + 1)}
    rv = client.post('/calculate', json={'parent1': parent1, 'parent2': {}})
    assert rv.status_code == 400
    assert str(api.MAX_LOCI) in rv.get_json()['error']


def test_calculate_with_chart(client):
    rv = client.post('/calculate', json={
        'parent1': {'mack_snow': 'homozygous'},
        'parent2': {'mack_snow': 'homozygous'},
        'include_chart': True,
    })
    assert rv.status_code == 200
    chart = rv.get_json()['chart']
    prefix = 'data:image/png;base64,'
    assert chart.startswith(prefix)
    assert base64.b64decode(chart[len(prefix):]).startswith(b'\x89PNG')


def test_validate(client):
    rv = client.post('/validate', json={
        'parent1': {'mystery': 'homozygous'},
        'parent2': {'bell_albino': 'homozygous', 'tremper_albino': 'heterozygous'},
    })
    assert rv.status_code == 200
    validation = rv.get_json()['validation']
    assert validation['is_valid'] is False
    assert validation['error_count'] == 1
    assert validation['warning_count'] == 1
    kinds = [issue['kind'] for issue in validation['issues']]
    assert kinds == ['albino_conflict', 'unknown_locus']
    assert validation['issues'][0]['parent'] == 2


def test_list_combos(client):
    rv = client.get('/combos')
    assert rv.status_code == 200
    ids = [c['id'] for c in rv.get_json()['combos']]
    assert 'raptor' in ids and 'dreamsicle' in ids


def test_plan_combo(client):
    rv = client.post('/plan', json={'combo': 'raptor'})
    assert rv.status_code == 200
    body = rv.get_json()
    assert [p['probability'] for p in body['plan']['patterns']] == [100.0, 6.25, 25.0]
    assert body['calculator'] == {
        'parent1': {'tremper_albino': 'homozygous', 'eclipse': 'homozygous'},
        'parent2': {},
    }


def test_plan_components(client):
    rv = client.post('/plan', json={'components': ['enigma', 'eclipse']})
    assert rv.status_code == 200
    plan = rv.get_json()['plan']
    assert plan['components'] == ['eclipse', 'enigma']
    assert plan['notes']


@pytest.mark.parametrize("body, status", [
    ({'combo': 'unknown_combo'}, 404),
    ({'components': 'eclipse'}, 400),
    ({'components': ['mystery']}, 400),
    ({}, 400),
])
def test_plan_rejects_bad_input(client, body, status):
    rv = client.post('/plan', json=body)
    assert rv.status_code == status
    assert rv.get_json()['success'] is False
