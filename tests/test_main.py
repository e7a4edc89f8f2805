import json

import pytest

from main import main, parse_genotype


def test_parse_genotype():
    assert parse_genotype(['eclipse=homozygous', ' enigma ']) == {
        'eclipse': 'homozygous',
        'enigma': 'heterozygous',
    }
    assert parse_genotype(None) == {}
    with pytest.raises(ValueError):
        parse_genotype(['=homozygous'])


def test_main_prints_results(capsys):
    code = main(['-1', 'mack_snow=homozygous', '-2', 'mack_snow=homozygous'])
    assert code == 0
    out = capsys.readouterr().out
    assert 'Super Snow' in out
    assert '50.00%' in out


def test_main_json_output(capsys):
    code = main(['--parent1', 'eclipse=homozygous', '--parent2', 'eclipse=homozygous', '--json'])
    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body['results'][0]['display_name'] == 'Eclipse'


def test_main_albino_conflict_exit_code(capsys):
    code = main(['-1', 'tremper_albino=homozygous', 'bell_albino=homozygous'])
    assert code == 1
    assert 'Bell Albino' in capsys.readouterr().out


def test_main_custom_catalog_and_chart(tmp_path, capsys):
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text(json.dumps([
        {'id': 'x', 'name': 'Xanthic', 'type': 'dominant'}
    ]), encoding='utf-8')
    chart_path = tmp_path / "chart.png"

    code = main(['-c', str(catalog_path), '-1', 'x=heterozygous', '--chart', str(chart_path)])
    assert code == 0
    assert chart_path.exists()
    assert 'Xanthic' in capsys.readouterr().out


def test_main_list_morphs(capsys):
    assert main(['--list-morphs']) == 0
    out = capsys.readouterr().out
    assert 'tremper_albino' in out
    assert 'Super Snow' in out


def test_main_missing_catalog_file(tmp_path, capsys):
    code = main(['-c', str(tmp_path / "missing.json"), '-1', 'x=heterozygous'])
    assert code == 2
    err = capsys.readouterr().err
    assert '❌' in err
    assert 'Traceback' not in err


@pytest.mark.parametrize("content", [
    "{not json",
    json.dumps({'morphs': 'eclipse'}),
    json.dumps([['eclipse']]),
    json.dumps([{'id': 'x', 'name': 'X', 'type': 'polygenic'}]),
])
def test_main_malformed_catalog_file(tmp_path, capsys, content):
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text(content, encoding='utf-8')
    assert main(['-c', str(catalog_path), '--list-morphs']) == 2
    assert '❌' in capsys.readouterr().err


def test_main_plan_combo(capsys):
    assert main(['--plan', 'raptor']) == 0
    out = capsys.readouterr().out
    assert 'RAPTOR' in out
    assert '6.25%' in out


def test_main_plan_components_json(capsys):
    assert main(['--plan', 'tremper_albino', 'bell_albino', '--json']) == 0
    body = json.loads(capsys.readouterr().out)
    assert all(p['error'] for p in body['patterns'])
    assert body['notes']


def test_main_plan_unknown_morph(capsys):
    assert main(['--plan', 'mystery']) == 2
    assert '❌' in capsys.readouterr().err
