import pytest

from morph_engine import MorphCatalog, MorphCalculator


TEST_MORPHS = [
    {'id': 'tremper_albino', 'name': 'Tremper Albino', 'type': 'recessive', 'albino_group': 'tremper'},
    {'id': 'bell_albino', 'name': 'Bell Albino', 'type': 'recessive', 'albino_group': 'bell'},
    {'id': 'eclipse', 'name': 'Eclipse', 'type': 'recessive'},
    {'id': 'blizzard', 'name': 'Blizzard', 'type': 'recessive',
     'health_warning': '⚠️ Test recessive warning'},
    {'id': 'enigma', 'name': 'Enigma', 'type': 'dominant',
     'health_warning': '⚠️ Enigma syndrome'},
    {'id': 'mack_snow', 'name': 'Mack Snow', 'type': 'codominant', 'super_form': 'Super Snow'},
    {'id': 'gem_snow', 'name': 'GEM Snow', 'type': 'codominant'},
]


@pytest.fixture
def catalog():
    return MorphCatalog.from_records(TEST_MORPHS)


@pytest.fixture
def calculator(catalog):
    return MorphCalculator(catalog)
