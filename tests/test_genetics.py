import pytest

from morph_engine.genetics import AlleleMapper, GeneticsEngine, round_percent
from morph_engine.models import (
    InheritanceType, RecessiveStatus, DominantStatus, CodominantStatus
)


def distribution(outcomes):
    return {o.status: o.probability for o in outcomes}


@pytest.mark.parametrize("inheritance, status, expected", [
    (InheritanceType.RECESSIVE, 'wild', [(1.0, ('A', 'A'))]),
    (InheritanceType.RECESSIVE, 'heterozygous', [(1.0, ('A', 'a'))]),
    (InheritanceType.RECESSIVE, 'homozygous', [(1.0, ('a', 'a'))]),
    (InheritanceType.RECESSIVE, 'possible_het', [(0.5, ('A', 'A')), (0.5, ('A', 'a'))]),
    (InheritanceType.DOMINANT, 'wild', [(1.0, ('d', 'd'))]),
    (InheritanceType.DOMINANT, 'heterozygous', [(1.0, ('D', 'd'))]),
    (InheritanceType.DOMINANT, 'homozygous', [(1.0, ('D', 'D'))]),
    (InheritanceType.CODOMINANT, 'wild', [(1.0, ('s', 's'))]),
    (InheritanceType.CODOMINANT, 'heterozygous', [(1.0, ('S', 's'))]),
    (InheritanceType.CODOMINANT, 'homozygous', [(1.0, ('S', 's'))]),
    (InheritanceType.CODOMINANT, 'super', [(1.0, ('S', 'S'))]),
])
def test_allele_table(inheritance, status, expected):
    assert AlleleMapper.get_alleles(inheritance, status) == expected


def test_unrecognized_status_falls_back_to_wild():
    assert AlleleMapper.get_alleles(InheritanceType.DOMINANT, 'super') == [(1.0, ('d', 'd'))]
    assert AlleleMapper.get_alleles(InheritanceType.CODOMINANT, 'possible_het') == [(1.0, ('s', 's'))]
    assert AlleleMapper.get_alleles(InheritanceType.RECESSIVE, 'bogus') == [(1.0, ('A', 'A'))]


def test_status_enum_of_other_category_is_parsed_by_value():
    assert InheritanceType.RECESSIVE.parse_status(DominantStatus.HOMOZYGOUS) == RecessiveStatus.HOMOZYGOUS
    assert InheritanceType.DOMINANT.parse_status(CodominantStatus.SUPER) == DominantStatus.WILD
    assert InheritanceType.CODOMINANT.is_valid_status('super')
    assert not InheritanceType.RECESSIVE.is_valid_status('super')


def test_normalize_genotype_is_order_independent():
    assert GeneticsEngine.normalize_genotype('a', 'A') == 'Aa'
    assert GeneticsEngine.normalize_genotype('A', 'a') == 'Aa'
    assert GeneticsEngine.normalize_genotype('s', 'S') == 'Ss'


def test_punnett_square_het_cross():
    square = GeneticsEngine.punnett_square([(1.0, ('A', 'a'))], [(1.0, ('A', 'a'))])
    assert square == {'AA': 0.25, 'Aa': 0.5, 'aa': 0.25}


def test_recessive_homozygous_cross(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['eclipse'], 'homozygous', 'homozygous')
    assert len(outcomes) == 1
    assert outcomes[0].genotype == 'aa'
    assert outcomes[0].phenotype == 'Eclipse'
    assert outcomes[0].status == RecessiveStatus.HOMOZYGOUS
    assert outcomes[0].probability == 100.0


def test_recessive_het_cross(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['eclipse'], 'heterozygous', 'heterozygous')
    assert distribution(outcomes) == {
        RecessiveStatus.WILD: 25.0,
        RecessiveStatus.HETEROZYGOUS: 50.0,
        RecessiveStatus.HOMOZYGOUS: 25.0,
    }
    het = next(o for o in outcomes if o.status == RecessiveStatus.HETEROZYGOUS)
    assert het.phenotype == 'het Eclipse'


def test_recessive_possible_het_cross(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['eclipse'], 'possible_het', 'heterozygous')
    assert distribution(outcomes) == {
        RecessiveStatus.HOMOZYGOUS: 12.5,
        RecessiveStatus.HETEROZYGOUS: 50.0,
        RecessiveStatus.WILD: 37.5,
    }


def test_possible_het_both_parents(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['eclipse'], 'possible_het', 'possible_het')
    dist = distribution(outcomes)
    assert dist[RecessiveStatus.HOMOZYGOUS] == 6.25
    assert dist[RecessiveStatus.HETEROZYGOUS] == 37.5
    assert dist[RecessiveStatus.WILD] == 56.25


def test_dominant_het_by_wild(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['enigma'], 'heterozygous', 'wild')
    assert distribution(outcomes) == {
        DominantStatus.HETEROZYGOUS: 50.0,
        DominantStatus.WILD: 50.0,
    }
    visible = next(o for o in outcomes if o.status == DominantStatus.HETEROZYGOUS)
    assert visible.phenotype == 'Enigma'


def test_dominant_homozygous_label(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['enigma'], 'homozygous', 'homozygous')
    assert [(o.phenotype, o.probability) for o in outcomes] == [('Enigma (Homozygous)', 100.0)]


def test_codominant_visual_cross_collapses_to_homozygous(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['mack_snow'], 'homozygous', 'homozygous')
    assert distribution(outcomes) == {
        CodominantStatus.SUPER: 25.0,
        CodominantStatus.HOMOZYGOUS: 50.0,
        CodominantStatus.WILD: 25.0,
    }
    labels = {o.status: o.phenotype for o in outcomes}
    assert labels[CodominantStatus.SUPER] == 'Super Snow'
    assert labels[CodominantStatus.HOMOZYGOUS] == 'Mack Snow'
    assert labels[CodominantStatus.WILD] == 'Normal'


def test_codominant_default_super_label(catalog):
    outcomes = GeneticsEngine.solve_locus(catalog['gem_snow'], 'super', 'super')
    assert outcomes[0].phenotype == 'Super GEM Snow'


def test_locus_probabilities_sum_to_100(catalog):
    for p1 in ('wild', 'heterozygous', 'homozygous', 'possible_het'):
        for p2 in ('wild', 'heterozygous', 'homozygous', 'possible_het'):
            outcomes = GeneticsEngine.solve_locus(catalog['eclipse'], p1, p2)
            assert sum(o.probability for o in outcomes) == pytest.approx(100.0)
            assert all(o.probability > 0 for o in outcomes)


def test_round_percent_rounds_half_up():
    assert round_percent(0.125) == 0.13
    assert round_percent(6.25) == 6.25


def test_unhashable_status_parses_to_wild():
    assert not InheritanceType.RECESSIVE.is_valid_status(['heterozygous'])
    assert InheritanceType.RECESSIVE.parse_status(['heterozygous']) == RecessiveStatus.WILD
