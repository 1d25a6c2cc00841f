import numpy as np
import pytest

from specimen.errors import InvalidGenomeError, InvalidInputError
from specimen.genome import (
    Species,
    detect_species,
    generate_genome,
    is_hybrid_genome,
    is_pure_alien_genome,
    is_pure_cat_genome,
    is_valid_genome,
    require_valid_genome,
    validate_genome,
)


class TestSpecies:
    def test_parse(self):
        assert Species.parse('cat') is Species.CAT
        assert Species.parse('ALIEN') is Species.ALIEN
        assert Species.parse('cat-alien') is Species.HYBRID
        assert Species.parse('hybrid') is Species.HYBRID
        assert Species.parse(Species.CAT) is Species.CAT

    def test_parse_unknown(self):
        with pytest.raises(InvalidInputError):
            Species.parse('dog')

    def test_alphabets(self):
        assert set(Species.CAT.symbols) == set('ATCG')
        assert set(Species.ALIEN.symbols) == set('WXYZ')
        assert set(Species.HYBRID.symbols) == set('ATCGWXYZ')


class TestValidation:
    def test_valid_genome(self):
        report = validate_genome('A' * 1000)
        assert report.valid
        assert report.errors == []

    def test_wrong_length(self):
        report = validate_genome('A' * 999)
        assert not report.valid
        assert report.errors == ["Genome length must be 1000, got 999"]

    def test_invalid_symbols_are_summarised(self):
        report = validate_genome('Q' * 1000)
        assert len(report.errors) == 11
        assert report.errors[0] == "Invalid symbol 'Q' at position 0"
        assert report.errors[-1] == "... and 990 more invalid symbol(s)"

    def test_species_alphabet(self):
        assert is_valid_genome('W' * 1000)
        assert not is_valid_genome('W' * 1000, Species.CAT)
        assert is_valid_genome('W' * 1000, Species.ALIEN)

    def test_non_string(self):
        assert not validate_genome(None).valid

    def test_require_valid_genome_raises(self):
        with pytest.raises(InvalidGenomeError) as excinfo:
            require_valid_genome('A' * 10)
        assert excinfo.value.errors
        assert isinstance(excinfo.value, ValueError)
        assert "Genome length must be 1000" in str(excinfo.value)


class TestDetection:
    def test_pure_and_hybrid(self):
        assert is_pure_cat_genome('ATCG')
        assert is_pure_alien_genome('WXYZ')
        assert is_hybrid_genome('AW')
        assert not is_hybrid_genome('ATCG')

    def test_detect_species(self):
        assert detect_species('ATCG') is Species.CAT
        assert detect_species('WXYZ') is Species.ALIEN
        assert detect_species('ATW') is Species.HYBRID
        assert detect_species('') is Species.CAT


class TestGeneration:
    @pytest.mark.parametrize('species', list(Species))
    def test_generated_genome_matches_species(self, species):
        genome = generate_genome(species, np.random.default_rng(7))
        assert len(genome) == 1000
        assert set(genome) <= set(species.symbols)
        assert detect_species(genome) is species

    def test_same_seed_same_genome(self):
        a = generate_genome('alien', np.random.default_rng(99))
        b = generate_genome('alien', np.random.default_rng(99))
        c = generate_genome('alien', np.random.default_rng(100))
        assert a == b
        assert a != c

    def test_default_rng(self):
        assert is_valid_genome(generate_genome())
