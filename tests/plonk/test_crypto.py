"""
Tests for PLONK cryptographic modules: Generators, KZG, Transcript.
"""

import pytest

from nizk.plonk.field import FR, G1, G2, ec_mul, ec_add, ec_pairing
from nizk.plonk.gens import Generators, domain_size
from nizk.plonk.kzg import commit, commit_opening
from nizk.plonk.polynomial import Polynomial
from nizk.plonk.transcript import Transcript


@pytest.fixture(scope="module")
def gens():
    return Generators.new(4, 4, 1)


# ─────────────────────────────────────────────────────────────────────
# Generators
# ─────────────────────────────────────────────────────────────────────

class TestGenerators:
    def test_domain_size(self):
        assert domain_size(4, 1) == 8
        assert domain_size(0, 0) == 1
        assert domain_size(3, 1) == 4

    def test_dimensions(self, gens):
        assert gens.dimensions == (4, 4, 1)
        assert gens.n == 8
        assert gens.max_degree == 13
        assert len(gens.g1_powers) == 14
        assert len(gens.g2_powers) == 2

    def test_deterministic(self, gens):
        again = Generators.new(4, 4, 1)
        assert again.g1_powers == gens.g1_powers
        assert again.g2_powers == gens.g2_powers

    def test_depends_on_num_vars(self, gens):
        other = Generators.new(4, 5, 1)
        assert other.n == gens.n
        assert other.g1_powers[1] != gens.g1_powers[1]

    def test_powers_consistent(self, gens):
        """e([τ]₁, G2) == e(G1, [τ]₂)"""
        assert gens.g1_powers[0] == G1
        assert ec_pairing(G2, gens.g1_powers[1]) == ec_pairing(gens.g2_powers[1], G1)


# ─────────────────────────────────────────────────────────────────────
# KZG
# ─────────────────────────────────────────────────────────────────────

class TestKZG:
    def test_commit_constant(self, gens):
        assert commit(Polynomial([5]), gens) == ec_mul(G1, 5)

    def test_commit_zero(self, gens):
        assert commit(Polynomial.zero(), gens) is None

    def test_linearity(self, gens):
        a = Polynomial([1, 2, 3])
        b = Polynomial([4, 0, 6, 7])
        assert commit(a + b, gens) == ec_add(commit(a, gens), commit(b, gens))

    def test_degree_overflow(self, gens):
        poly = Polynomial([0] * (gens.max_degree + 1) + [1])
        with pytest.raises(ValueError):
            commit(poly, gens)

    def test_opening_verifies(self, gens):
        """e(π, [τ - z]₂) == e(C - y·G1, G2)"""
        p = Polynomial([3, 1, 4, 1, 5])
        z = FR(9)
        y = p.evaluate(z)
        proof = commit_opening(p - Polynomial([y]), z, gens)
        lhs = ec_pairing(ec_add(gens.g2_powers[1], ec_mul(G2, FR(0) - z)), proof)
        rhs = ec_pairing(G2, ec_add(commit(p, gens), ec_mul(G1, FR(0) - y)))
        assert lhs == rhs

    def test_opening_wrong_value(self, gens):
        p = Polynomial([3, 1, 4])
        with pytest.raises(ValueError):
            commit_opening(p - Polynomial([FR(1)]), FR(9), gens)


# ─────────────────────────────────────────────────────────────────────
# Transcript
# ─────────────────────────────────────────────────────────────────────

class TestTranscript:
    def test_same_sequence_same_challenge(self):
        t1, t2 = Transcript(b"label"), Transcript(b"label")
        for t in (t1, t2):
            t.append_scalar(b"x", FR(7))
            t.append_point(b"p", G1)
        assert t1.challenge_scalar(b"c") == t2.challenge_scalar(b"c")

    def test_label_changes_challenge(self):
        assert (Transcript(b"a").challenge_scalar(b"c")
                != Transcript(b"b").challenge_scalar(b"c"))

    def test_successive_challenges_differ(self):
        t = Transcript(b"label")
        assert t.challenge_scalar(b"c") != t.challenge_scalar(b"c")

    def test_point_at_infinity(self):
        t1, t2 = Transcript(b"l"), Transcript(b"l")
        t1.append_point(b"p", None)
        t2.append_point(b"p", G1)
        assert t1.challenge_scalar(b"c") != t2.challenge_scalar(b"c")

    def test_label_must_be_bytes(self):
        with pytest.raises(TypeError):
            Transcript("text")
