"""
Preprocessor tests: 행 배치, 순열 σ, 셀렉터 다항식
"""
import pytest

from nizk.plonk.field import FR
from nizk.plonk.gens import Generators
from nizk.plonk.instance import Instance
from nizk.plonk.preprocessor import K1, K2, build_sigma, layout_rows, position_to_value, preprocess


@pytest.fixture(scope="module")
def x3():
    instance, witness, public_inputs = Instance.x3_plus_x_plus_5()
    gens = Generators.new(4, 4, 1)
    return instance, preprocess(instance, gens)


class TestLayout:
    def test_public_rows_first(self):
        instance, _, _ = Instance.x3_plus_x_plus_5()
        selectors, wire_vars = layout_rows(instance)
        assert len(selectors) == 5
        assert selectors[0] == (FR(1), FR(0), FR(0), FR(0), FR(0))
        assert wire_vars[0] == (4, 4, 4)
        assert wire_vars[1:] == [g.wires for g in instance.gates]


class TestSigma:
    def test_identity_without_sharing(self):
        sigma = build_sigma([(0, 1, 2)], 1)
        assert sigma == [0, 1, 2]

    def test_is_permutation(self, x3):
        _, pp = x3
        assert sorted(pp.sigma) == list(range(3 * pp.n))

    def test_shared_variable_cycle(self):
        # 행 0: a=v0, 행 1: b=v0 → 위치 0 ↔ n+1
        n = 2
        sigma = build_sigma([(0, 1, 2), (3, 0, 4)], n)
        assert sigma[0] == n + 1
        assert sigma[n + 1] == 0

    def test_padding_rows_fixed(self, x3):
        _, pp = x3
        for row in range(5, pp.n):
            for column in range(3):
                pos = column * pp.n + row
                assert pp.sigma[pos] == pos

    def test_position_to_value(self, x3):
        _, pp = x3
        n, domain = pp.n, pp.domain
        assert position_to_value(1, n, domain) == domain[1]
        assert position_to_value(n + 2, n, domain) == K1 * domain[2]
        assert position_to_value(2 * n + 3, n, domain) == K2 * domain[3]


class TestPreprocess:
    def test_domain(self, x3):
        _, pp = x3
        assert pp.n == 8
        assert pp.omega ** 8 == FR(1)
        assert pp.num_public_inputs == 1
        assert pp.wire_vars[5:] == [None, None, None]

    def test_selector_polys_interpolate_rows(self, x3):
        instance, pp = x3
        # 행 4 = 게이트 3 (add+5)
        assert pp.q_c_poly.evaluate(pp.domain[4]) == FR(5)
        assert pp.q_l_poly.evaluate(pp.domain[0]) == FR(1)
        assert pp.q_m_poly.evaluate(pp.domain[6]) == FR(0)

    def test_commitments_present(self, x3):
        _, pp = x3
        for name in ("q_l", "q_r", "q_o", "q_m", "q_c", "s_sigma1", "s_sigma2", "s_sigma3"):
            assert getattr(pp, f"{name}_comm") is not None

    def test_too_many_rows(self):
        instance, _, _ = Instance.x3_plus_x_plus_5()
        small = Generators.new(1, 4, 1)
        with pytest.raises(ValueError):
            preprocess(instance, small)

    def test_empty_instance(self):
        instance = Instance([], num_vars=0, num_inputs=0)
        pp = preprocess(instance, Generators.new(0, 0, 0))
        assert pp.n == 1
        assert pp.wire_vars == [None]
