"""
Unit tests for the Modular value type.

Compares Modular add/sub/mul/neg against Python big-int reference.
Covers edge cases: width boundary (2Q overflows the narrow type),
degenerate modulus Q = 1, construction, immutability.
"""

import copy
import pickle
import random
import sys
import os
import unittest

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from modring.modular import Modular, modular_type, from_value
from modring.reference import boundary_moduli
from modring.widths import InvalidModulusError, ZeroModulusError


class TestConcreteScenarios(unittest.TestCase):
    """Small hand-checked examples."""

    def test_add(self):
        Z = Modular[13]
        x, y = Z(5), Z(9)
        self.assertEqual(x + x, Z(10))
        self.assertEqual(x + y, Z(1))

    def test_add_zero(self):
        Z = Modular[27]
        x, y = Z(5), Z(0)
        self.assertEqual(x + y, x)
        self.assertEqual(y + x, x)

    def test_sub_and_neg(self):
        Z = Modular[31]
        x, y, z = Z(5), Z(6), Z(1)
        self.assertEqual(x - y, Z(30))
        self.assertEqual(x - y, -z)

    def test_mul(self):
        Z = Modular[37]
        self.assertEqual(Z(13) * Z(5), Z(28))

    def test_named_methods(self):
        Z = Modular[13]
        x, y = Z(5), Z(9)
        self.assertEqual(x.add(y), x + y)
        self.assertEqual(x.sub(y), x - y)
        self.assertEqual(x.mul(y), x * y)
        self.assertEqual(x.neg(), -x)


class TestConstruction(unittest.TestCase):

    def test_reduces_input(self):
        self.assertEqual(Modular[13](40).value, 1)
        self.assertEqual(from_value(40, 13).value, 1)

    def test_round_trip(self):
        rng = random.Random(42)
        for q in [2, 13, 8380417, (1 << 32) - 1]:
            for _ in range(100):
                x = rng.randint(0, 1 << 40)
                self.assertEqual(from_value(x, q).value, x % q)

    def test_idempotent(self):
        Z = Modular[37]
        for x in [0, 1, 36, 37, 1000]:
            a = Z(x)
            self.assertEqual(Z(a.value), a)

    def test_value_is_python_int(self):
        a = Modular[13](5)
        self.assertIs(type(a.value), int)
        self.assertEqual(int(a), 5)

    def test_negative_input_reduces_to_representative(self):
        self.assertEqual(Modular[13](-1).value, 12)

    def test_numpy_integer_input(self):
        self.assertEqual(Modular[13](np.uint64(27)).value, 1)

    def test_rejects_non_integer(self):
        with self.assertRaises(TypeError):
            Modular[13](2.5)

    def test_zero_modulus(self):
        with self.assertRaises(ZeroModulusError):
            from_value(5, 0)
        with self.assertRaises(ZeroDivisionError):
            Modular[0]

    def test_negative_modulus(self):
        with self.assertRaises(InvalidModulusError):
            Modular[-7]

    def test_modulus_too_wide(self):
        with self.assertRaises(InvalidModulusError):
            modular_type(256, bits=8)

    def test_unparametrized(self):
        with self.assertRaises(TypeError):
            Modular(5)

    def test_type_cached(self):
        self.assertIs(Modular[13], Modular[13])
        self.assertIs(Modular[13], modular_type(13))
        self.assertIsNot(Modular[13, 8], Modular[13, 16])

    def test_storage_dtype(self):
        self.assertIsInstance(Modular[13, 8](5)._value, np.uint8)
        self.assertIsInstance(Modular[13, 64](5)._value, np.uint64)


class TestIdentities(unittest.TestCase):

    def setUp(self):
        self.rng = random.Random(42)

    def test_zero_one(self):
        Z = Modular[13]
        self.assertEqual(Z.zero().value, 0)
        self.assertEqual(Z.one().value, 1)
        self.assertTrue(Z.zero().is_zero())
        self.assertFalse(Z.one().is_zero())

    def test_identity_laws(self):
        for q in [2, 13, 8380417]:
            Z = Modular[q]
            for _ in range(100):
                a = Z(self.rng.randrange(q))
                self.assertEqual(a + Z.zero(), a)
                self.assertEqual(a * Z.one(), a)
                self.assertEqual(a + (-a), Z.zero())

    def test_neg_zero(self):
        Z = Modular[13]
        self.assertEqual(-Z(0), Z(0))
        self.assertEqual((-Z(0)).value, 0)


class TestRingAxioms(unittest.TestCase):
    """Randomised associativity, commutativity and distributivity."""

    def setUp(self):
        self.rng = random.Random(123)
        self.moduli = [2, 31, 65521, 8380417, 4294967291]

    def _triples(self, q, n=100):
        for _ in range(n):
            yield tuple(self.rng.randrange(q) for _ in range(3))

    def test_commutative(self):
        for q in self.moduli:
            Z = Modular[q]
            for a, b, _ in self._triples(q):
                self.assertEqual(Z(a) + Z(b), Z(b) + Z(a))
                self.assertEqual(Z(a) * Z(b), Z(b) * Z(a))

    def test_associative(self):
        for q in self.moduli:
            Z = Modular[q]
            for a, b, c in self._triples(q):
                a, b, c = Z(a), Z(b), Z(c)
                self.assertEqual((a + b) + c, a + (b + c))
                self.assertEqual((a * b) * c, a * (b * c))

    def test_distributive(self):
        for q in self.moduli:
            Z = Modular[q]
            for a, b, c in self._triples(q):
                a, b, c = Z(a), Z(b), Z(c)
                self.assertEqual(a * (b + c), a * b + a * c)

    def test_matches_reference(self):
        for q in self.moduli:
            Z = Modular[q]
            for a, b, _ in self._triples(q):
                self.assertEqual((Z(a) + Z(b)).value, (a + b) % q)
                self.assertEqual((Z(a) - Z(b)).value, (a - b) % q)
                self.assertEqual((Z(a) * Z(b)).value, (a * b) % q)


class TestWidthBoundary(unittest.TestCase):
    """Moduli where 2Q overflows the narrow width must not wrap."""

    def test_add_near_width_max(self):
        for bits in [8, 16, 32, 64]:
            for q in boundary_moduli(bits):
                Z = Modular[q, bits]
                self.assertTrue(Z.plan.widen_add)
                a, b = Z(q - 1), Z(q - 1)
                self.assertEqual((a + b).value, (2 * q - 2) % q)
                self.assertEqual((a + b).value, q - 2)

    def test_random_near_width_max(self):
        rng = random.Random(7)
        for bits in [8, 16, 32, 64]:
            for q in boundary_moduli(bits):
                Z = Modular[q, bits]
                for _ in range(200):
                    a = rng.randrange(q // 2, q)
                    b = rng.randrange(q // 2, q)
                    self.assertEqual((Z(a) + Z(b)).value, (a + b) % q)
                    self.assertEqual((Z(a) - Z(b)).value, (a - b) % q)
                    self.assertEqual((Z(a) * Z(b)).value, (a * b) % q)

    def test_cheap_path_at_limit(self):
        # 2Q == 2^8 - 2 still fits uint8
        Z = Modular[127, 8]
        self.assertFalse(Z.plan.widen_add)
        self.assertEqual((Z(126) + Z(126)).value, 125)

    def test_mul_large_operands(self):
        q = 4294967291
        Z = Modular[q, 32]
        self.assertEqual((Z(q - 1) * Z(q - 1)).value, 1)


class TestDegenerateModulus(unittest.TestCase):
    """Q = 1: every value collapses to 0."""

    def test_all_zero(self):
        Z = Modular[1]
        for x in [0, 1, 2, 12345]:
            self.assertEqual(Z(x).value, 0)

    def test_operations(self):
        Z = Modular[1]
        a, b = Z(5), Z(9)
        for result in [a + b, a - b, a * b, -a]:
            self.assertEqual(result.value, 0)

    def test_one_is_zero(self):
        Z = Modular[1]
        self.assertEqual(Z.one(), Z.zero())


class TestValueSemantics(unittest.TestCase):

    def test_immutable(self):
        a = Modular[13](5)
        with self.assertRaises(AttributeError):
            a._value = 3
        with self.assertRaises(AttributeError):
            a.foo = 1

    def test_augmented_assignment_rebinds(self):
        Z = Modular[13]
        a = Z(5)
        b = a
        a += Z(9)
        a *= Z(2)
        a -= Z(1)
        self.assertEqual(a, Z(1))
        self.assertEqual(b, Z(5))

    def test_equality_requires_same_modulus(self):
        self.assertNotEqual(Modular[13](5), Modular[17](5))
        self.assertNotEqual(Modular[13](5), 5)

    def test_mixed_moduli_rejected(self):
        with self.assertRaises(TypeError):
            Modular[13](5) + Modular[17](5)
        with self.assertRaises(TypeError):
            Modular[13](5).add(Modular[17](5))

    def test_int_coercion(self):
        Z = Modular[13]
        self.assertEqual(Z(5) + 9, Z(1))
        self.assertEqual(9 + Z(5), Z(1))
        self.assertEqual(1 - Z(2), Z(12))
        self.assertEqual(3 * Z(5), Z(2))

    def test_hash(self):
        Z = Modular[13]
        self.assertEqual(hash(Z(5)), hash(Z(18)))
        self.assertEqual(len({Z(5), Z(18), Z(6)}), 2)

    def test_bool(self):
        self.assertFalse(Modular[13](13))
        self.assertTrue(Modular[13](1))

    def test_repr(self):
        self.assertEqual(repr(Modular[13](5)), "Modular[13](5)")
        self.assertEqual(str(Modular[13](5)), "5 (mod 13)")

    def test_pickle_and_copy(self):
        a = Modular[4294967291](123456789)
        self.assertEqual(pickle.loads(pickle.dumps(a)), a)
        self.assertEqual(copy.copy(a), a)
        self.assertEqual(copy.deepcopy(a), a)

    def test_coords(self):
        Z = Modular[13]
        self.assertEqual(Z.rank, 1)
        self.assertEqual(Z(5).coords(), (5,))
        self.assertEqual(Z.from_coords([18]), Z(5))
        with self.assertRaises(ValueError):
            Z.from_coords([1, 2])


class TestPowerAndInverse(unittest.TestCase):

    def test_pow(self):
        Z = Modular[37]
        rng = random.Random(5)
        for _ in range(50):
            a = rng.randrange(37)
            e = rng.randint(0, 100)
            self.assertEqual((Z(a) ** e).value, pow(a, e, 37))

    def test_inverse(self):
        Z = Modular[37]
        for a in range(1, 37):
            self.assertEqual(Z(a) * Z(a).inverse(), Z.one())
        self.assertEqual(Z(5) ** -1, Z(5).inverse())

    def test_no_inverse(self):
        with self.assertRaises(ValueError):
            Modular[12](4).inverse()
        with self.assertRaises(ValueError):
            Modular[13](0).inverse()


if __name__ == "__main__":
    unittest.main()
