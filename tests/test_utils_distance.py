import unittest

import numpy as np

from hopfield_errors import ShapeError
from utils_distance import closest_memory, hamming, hamming_similarity


class TestHamming(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(0)
        self.a = np.where(rng.standard_normal(32) > 0, 1, -1)
        self.b = np.where(rng.standard_normal(32) > 0, 1, -1)

    def test_identity(self):
        self.assertEqual(hamming(self.a, self.a), 0)
        self.assertEqual(hamming(self.a, self.a.copy()), 0)

    def test_symmetric(self):
        self.assertEqual(hamming(self.a, self.b), hamming(self.b, self.a))

    def test_zero_iff_equal(self):
        c = self.a.copy()
        c[5] = -c[5]
        self.assertEqual(hamming(self.a, c), 1)
        self.assertFalse(np.array_equal(self.a, c))
        self.assertEqual(hamming(self.a, self.b) == 0, np.array_equal(self.a, self.b))

    def test_counts_differences(self):
        self.assertEqual(hamming([1, -1, 1, -1], [1, 1, -1, -1]), 2)
        self.assertIsInstance(hamming([1], [-1]), int)

    def test_mixed_dtypes(self):
        self.assertEqual(hamming(np.array([1.0, -1.0]), np.array([1, -1], dtype=np.int32)), 0)

    def test_length_mismatch(self):
        with self.assertRaises(ShapeError):
            hamming([1, -1, 1], [1, -1])


class TestSimilarity(unittest.TestCase):
    def test_matches_per_prototype(self):
        prototypes = np.array([
            [1, -1, 1, -1],
            [1, 1, 1, 1],
            [-1, 1, -1, 1],
        ])
        sim = hamming_similarity(np.array([1, -1, 1, 1]), prototypes)
        np.testing.assert_array_equal(sim, [3.0, 3.0, 1.0])

    def test_similarity_shape_mismatch(self):
        with self.assertRaises(ShapeError):
            hamming_similarity([1, -1], np.ones((2, 3)))

    def test_closest_memory(self):
        memories = np.array([
            [1, 1, 1, 1, 1, 1],
            [-1, -1, -1, 1, 1, 1],
        ])
        self.assertEqual(closest_memory([-1, -1, 1, 1, 1, 1], memories), (1, 1))
        self.assertEqual(closest_memory([1, 1, 1, 1, 1, 1], memories), (0, 0))

    def test_closest_memory_tie_picks_first(self):
        memories = np.array([[1, 1], [-1, -1]])
        self.assertEqual(closest_memory([1, -1], memories), (0, 1))

    def test_closest_memory_shape_mismatch(self):
        with self.assertRaises(ShapeError):
            closest_memory([1, -1, 1], np.ones((2, 4)))


if __name__ == "__main__":
    unittest.main()
