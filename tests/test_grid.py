from unittest import TestCase

from qrgrid.capacity import Ecc, num_raw_data_modules
from qrgrid.grid import ModuleGrid, alignment_pattern_positions, format_bits, version_bits


class AlignmentTests(TestCase):
    def test_positions(self):
        self.assertEqual(alignment_pattern_positions(1), [])
        self.assertEqual(alignment_pattern_positions(2), [6, 18])
        self.assertEqual(alignment_pattern_positions(7), [6, 22, 38])
        self.assertEqual(alignment_pattern_positions(32), [6, 34, 60, 86, 112, 138])
        self.assertEqual(alignment_pattern_positions(40), [6, 30, 58, 86, 114, 142, 170])


class BchTests(TestCase):
    def test_format_bits(self):
        self.assertEqual(format_bits(Ecc.LOW, 0), 0b111011111000100)
        self.assertEqual(format_bits(Ecc.MEDIUM, 0), 0b101010000010010)
        self.assertEqual(format_bits(Ecc.HIGH, 7), 0b000100000111011)

    def test_version_bits(self):
        self.assertEqual(version_bits(7), 0x07C94)
        self.assertEqual(version_bits(40), 0x28C69)


class FunctionPatternTests(TestCase):
    def test_data_modules_match_raw_capacity(self):
        for version in range(1, 41):
            grid = ModuleGrid(version, Ecc.LOW)
            self.assertEqual(grid.data_module_count(), num_raw_data_modules(version), version)

    def test_finder_and_timing(self):
        grid = ModuleGrid(1, Ecc.LOW)
        size = grid.size
        self.assertEqual(size, 21)
        for cx, cy in ((3, 3), (size - 4, 3), (3, size - 4)):
            self.assertTrue(grid.modules[cy][cx])
            self.assertFalse(grid.modules[cy][cx - 2])
            self.assertTrue(grid.modules[cy - 3][cx])
        # Separator
        self.assertFalse(grid.modules[7][0])
        self.assertFalse(grid.modules[0][7])
        self.assertEqual([grid.modules[6][x] for x in range(8, 13)], [True, False, True, False, True])
        self.assertEqual([grid.modules[y][6] for y in range(8, 13)], [True, False, True, False, True])
        self.assertTrue(grid.modules[size - 8][8])

    def test_alignment_pattern_drawn(self):
        grid = ModuleGrid(2, Ecc.LOW)
        self.assertTrue(grid.modules[18][18])
        self.assertFalse(grid.modules[18][17])
        self.assertTrue(grid.modules[16][16])
        self.assertTrue(grid.is_function[20][20])

    def test_version_blocks_mirrored(self):
        grid = ModuleGrid(7, Ecc.LOW)
        size = grid.size
        for i in range(18):
            a = size - 11 + i % 3
            b = i // 3
            self.assertEqual(grid.modules[b][a], grid.modules[a][b])
            self.assertTrue(grid.is_function[b][a])
        self.assertFalse(ModuleGrid(6, Ecc.LOW).is_function[0][6 * 4 + 17 - 11])


class PlacementTests(TestCase):
    def test_draw_codewords_fills_every_codeword_bit(self):
        grid = ModuleGrid(1, Ecc.LOW)
        placed = grid.draw_codewords([0xFF] * (num_raw_data_modules(1) // 8))
        self.assertEqual(placed, 208)
        # Bottom right corner is the first bit placed
        self.assertTrue(grid.modules[20][20])
        self.assertTrue(grid.modules[20][19])

    def test_first_bits_go_upward(self):
        grid = ModuleGrid(1, Ecc.LOW)
        grid.draw_codewords([0b10010000] + [0] * 25)
        self.assertEqual(
            [grid.modules[20][20], grid.modules[20][19], grid.modules[19][20], grid.modules[19][19]],
            [True, False, False, True],
        )

    def test_wrong_codeword_count(self):
        grid = ModuleGrid(1, Ecc.LOW)
        with self.assertRaises(AssertionError):
            grid.draw_codewords([0] * 27)

    def test_mask_is_an_involution_on_data_modules(self):
        grid = ModuleGrid(3, Ecc.LOW)
        grid.draw_codewords(list(range(num_raw_data_modules(3) // 8)))
        before = [row[:] for row in grid.modules]
        for mask in range(8):
            grid.apply_mask(mask)
            self.assertNotEqual(grid.modules, before)
            for y in range(grid.size):
                for x in range(grid.size):
                    if grid.is_function[y][x]:
                        self.assertEqual(grid.modules[y][x], before[y][x])
            grid.apply_mask(mask)
            self.assertEqual(grid.modules, before)

    def test_mask_zero_pattern(self):
        grid = ModuleGrid(1, Ecc.LOW)
        grid.draw_codewords([0] * 26)
        grid.apply_mask(0)
        self.assertTrue(grid.modules[20][20])
        self.assertFalse(grid.modules[20][19])

    def test_invalid_mask(self):
        grid = ModuleGrid(1, Ecc.LOW)
        with self.assertRaises(ValueError):
            grid.apply_mask(8)
