from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from touchbar_core.keys import (  # noqa: E402
    SLOT_COUNT,
    clean_label,
    key_sequence,
    pop_labels_sequence,
    set_label_sequence,
)


class KeyTests(unittest.TestCase):
    def test_twenty_slots(self):
        self.assertEqual(SLOT_COUNT, 20)
        self.assertEqual(key_sequence(1), "^[OP")
        self.assertEqual(key_sequence(20), "^[[19:2~")

    def test_slot_out_of_range(self):
        with self.assertRaises(ValueError):
            key_sequence(0)
        with self.assertRaises(ValueError):
            key_sequence(21)

    def test_set_label_sequence(self):
        self.assertEqual(set_label_sequence(3, "🙌"), "\033]1337;SetKeyLabel=F3=🙌\a")

    def test_pop_labels_sequence(self):
        self.assertEqual(pop_labels_sequence(), "\033]1337;PopKeyLabels\a")

    def test_clean_label_strips_control_characters(self):
        self.assertEqual(clean_label("a\ab\033c\nd"), "abc d")


if __name__ == "__main__":
    unittest.main()
