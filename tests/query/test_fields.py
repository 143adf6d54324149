"""
Tests for query/fields.py - result field masks.
"""

import unittest

from watchmanlite.query.fields import ALL_FIELDS, FIELD_ORDER, Field, fields_to_json, parse_fields

EXPECTED_ORDER = [
    "name", "exists", "cclock", "oclock",
    "ctime", "ctime_ms", "ctime_us", "ctime_ns", "ctime_f",
    "mtime", "mtime_ms", "mtime_us", "mtime_ns", "mtime_f",
    "size", "uid", "gid", "ino", "dev", "nlink", "new",
]


class TestFieldsToJson(unittest.TestCase):

    def test_empty_mask_is_empty_list(self):
        self.assertEqual(fields_to_json(0), [])
        self.assertEqual(fields_to_json(Field(0)), [])

    def test_full_mask_lists_all_fields_in_bit_order(self):
        self.assertEqual(fields_to_json(ALL_FIELDS), EXPECTED_ORDER)
        self.assertEqual(len(fields_to_json(ALL_FIELDS)), 21)

    def test_name_and_size(self):
        self.assertEqual(fields_to_json(Field.NAME | Field.SIZE), ["name", "size"])
        self.assertEqual(fields_to_json(Field.SIZE | Field.NAME), ["name", "size"])

    def test_plain_int_mask(self):
        self.assertEqual(fields_to_json(1 | (1 << 20)), ["name", "new"])

    def test_bits_above_new_are_ignored(self):
        self.assertEqual(fields_to_json(1 << 21 | int(Field.EXISTS)), ["exists"])

    def test_order_table_matches_bits(self):
        self.assertEqual([int(f) for f in FIELD_ORDER], [1 << i for i in range(21)])


class TestParseFields(unittest.TestCase):

    def test_parse_round_trips_names(self):
        mask = parse_fields(["size", "name", "mtime_ms"])
        self.assertEqual(fields_to_json(mask), ["name", "mtime_ms", "size"])

    def test_parse_is_case_insensitive(self):
        self.assertEqual(parse_fields(["NEW"]), Field.NEW)

    def test_unknown_field_raises(self):
        with self.assertRaises(ValueError) as context:
            parse_fields(["name", "colour"])
        self.assertIn("colour", str(context.exception))


if __name__ == "__main__":
    unittest.main()
