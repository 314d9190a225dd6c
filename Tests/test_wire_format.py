"""
Tests for the domain@revision wire format.
"""

import json
import unittest

from bitmasks import SERIALIZED_SMALL_TEST_BIT_PERMISSION, SMALL_TEST_BITMASK

from bitpermission import BitPermission, MalformedWireFormatError, NullReferenceError
from bitpermission.wire_handler import dumps, from_wire, from_wire_list, loads, to_wire

SMALL_TEST_BIT_PERMISSION = BitPermission("SmallTestPermissions", 128, SMALL_TEST_BITMASK)


class TestWireFormat(unittest.TestCase):
    """Test strict (de)serialization of BitPermission values."""

    def test_to_wire(self):
        self.assertEqual(
            to_wire(SMALL_TEST_BIT_PERMISSION),
            {"SmallTestPermissions@128": "4000000000000g000040000201"},
        )
        self.assertEqual(json.dumps(to_wire(SMALL_TEST_BIT_PERMISSION), separators=(",", ":")),
                         SERIALIZED_SMALL_TEST_BIT_PERMISSION)

    def test_from_wire(self):
        self.assertEqual(from_wire(json.loads(SERIALIZED_SMALL_TEST_BIT_PERMISSION)), SMALL_TEST_BIT_PERMISSION)

    def test_to_wire_requires_all_fields(self):
        cases = [
            None,
            BitPermission(None, 128, SMALL_TEST_BITMASK),
            BitPermission("SmallTestPermissions", None, SMALL_TEST_BITMASK),
            BitPermission("SmallTestPermissions", 128, None),
        ]
        for bit_permission in cases:
            with self.subTest(bit_permission=bit_permission):
                with self.assertRaises(NullReferenceError):
                    to_wire(bit_permission)

    def test_from_wire_rejects_malformed_keys(self):
        cases = {
            "too many dividers": '{"SmallTestPermissions@128@2":"4000000000000g000040000201"}',
            "no dividers": '{"SmallTestPermissions":"4000000000000g000040000201"}',
            "empty revision": '{"SmallTestPermissions@":"4000000000000g000040000201"}',
            "empty domain": '{"@128":"4000000000000g000040000201"}',
            "empty domain and revision": '{"":"4000000000000g000040000201"}',
            "not numeric revision": '{"SmallTestPermissions@letter":"4000000000000g000040000201"}',
            "blank revision": '{"SmallTestPermissions@ ":"4000000000000g000040000201"}',
            "blank domain": '{" @1":"4000000000000g000040000201"}',
            "zero revision": '{"SmallTestPermissions@0":"4000000000000g000040000201"}',
            "negative revision": '{"SmallTestPermissions@-1":"4000000000000g000040000201"}',
            "non-string bitmask": '{"SmallTestPermissions@128":17}',
            "no keys": "{}",
            "two keys": '{"A@1":"1","B@1":"1"}',
            "not an object": '["SmallTestPermissions@128"]',
        }
        for legend, text in cases.items():
            with self.subTest(legend=legend):
                with self.assertRaises(MalformedWireFormatError):
                    from_wire(json.loads(text))

    def test_malformed_wire_format_is_a_value_error(self):
        with self.assertRaises(ValueError):
            from_wire({"SmallTestPermissions": "1"})

    def test_dumps_and_loads(self):
        bit_permissions = [SMALL_TEST_BIT_PERMISSION, BitPermission("TestPermissions", 5, "p")]

        text = dumps(bit_permissions)
        self.assertEqual(text, "[" + SERIALIZED_SMALL_TEST_BIT_PERMISSION + ',{"TestPermissions@5":"p"}]')
        self.assertEqual(loads(text), bit_permissions)

    def test_loads_rejects_malformed_documents(self):
        for text in ["not json", '{"TestPermissions@5":"p"}', '[{"TestPermissions":"p"}]', None]:
            with self.subTest(text=text):
                with self.assertRaises(MalformedWireFormatError):
                    loads(text)  # type: ignore[arg-type]

    def test_from_wire_list_rejects_non_list(self):
        with self.assertRaises(MalformedWireFormatError):
            from_wire_list({"TestPermissions@5": "p"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
