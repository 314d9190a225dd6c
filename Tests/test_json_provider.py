"""
Tests for the Flask JSON provider.
"""

import unittest

from flask import Flask, jsonify, request

from bitpermission import BitPermission, MalformedWireFormatError
from bitpermission.json_provider import BitPermissionJSONProvider, init_app


class TestBitPermissionJSONProvider(unittest.TestCase):
    """Test BitPermission values travelling through a Flask application."""

    def setUp(self):
        self.app = Flask(__name__)
        self.provider = init_app(self.app)
        self.stored = [BitPermission("TestPermissions", 5, "p"), BitPermission("Reports", 3, "5")]

        @self.app.get("/permissions")
        def list_permissions():
            return jsonify({"user": "alice", "permissions": self.stored})

        @self.app.post("/permissions")
        def store_permissions():
            self.received = self.app.json.load_bit_permissions(request.get_json())
            return jsonify(self.received), 201

        self.client = self.app.test_client()

    def test_init_app_installs_provider(self):
        self.assertIsInstance(self.app.json, BitPermissionJSONProvider)
        self.assertIs(self.app.json, self.provider)

    def test_response_uses_wire_format(self):
        response = self.client.get("/permissions")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.get_json(),
            {"user": "alice", "permissions": [{"TestPermissions@5": "p"}, {"Reports@3": "5"}]},
        )

    def test_request_round_trip(self):
        response = self.client.post("/permissions", json=[{"TestPermissions@5": "p"}])

        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.received, [BitPermission("TestPermissions", 5, "p")])
        self.assertEqual(response.get_json(), [{"TestPermissions@5": "p"}])

    def test_dumps_and_load_bit_permissions(self):
        text = self.provider.dumps(self.stored)
        self.assertEqual(self.provider.load_bit_permissions(text), self.stored)
        self.assertEqual(self.provider.load_bit_permissions(text.encode()), self.stored)

    def test_load_bit_permissions_rejects_malformed_input(self):
        for data in ["not json", '[{"TestPermissions":"p"}]', [{"@5": "p"}]]:
            with self.subTest(data=data):
                with self.assertRaises(MalformedWireFormatError):
                    self.provider.load_bit_permissions(data)

    def test_unsupported_objects_still_fail(self):
        with self.assertRaises(TypeError):
            self.provider.dumps({"value": object()})


if __name__ == "__main__":
    unittest.main(verbosity=2)
