"""
Flask JSON integration.

Install the provider on an application and BitPermission values can be
returned from views directly:

    from flask import Flask, jsonify
    from bitpermission.json_provider import init_app

    app = Flask(__name__)
    init_app(app)

    @app.get("/me/permissions")
    def my_permissions():
        return jsonify(service.get_bit_permissions(current_permissions()))
"""

from typing import Any, List, Union

from flask import Flask
from flask.json.provider import DefaultJSONProvider

from .bit_permission import BitPermission
from .exceptions import MalformedWireFormatError
from .wire_handler import from_wire_list, to_wire


class BitPermissionJSONProvider(DefaultJSONProvider):
    """
    Flask JSON provider that writes BitPermission values in wire form.
    """

    @staticmethod
    def default(o: Any) -> Any:
        if isinstance(o, BitPermission):
            return to_wire(o)
        return DefaultJSONProvider.default(o)

    def load_bit_permissions(self, data: Union[str, bytes, List[Any]]) -> List[BitPermission]:
        """
        Parse BitPermission values from a JSON document or already decoded list.

        Args:
            data: JSON text/bytes, or the list returned by request.get_json()

        Returns:
            List[BitPermission]: The parsed values.

        Raises:
            MalformedWireFormatError: If any element is malformed.
        """
        if isinstance(data, (str, bytes)):
            try:
                data = self.loads(data)
            except ValueError as e:
                raise MalformedWireFormatError(f"Invalid JSON: {e}") from e
        return from_wire_list(data)


def init_app(app: Flask) -> BitPermissionJSONProvider:
    """Install BitPermissionJSONProvider as the application's JSON provider."""
    provider = BitPermissionJSONProvider(app)
    app.json = provider
    return provider
