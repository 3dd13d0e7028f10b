"""Shared fakes for upstream `requests` responses."""

from unittest.mock import Mock

JPEG_BYTES = bytes([0xFF, 0xD8, 0xFF, 0xE0, 0x00, 0x10, 0x4A, 0x46, 0x49, 0x46])


def make_upstream_response(status_code=200, content=b"", json_data=None, json_error=False):
    """Build a stand-in for `requests.Response` as seen by the client."""
    response = Mock()
    response.status_code = status_code
    response.content = content
    if json_error:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = json_data
    return response
