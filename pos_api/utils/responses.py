"""JSON response envelope shared by every endpoint."""
from flask import jsonify


def send_response(code, message, data=None, error=None):
    """Build the `{code, message, data, error}` envelope with a matching status."""
    response = jsonify({
        'code': code,
        'message': message,
        'data': data,
        'error': error
    })
    response.status_code = code
    return response


def success(data=None):
    return send_response(200, 'Success', data, None)
