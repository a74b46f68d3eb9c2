from flask import request


def get_request_data():
    """Returns the request body from a JSON or URL-encoded form submission."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()
