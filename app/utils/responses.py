from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def error(message, status=400, code=None, errors=None):
    payload = {
        "status": "error",
        "message": message,
        "code": code or status
    }
    if errors:
        payload["errors"] = errors
    return jsonify(payload), status


def validation_error_response(errors):
    """Render pydantic errors as {field, message} pairs."""
    details = [
        {
            "field": ".".join(str(p) for p in e.get("loc", ())) or None,
            "message": e.get("msg", "invalid value"),
        }
        for e in errors
    ]
    return error("Validation failed", status=400, errors=details)


def result_response(result, render=None, status=200, message="success"):
    """Turn a data-access Result into the JSON envelope."""
    if not result.ok:
        return error(result.error, status=result.status)
    value = render(result.value) if render else result.value
    return ok(value, message=message, status=status)
