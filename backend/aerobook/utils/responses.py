from flask import jsonify


def success_response(data=None, message="OK", status_code=200):
    payload = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    response = jsonify(payload)
    response.status_code = status_code
    return response


def deleted_response(message: str, data=None):
    """Respuesta de borrado exitoso (200 con mensaje, el front lo muestra)."""
    return success_response(data=data, message=message, status_code=200)
