from flask import jsonify
from flask_jwt_extended import JWTManager

jwt = JWTManager()


def _unauthorized(message: str):
    return jsonify({"success": False, "message": message}), 401


@jwt.unauthorized_loader
def _missing_token(reason):
    return _unauthorized("No autorizado - Token no proporcionado")


@jwt.invalid_token_loader
def _invalid_token(reason):
    return _unauthorized("No autorizado - Token inválido")


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return _unauthorized("No autorizado - Token expirado")


@jwt.revoked_token_loader
def _revoked_token(jwt_header, jwt_payload):
    return _unauthorized("No autorizado - Token revocado")
