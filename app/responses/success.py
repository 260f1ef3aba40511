from .base import build_response


def success_response(message: str = None, data=None):
    return build_response(200, message=message, data=data)


def data_response(data=None, status_code: int = 200):
    return build_response(status_code, data=data)


def created_response(data=None):
    return build_response(201, data=data)


def list_response(items: list):
    return build_response(200, count=len(items), data=items)


def token_response(token: str, user, status_code: int = 200):
    return build_response(status_code, token=token, user=user)
