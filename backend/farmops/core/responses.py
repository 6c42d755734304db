from typing import Any


def success_response(data: Any = None, message: str = "Success") -> dict:
    return {"success": True, "message": message, "data": data}


def error_body(message: str = "Internal Server Error", code: str = "INTERNAL_ERROR") -> dict:
    return {"success": False, "message": message, "code": code}
