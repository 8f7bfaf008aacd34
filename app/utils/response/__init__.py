from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def send_response(data: Any = None, message: str = "", success: bool = True, status_code: int = 200) -> JSONResponse:
    """Wrap a payload in the `{success, message, data}` envelope."""
    body = {
        "success": success,
        "message": message,
        "data": {} if data is None else data,
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
