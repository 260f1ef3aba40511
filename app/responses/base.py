from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import Optional, Any
from pydantic import BaseModel


def serialize(data: Any) -> Any:
    # Pydantic models go out with their camelCase aliases
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [serialize(item) for item in data]
    return jsonable_encoder(data)


def build_response(
    status_code: int,
    success: bool = True,
    message: str = None,
    data: Any = None,
    error: Optional[str] = None,
    **extra: Any,
) -> Response:
    if status_code == 204:
        return Response(status_code=204)

    response = {"success": success}

    if message is not None:
        response["message"] = message

    for key, value in extra.items():
        if value is not None:
            response[key] = serialize(value)

    if data is not None:
        response["data"] = serialize(data)

    if error is not None:
        response["error"] = error

    return JSONResponse(
        content=response,
        status_code=status_code,
        media_type="application/json",
    )
