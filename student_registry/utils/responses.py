from typing import Any

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class ResponseBuilder:
    """Builder class for creating the API's JSON responses"""

    @staticmethod
    def success(data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
        """Create a success response carrying `data` as the body"""
        return JSONResponse(status_code=status_code, content=jsonable_encoder(data))

    @staticmethod
    def no_content() -> Response:
        """Create an empty 204 response"""
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @staticmethod
    def error(
        message: str = "An error occurred",
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ) -> JSONResponse:
        """Create an error response; every error body is {"message": str}"""
        return JSONResponse(status_code=status_code, content={"message": message})
