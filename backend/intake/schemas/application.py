from pydantic import BaseModel


class ApplicationCreated(BaseModel):
    message: str
    id: int


class ErrorResponse(BaseModel):
    error: str
