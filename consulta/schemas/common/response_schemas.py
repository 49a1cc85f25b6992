# Standard library imports
from typing import Any

# Third-party imports
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Error details may be a message, a list of messages or a field -> message map
DetailsType = str | list[str] | dict[str, Any]


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorDetails(BaseModel):
    code: str
    message: str
    details: DetailsType | None = None


class BaseResponse(BaseModel):
    ok: bool
    error: ErrorDetails | None = None

    def model_dump(self, **kwargs: Any) -> dict[str, Any]:
        data = super().model_dump(**kwargs)

        if data.get("error") is None:
            data.pop("error", None)
        elif data["error"].get("details") is None:
            data["error"].pop("details", None)

        return data

    @classmethod
    def failure(cls, code: str, message: str, details: DetailsType | None = None) -> "BaseResponse":
        return cls(ok=False, error=ErrorDetails(code=code, message=message, details=details))


class OperationResult(CamelModel):
    ok: bool = True
    id: str
