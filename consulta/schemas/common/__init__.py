# Local application imports
from consulta.schemas.common.response_schemas import BaseResponse, CamelModel, ErrorDetails, OperationResult

__all__ = ["BaseResponse", "CamelModel", "ErrorDetails", "OperationResult"]
