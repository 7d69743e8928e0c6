from typing import Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from mindconnect.core.errors import format_validation_errors
from mindconnect.core.schemas import Questionnaire

router = APIRouter(tags=['intake'])


@router.post('/validate-questionnaire')
def validate_questionnaire(payload: dict[str, Any] = Body(...)):
    try:
        questionnaire = Questionnaire.model_validate(payload)
    except ValidationError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={'valid': False, 'errors': format_validation_errors(exc.errors())},
        )

    return {'valid': True, 'data': questionnaire.model_dump(by_alias=True)}
