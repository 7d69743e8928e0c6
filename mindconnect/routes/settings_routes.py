from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from mindconnect.auth.dependencies import require_admin
from mindconnect.core.dependencies import get_store
from mindconnect.core.errors import storage_failure
from mindconnect.core.schemas import CamelModel
from mindconnect.storage import MemStorage

router = APIRouter(tags=['settings'])


class ZoomSettingsUpdate(CamelModel):
    api_key: str | None = None
    api_secret: str | None = None
    zoom_email: str | None = None


class ZoomSettingsResponse(CamelModel):
    id: int
    api_key: str | None = None
    api_secret: str | None = None
    zoom_email: str | None = None


@router.get('/zoom-settings')
def get_zoom_settings(
    store: MemStorage = Depends(get_store),
    _admin: dict | None = Depends(require_admin),
):
    try:
        settings = store.get_zoom_settings()
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch Zoom settings') from exc

    if settings is None:
        return {}
    return ZoomSettingsResponse.model_validate(settings).model_dump(by_alias=True)


@router.post('/zoom-settings', response_model=ZoomSettingsResponse)
def save_zoom_settings(
    data: ZoomSettingsUpdate,
    store: MemStorage = Depends(get_store),
    _admin: dict | None = Depends(require_admin),
):
    try:
        return store.update_zoom_settings(data.model_dump(exclude_unset=True))
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to update Zoom settings') from exc
