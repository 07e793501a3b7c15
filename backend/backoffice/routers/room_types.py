"""
房型管理路由
房型读取均附带 effective_rate 与 last_adjustment
"""
from datetime import datetime
from typing import Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from backoffice.database import get_db
from backoffice.models.entities import RoomType, utcnow
from backoffice.models.schemas import (
    RoomTypeUpdate, RoomTypeResponse, MessageResponse,
    AdjustmentCreate, AdjustmentResponse, AdjustmentListResponse,
    EffectiveRateResponse, as_utc_naive
)
from backoffice.security.auth import CurrentUser, get_current_user
from backoffice.services.rate_service import RateService
from backoffice.services.room_type_service import RoomTypeService

router = APIRouter(prefix="/room-types", tags=["房型管理"])


def to_room_type_response(rate_service: RateService, room_type: RoomType,
                          as_of: Optional[datetime] = None) -> RoomTypeResponse:
    """房型 + 生效房价"""
    return RoomTypeResponse.model_validate(
        rate_service.describe(room_type, as_of), from_attributes=True
    )


def _get_room_type_or_404(db: Session, room_type_id: int) -> RoomType:
    room_type = RoomTypeService(db).get_room_type(room_type_id)
    if not room_type:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room type not found")
    return room_type


@router.get("/{room_type_id}", response_model=RoomTypeResponse)
def get_room_type(
    room_type_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """获取房型详情"""
    room_type = _get_room_type_or_404(db, room_type_id)
    return to_room_type_response(RateService(db), room_type)


@router.put("/{room_type_id}", response_model=Union[RoomTypeResponse, MessageResponse])
def update_room_type(
    room_type_id: int,
    data: RoomTypeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """部分更新房型；空更新返回 No changes"""
    _get_room_type_or_404(db, room_type_id)

    try:
        room_type = RoomTypeService(db).update_room_type(room_type_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if room_type is None:
        return MessageResponse(message="No changes")
    return to_room_type_response(RateService(db), room_type)


@router.delete("/{room_type_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_room_type(
    room_type_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """删除房型（级联删除调价记录）"""
    if not RoomTypeService(db).delete_room_type(room_type_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room type not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============== 调价记录 ==============

@router.get("/{room_type_id}/adjustments", response_model=AdjustmentListResponse)
def list_adjustments(
    room_type_id: int,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """获取房型调价记录（最新生效在前）"""
    _get_room_type_or_404(db, room_type_id)
    adjustments = RateService(db).get_adjustments(room_type_id, limit)
    return AdjustmentListResponse(
        adjustments=[AdjustmentResponse.model_validate(a) for a in adjustments]
    )


@router.post("/{room_type_id}/adjustments", response_model=AdjustmentResponse,
             status_code=status.HTTP_201_CREATED)
def create_adjustment(
    room_type_id: int,
    data: AdjustmentCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """新增调价记录"""
    _get_room_type_or_404(db, room_type_id)

    try:
        adjustment = RateService(db).create_adjustment(room_type_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AdjustmentResponse.model_validate(adjustment)


@router.get("/{room_type_id}/effective-rate", response_model=EffectiveRateResponse)
def get_effective_rate(
    room_type_id: int,
    as_of: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """查询指定时刻的生效房价（默认当前时间）"""
    room_type = _get_room_type_or_404(db, room_type_id)
    as_of = utcnow() if as_of is None else as_utc_naive(as_of)

    result = RateService(db).effective_rate(room_type, as_of)
    return EffectiveRateResponse.model_validate({
        'room_type_id': room_type.id,
        'as_of': as_of,
        'base_rate': room_type.base_rate,
        'effective_rate': result.rate,
        'last_adjustment': result.applied_adjustment,
    }, from_attributes=True)
