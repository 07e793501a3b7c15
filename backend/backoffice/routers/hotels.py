"""
酒店管理路由
"""
from typing import Optional, Union
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from backoffice.database import get_db
from backoffice.models.entities import HotelStatus
from backoffice.models.schemas import (
    HotelCreate, HotelUpdate, HotelResponse, HotelListResponse, HotelDetailResponse,
    RoomTypeCreate, RoomTypeResponse, RoomTypeListResponse, MessageResponse
)
from backoffice.routers.room_types import to_room_type_response
from backoffice.security.auth import CurrentUser, get_current_user
from backoffice.services.hotel_service import HotelService
from backoffice.services.rate_service import RateService
from backoffice.services.room_type_service import RoomTypeService

router = APIRouter(prefix="/hotels", tags=["酒店管理"])


def _hotel_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Hotel not found")


@router.get("", response_model=HotelListResponse)
def list_hotels(
    hotel_status: Optional[HotelStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """获取酒店列表（最新在前）"""
    hotels = HotelService(db).get_hotels(hotel_status)
    return HotelListResponse(hotels=[HotelResponse.model_validate(h) for h in hotels])


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
def create_hotel(
    data: HotelCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """创建酒店"""
    hotel = HotelService(db).create_hotel(data)
    return HotelResponse.model_validate(hotel)


@router.get("/{hotel_id}", response_model=HotelDetailResponse)
def get_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """获取酒店详情及其房型（含生效房价）"""
    hotel = HotelService(db).get_hotel(hotel_id)
    if not hotel:
        raise _hotel_not_found()

    rate_service = RateService(db)
    room_types = RoomTypeService(db).get_room_types(hotel_id)
    return HotelDetailResponse(
        hotel=HotelResponse.model_validate(hotel),
        room_types=[to_room_type_response(rate_service, rt) for rt in room_types],
    )


@router.put("/{hotel_id}", response_model=Union[HotelResponse, MessageResponse])
def update_hotel(
    hotel_id: int,
    data: HotelUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """部分更新酒店；空更新返回 No changes"""
    service = HotelService(db)
    if not service.get_hotel(hotel_id):
        raise _hotel_not_found()

    try:
        hotel = service.update_hotel(hotel_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except LookupError:
        raise _hotel_not_found()
    if hotel is None:
        return MessageResponse(message="No changes")
    return HotelResponse.model_validate(hotel)


@router.delete("/{hotel_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_hotel(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """删除酒店（级联删除房型与调价）"""
    if not HotelService(db).delete_hotel(hotel_id):
        raise _hotel_not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============== 酒店下的房型 ==============

@router.get("/{hotel_id}/room-types", response_model=RoomTypeListResponse)
def list_hotel_room_types(
    hotel_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """获取酒店房型列表（含生效房价）"""
    if not HotelService(db).get_hotel(hotel_id):
        raise _hotel_not_found()

    rate_service = RateService(db)
    room_types = RoomTypeService(db).get_room_types(hotel_id)
    return RoomTypeListResponse(
        room_types=[to_room_type_response(rate_service, rt) for rt in room_types]
    )


@router.post("/{hotel_id}/room-types", response_model=RoomTypeResponse,
             status_code=status.HTTP_201_CREATED)
def create_room_type(
    hotel_id: int,
    data: RoomTypeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """在酒店下创建房型"""
    if not HotelService(db).get_hotel(hotel_id):
        raise _hotel_not_found()

    try:
        room_type = RoomTypeService(db).create_room_type(hotel_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return to_room_type_response(RateService(db), room_type)
