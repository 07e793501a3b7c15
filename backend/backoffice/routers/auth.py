"""
认证路由
"""
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from backoffice.database import get_db
from backoffice.models.schemas import LoginRequest, LoginResponse, UserInfo
from backoffice.security.auth import CurrentUser, create_access_token, get_current_user
from backoffice.services.user_service import UserService

router = APIRouter(tags=["认证"])


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """用户登录，签发 12 小时令牌"""
    user = UserService(db).authenticate(data.username, data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    app_settings = request.app.state.settings
    token = create_access_token(
        user.id, user.username,
        secret_key=app_settings.SECRET_KEY,
        algorithm=app_settings.ALGORITHM,
        expires_delta=timedelta(hours=app_settings.ACCESS_TOKEN_EXPIRE_HOURS),
    )
    return LoginResponse(token=token, user=UserInfo(id=user.id, username=user.username))


@router.get("/me", response_model=UserInfo)
def get_current_user_info(current_user: CurrentUser = Depends(get_current_user)):
    """获取当前用户信息"""
    return UserInfo(id=current_user.id, username=current_user.username)
