from datetime import datetime, timedelta

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.exceptions import AuthenticationError, NotFoundError
from app.vendor import service as vendor_service
from app.vendor.models import Vendor


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_vendor_token(vendor: Vendor) -> str:
    return create_access_token({"sub": str(vendor.id), "email": vendor.email})


def authenticate_vendor(db: Session, email: str, password: str):
    vendor = vendor_service.get_vendor_by_email(db, email)
    if not vendor or not verify_password(password, vendor.password):
        return None
    return vendor


def get_current_vendor(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Vendor:
    if not token:
        raise AuthenticationError("Not authenticated")

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        vendor_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    try:
        return vendor_service.get_vendor(db, vendor_id)
    except NotFoundError:
        raise AuthenticationError("Invalid or expired token")
