# app/auth/auth.py
"""
Authentication and authorization utilities.

Bearer tokens are HS256 JWTs carrying the caller's identity and tenancy:
``user_id``, ``email``, ``roles``, ``franchise_id``, ``store_id``, plus
``iat``/``exp``.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET
from app.core.errors import EmployeeNotFound, ForbiddenError, NotFoundError, ValidationFailed
from app.database.database import Store, User, UserRole

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Token scheme
security = HTTPBearer(auto_error=False)


class TokenClaims(BaseModel):
    """Decoded bearer token payload."""

    user_id: int
    email: str
    roles: list[str] = Field(default_factory=list)
    franchise_id: int = 0
    store_id: int = 0

    @property
    def is_admin(self) -> bool:
        return UserRole.ADMIN.value in self.roles


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)


def build_claims(user: User) -> dict:
    """Token payload for a user, without the time claims."""
    return {
        "user_id": user.id,
        "email": user.email,
        "roles": list(user.roles or []),
        "franchise_id": user.franchise_id or 0,
        "store_id": user.store_id or 0,
    }


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token. Expires after ACCESS_TOKEN_EXPIRE_MINUTES by default."""
    to_encode = data.copy()
    issued_at = datetime.now(timezone.utc)
    if expires_delta:
        expire = issued_at + expires_delta
    else:
        expire = issued_at + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"iat": issued_at, "exp": expire})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Expired or tampered tokens yield None."""
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user with email and password."""
    user = get_user_by_email(db, email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenClaims:
    """Claims of the bearer token. Raises 401 if missing, invalid or expired."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    try:
        claims = TokenClaims(**payload)
    except ValueError as e:
        raise _unauthorized("Malformed token claims") from e

    # Picked up by RequestLoggingMiddleware
    request.state.claims = claims
    return claims


def require_admin(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
    """Current claims, verified to carry the admin role."""
    if not claims.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return claims


def require_franchise_access(claims: TokenClaims = Depends(require_admin)) -> TokenClaims:
    """Admin claims scoped to a franchise."""
    if not claims.franchise_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Franchise access required")
    return claims


def ensure_employee_in_franchise(db: Session, employee_id: int, claims: TokenClaims) -> User:
    """
    Load an employee and check it belongs to the caller's franchise.

    Raises:
        EmployeeNotFound: if no such user exists
        ForbiddenError: if the employee belongs to another franchise
    """
    employee = db.get(User, employee_id)
    if employee is None:
        raise EmployeeNotFound(f"employee {employee_id} not found")
    if employee.franchise_id != claims.franchise_id:
        raise ForbiddenError("employee belongs to another franchise")
    return employee


def ensure_store_in_franchise(db: Session, store_id: int, claims: TokenClaims) -> Store:
    """
    Load a store the caller may write to.

    A token bound to a store only accepts that store; a franchise-wide token
    accepts any store of its franchise.
    """
    if claims.store_id and claims.store_id != store_id:
        raise ValidationFailed(f"store {store_id} does not match the token store {claims.store_id}")

    store = db.get(Store, store_id)
    if store is None:
        raise NotFoundError(f"store {store_id} not found")
    if store.franchise_id != claims.franchise_id:
        raise ForbiddenError("store belongs to another franchise")
    return store


def ensure_shift_store_in_franchise(db: Session, store_id: int, claims: TokenClaims) -> Store:
    """Check the store owning a shift template belongs to the caller's franchise."""
    store = db.get(Store, store_id)
    if store is None or store.franchise_id != claims.franchise_id:
        raise ForbiddenError("shift belongs to another franchise")
    return store
