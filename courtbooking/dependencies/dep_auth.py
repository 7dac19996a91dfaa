from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from courtbooking.models.mod_auth import AuthUser, UserRole, TokenData
from courtbooking.configuration.config import Config

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

def verify_token(token: str) -> TokenData:
    """
    Verify the JWT token and extract its claims.
    Expiry is enforced by jwt.decode. Raises HTTPException if token is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            Config.JWT_SECRET_KEY,
            algorithms=[Config.JWT_ALGORITHM]
        )
        roles = payload.get("roles") or [UserRole.USER.value]
        return TokenData(
            id=payload.get("sub"),
            name=payload.get("name"),
            email=payload.get("email"),
            role=roles[0],
            exp=payload.get("exp")
        )
    except (JWTError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

def get_current_user(token: str = Depends(oauth2_scheme)) -> AuthUser:
    """
    Get the current authenticated user from the token.
    This is the main dependency to be used in protected endpoints.
    """
    token_data = verify_token(token)
    return AuthUser(
        id=token_data.id,
        name=token_data.name,
        email=token_data.email,
        role=token_data.role
    )

def get_current_admin(current_user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """Dependency for endpoints that require admin access"""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to perform this action"
        )
    return current_user
