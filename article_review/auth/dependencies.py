from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from article_review.auth import jwt_handler
from article_review.auth.jwt_handler import Claims
from article_review.core.errors import TokenError
from article_review.models.user import Role

security = HTTPBearer()


def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Claims:
    try:
        return jwt_handler.decode_access_token(credentials.credentials)
    except TokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def require_role(role: Role):
    def dependency(claims: Claims = Depends(get_current_claims)) -> Claims:
        if claims.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only {role.value.lower()}s can access this resource.",
            )
        return claims

    return dependency


require_student = require_role(Role.STUDENT)
require_teacher = require_role(Role.TEACHER)
