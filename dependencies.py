# dependencies.py
"""
Shared FastAPI dependencies: bearer-token auth and service result handling.
"""
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

from config import JWT_ALGORITHM, JWT_AUDIENCE, SUPABASE_JWT_SECRET
from schemas.common import ErrorKind, ServiceResult


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     try:
          payload = jwt.decode(
               token,
               SUPABASE_JWT_SECRET,
               algorithms=[JWT_ALGORITHM],
               audience=JWT_AUDIENCE,
          )
     except JWTError:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
     if not payload.get("sub"):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
     return payload


def get_landlord_id(token: dict = Depends(verify_token)) -> str:
     """The landlord a request acts for: the token subject."""
     return token["sub"]


_STATUS_BY_KIND = {
     ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
     ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
     ErrorKind.UPSTREAM: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def raise_for_result(result: ServiceResult) -> ServiceResult:
     """Turn a failed service result into the matching HTTP error."""
     if result.success:
          return result
     code = _STATUS_BY_KIND.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
     raise HTTPException(status_code=code, detail=result.error)
