"""
Result envelopes shared by the ledger services.

Services report failures through these objects instead of raising, so that
routers can translate every outcome the same way.
"""
from enum import Enum
from typing import ClassVar, Optional, Tuple
from pydantic import BaseModel, ConfigDict, model_validator


class ErrorKind(str, Enum):
     NOT_FOUND = "not_found"
     VALIDATION = "validation"
     UPSTREAM = "upstream"


class ServiceResult(BaseModel):
     """Base result: success flag plus error details when it failed."""
     success: bool = True
     error: Optional[str] = None
     error_kind: Optional[ErrorKind] = None

     model_config = ConfigDict(from_attributes=True)

     @classmethod
     def failure(cls, kind: ErrorKind, message: str):
          return cls(success=False, error=message, error_kind=kind)

     @classmethod
     def not_found(cls, message: str):
          return cls.failure(ErrorKind.NOT_FOUND, message)

     @classmethod
     def invalid(cls, message: str):
          return cls.failure(ErrorKind.VALIDATION, message)

     @classmethod
     def upstream(cls, message: str):
          return cls.failure(ErrorKind.UPSTREAM, message)


class PartialUpdate(BaseModel):
     """
     Base for update payloads: only provided fields change. Fields listed in
     `non_nullable` back NOT NULL columns, so an explicit null is rejected.
     """
     non_nullable: ClassVar[Tuple[str, ...]] = ()

     @model_validator(mode="after")
     def _reject_nulls(self):
          nulls = [
               name for name in self.non_nullable
               if name in self.model_fields_set and getattr(self, name) is None
          ]
          if nulls:
               raise ValueError(f"{', '.join(nulls)} cannot be null")
          return self
