from dataclasses import dataclass
from enum import Enum


class ResultCode(Enum):
    SUCCESS = "success"
    NOT_INITIALIZED = "not_initialized"
    SESSION_NOT_OPEN = "session_not_open"
    BACKEND_FAILURE = "backend_failure"
    # Directory no longer knows the registration (HTTP 404 or similar)
    REGISTRATION_EXPIRED = "registration_expired"


@dataclass(frozen=True)
class AnnounceResult:
    code: ResultCode
    message: str = ""
    returned_data: str = ""

    @property
    def succeeded(self) -> bool:
        return self.code == ResultCode.SUCCESS

    @property
    def expired(self) -> bool:
        return self.code == ResultCode.REGISTRATION_EXPIRED

    @classmethod
    def success(cls, returned_data: str = "") -> 'AnnounceResult':
        return cls(ResultCode.SUCCESS, returned_data=returned_data)

    @classmethod
    def failure(cls, message: str) -> 'AnnounceResult':
        return cls(ResultCode.BACKEND_FAILURE, message)
