from .AnnounceResult import AnnounceResult, ResultCode
from .AnnounceSession import AnnounceSession
from .CallbackRegistry import CallbackHandle, CallbackRegistry
from .DirectoryBackend import DirectoryBackend, NullBackend
from .PortMapper import NullPortMapper, PortMapper
from .Settings import Credentials, Settings
from .ShutdownEvent import ShutdownEvent
from .custom_types import (
    NETWORK_VERSION,
    Member,
    Room,
    RoomInformation,
    RoomListing,
    RoomListingMember,
    RoomSnapshot,
    RoomState,
)
from .exceptions import PreconditionViolation

__all__ = [
    "AnnounceResult",
    "ResultCode",
    "AnnounceSession",
    "CallbackHandle",
    "CallbackRegistry",
    "DirectoryBackend",
    "NullBackend",
    "NullPortMapper",
    "PortMapper",
    "Credentials",
    "Settings",
    "ShutdownEvent",
    "NETWORK_VERSION",
    "Member",
    "Room",
    "RoomInformation",
    "RoomListing",
    "RoomListingMember",
    "RoomSnapshot",
    "RoomState",
    "PreconditionViolation",
]
