from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol, Tuple, runtime_checkable


NETWORK_VERSION = 4


class RoomState(Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class RoomInformation:
    name: str
    description: str = ""
    port: int = 0
    member_slots: int = 0
    preferred_game: str = ""
    preferred_game_id: int = 0


@dataclass(frozen=True)
class Member:
    username: str
    nickname: str
    avatar_url: str = ""
    mac_address: str = ""
    game_id: int = 0
    game_name: str = ""


@runtime_checkable
class Room(Protocol):
    """The hosted room as seen by the announcer. Read-only apart from the token."""

    def get_state(self) -> RoomState:
        ...

    def get_information(self) -> RoomInformation:
        ...

    def get_member_list(self) -> List[Member]:
        ...

    def has_password(self) -> bool:
        ...

    def set_verification_token(self, token: str) -> None:
        ...


@dataclass(frozen=True)
class RoomSnapshot:
    name: str
    description: str
    port: int
    member_slots: int
    net_version: int
    has_password: bool
    preferred_game: str
    preferred_game_id: int
    members: Tuple[Member, ...] = ()

    @classmethod
    def capture(cls, room: Room, net_version: int = NETWORK_VERSION) -> 'RoomSnapshot':
        """
        Copy everything the directory needs out of the live room. The room
        may change while the snapshot is being pushed, the snapshot won't.
        """
        info = room.get_information()
        members = tuple(room.get_member_list())

        return cls(
            name=info.name,
            description=info.description,
            port=info.port,
            member_slots=info.member_slots,
            net_version=net_version,
            has_password=room.has_password(),
            preferred_game=info.preferred_game,
            preferred_game_id=info.preferred_game_id,
            members=members
        )


@dataclass
class RoomListingMember:
    username: str
    nickname: str
    avatar_url: str = ""
    game_id: int = 0
    game_name: str = ""


@dataclass
class RoomListing:
    name: str
    uid: str = ""
    owner: str = ""
    verify_uid: str = ""
    description: str = ""
    ip: str = ""
    port: int = 0
    max_members: int = 0
    net_version: int = 0
    has_password: bool = False
    preferred_game: str = ""
    preferred_game_id: int = 0
    members: List[RoomListingMember] = field(default_factory=list)
