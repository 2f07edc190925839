"""Protocol for room directory backends."""
from typing import List, Protocol, runtime_checkable

from roomcast_announce.AnnounceResult import AnnounceResult, ResultCode
from roomcast_announce.custom_types import RoomListing


@runtime_checkable
class DirectoryBackend(Protocol):
    """Client for a remote room directory.

    The announcer first stages the room data through `set_room_information`,
    `clear_members` and `add_member`, then publishes it with `register` or
    `update`.

    An `update` answered with `ResultCode.REGISTRATION_EXPIRED` tells the
    announcer that the directory dropped the room and that it has to
    register again.
    """

    def set_room_information(
        self,
        name: str,
        description: str,
        port: int,
        max_members: int,
        net_version: int,
        has_password: bool,
        preferred_game: str,
        preferred_game_id: int
    ) -> None:
        ...

    def clear_members(self) -> None:
        ...

    def add_member(
        self,
        username: str,
        nickname: str,
        avatar_url: str,
        mac_address: str,
        game_id: int,
        game_name: str
    ) -> None:
        ...

    def register(self) -> AnnounceResult:
        """Publish the staged room, `returned_data` carries the verification token."""
        ...

    def update(self) -> AnnounceResult:
        ...

    def delete(self) -> None:
        ...

    def get_room_list(self) -> List[RoomListing]:
        ...


class NullBackend:
    """Used when no directory is configured, accepts everything and lists nothing."""

    def set_room_information(
        self,
        name: str,
        description: str,
        port: int,
        max_members: int,
        net_version: int,
        has_password: bool,
        preferred_game: str,
        preferred_game_id: int
    ) -> None:
        pass

    def clear_members(self) -> None:
        pass

    def add_member(
        self,
        username: str,
        nickname: str,
        avatar_url: str,
        mac_address: str,
        game_id: int,
        game_name: str
    ) -> None:
        pass

    def register(self) -> AnnounceResult:
        return AnnounceResult(ResultCode.SUCCESS)

    def update(self) -> AnnounceResult:
        return AnnounceResult(ResultCode.SUCCESS)

    def delete(self) -> None:
        pass

    def get_room_list(self) -> List[RoomListing]:
        return []
