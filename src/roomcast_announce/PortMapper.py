"""Protocol for router port mapping helpers (UPnP and friends)."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class PortMapper(Protocol):
    """Best-effort port forwarding on the local router.

    None of these calls may abort announcing: a failed mapping only means
    that the host has to forward the port manually.
    """

    def initialize(self) -> bool:
        ...

    def map_port(self, port: int, description: str) -> bool:
        ...

    def unmap_port(self, port: int) -> bool:
        ...

    def get_external_address(self) -> str:
        """Returns an empty string if the address could not be determined."""
        ...

    def shutdown(self) -> None:
        ...


class NullPortMapper:
    """Port mapping disabled, every call reports failure."""

    def initialize(self) -> bool:
        return False

    def map_port(self, port: int, description: str) -> bool:
        return False

    def unmap_port(self, port: int) -> bool:
        return False

    def get_external_address(self) -> str:
        return ""

    def shutdown(self) -> None:
        pass
