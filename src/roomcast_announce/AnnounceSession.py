"""
Keeps a hosted room listed in the room directory.

A background thread registers the room, then pushes a fresh snapshot of it
every `interval` seconds until stopped or until the room closes. If the
directory reports that it no longer knows the room, the room is registered
again right away. Failures inside the thread are handed to subscribed error
callbacks since there is nobody to return them to.
"""
import logging
import threading
import time
from typing import Callable, List, Optional

from roomcast_announce.AnnounceResult import AnnounceResult, ResultCode
from roomcast_announce.CallbackRegistry import (
    CallbackHandle,
    CallbackRegistry,
    ErrorCallback,
)
from roomcast_announce.DirectoryBackend import DirectoryBackend, NullBackend
from roomcast_announce.PortMapper import NullPortMapper, PortMapper
from roomcast_announce.Settings import Credentials, Settings
from roomcast_announce.ShutdownEvent import ShutdownEvent
from roomcast_announce.custom_types import (
    NETWORK_VERSION,
    Room,
    RoomListing,
    RoomSnapshot,
    RoomState,
)
from roomcast_announce.exceptions import PreconditionViolation


RoomProvider = Callable[[], Optional[Room]]
BackendFactory = Callable[[Credentials], DirectoryBackend]


class AnnounceSession:
    def __init__(
        self,
        room_provider: RoomProvider,
        settings: Optional[Settings] = None,
        backend_factory: Optional[BackendFactory] = None,
        port_mapper: Optional[PortMapper] = None,
        network_version: int = NETWORK_VERSION
    ) -> None:
        self.room_provider = room_provider
        self.settings = settings if settings is not None else Settings()
        self.backend_factory = backend_factory
        self.network_version = network_version

        announce = self.settings.get("announce", {})
        self.interval = self.settings.announce_interval()
        self.port_description = announce.get("port_description", "")

        if port_mapper is None or not announce.get("port_mapping", True):
            port_mapper = NullPortMapper()
        self.port_mapper = port_mapper
        self._port_mapper_ready = False
        self._mapped_port: Optional[int] = None
        self._port_mapper_lock = threading.Lock()

        self.backend = self._create_backend()
        self.error_callbacks = CallbackRegistry()
        self.shutdown_event = ShutdownEvent()

        self._registered = False
        self._registered_lock = threading.Lock()

        self._thread: Optional[threading.Thread] = None
        self._lifecycle_lock = threading.RLock()

    def __enter__(self) -> 'AnnounceSession':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()

    @property
    def is_registered(self) -> bool:
        with self._registered_lock:
            return self._registered

    def register(self) -> AnnounceResult:
        room = self.room_provider()
        if room is None:
            return AnnounceResult(ResultCode.NOT_INITIALIZED, "Network is not initialized")

        if room.get_state() != RoomState.OPEN:
            return AnnounceResult(ResultCode.SESSION_NOT_OPEN, "Room is not open")

        snapshot = RoomSnapshot.capture(room, self.network_version)
        self._map_port(snapshot.port)

        result = self._call_backend("register", snapshot, self.backend.register)
        if not result.succeeded:
            logging.warning(f"Room registration failed: {result.message}")
            return result

        logging.info("Room has been registered")
        room.set_verification_token(result.returned_data)
        self._set_registered(True)

        return AnnounceResult(ResultCode.SUCCESS)

    def start(self) -> None:
        if self._thread is threading.current_thread():
            raise PreconditionViolation("Announce session can't be restarted from its own thread")

        with self._lifecycle_lock:
            if self._thread is not None:
                self._stop()

            self.shutdown_event.reset()
            self._thread = threading.Thread(
                target=self._announce_loop,
                name="AnnounceSession",
                daemon=True
            )
            self._thread.start()

    def stop(self) -> None:
        """
        Stop announcing and remove the room from the directory. Blocks until
        the announce thread has finished its current tick.
        """
        thread = self._thread
        if thread is not None and thread is threading.current_thread():
            # Called from an error callback, the thread can't join itself
            self.shutdown_event.set()
            threading.Thread(target=self._stop, args=(thread,), daemon=True).start()
            return

        self._stop()

    def _stop(self, only: Optional[threading.Thread] = None) -> None:
        with self._lifecycle_lock:
            thread = self._thread
            if thread is None or (only is not None and thread is not only):
                return

            self.shutdown_event.set()
            thread.join()

            try:
                self.backend.delete()
            except Exception as e:
                logging.error(f"Failed to delete room from directory: {e}", exc_info=True)
            finally:
                self._set_registered(False)

            try:
                self._unmap_port()
            finally:
                self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None

    def subscribe(self, callback: ErrorCallback) -> CallbackHandle:
        return self.error_callbacks.subscribe(callback)

    def unsubscribe(self, handle: CallbackHandle) -> None:
        self.error_callbacks.unsubscribe(handle)

    def get_room_list(self) -> List[RoomListing]:
        try:
            return self.backend.get_room_list()
        except Exception as e:
            logging.error(f"Failed to fetch room list: {e}")
            return []

    def update_credentials(self) -> None:
        """Rebuild the backend from the current settings. Not allowed while running."""
        if self._thread is threading.current_thread():
            raise PreconditionViolation(
                "Credentials can only be updated when session is not running"
            )

        with self._lifecycle_lock:
            if self.is_running():
                raise PreconditionViolation(
                    "Credentials can only be updated when session is not running"
                )

            self.backend = self._create_backend()

    def _announce_loop(self) -> None:
        if not self.is_registered:
            result = self.register()
            if not result.succeeded:
                self.error_callbacks.notify(result)
                return

        deadline = time.monotonic() + self.interval
        while not self.shutdown_event.wait_until(deadline):
            deadline += self.interval

            room = self.room_provider()
            if room is None or room.get_state() != RoomState.OPEN:
                logging.info("Room closed, no longer announcing")
                break

            snapshot = RoomSnapshot.capture(room, self.network_version)
            result = self._call_backend("update", snapshot, self.backend.update)
            if not result.succeeded:
                self.error_callbacks.notify(result)

            if result.expired:
                logging.info("Room registration expired, registering again")
                self._set_registered(False)

                new_result = self.register()
                if not new_result.succeeded:
                    self.error_callbacks.notify(new_result)

    def _call_backend(
        self,
        action: str,
        snapshot: RoomSnapshot,
        publish: Callable[[], AnnounceResult]
    ) -> AnnounceResult:
        """Stage `snapshot` on the backend and publish it, errors become results."""
        try:
            self._push_snapshot(snapshot)
            return publish()
        except Exception as e:
            logging.error(f"Directory {action} failed: {e}", exc_info=True)
            return AnnounceResult.failure(str(e))

    def _push_snapshot(self, snapshot: RoomSnapshot) -> None:
        self.backend.set_room_information(
            snapshot.name,
            snapshot.description,
            snapshot.port,
            snapshot.member_slots,
            snapshot.net_version,
            snapshot.has_password,
            snapshot.preferred_game,
            snapshot.preferred_game_id
        )

        self.backend.clear_members()
        for member in snapshot.members:
            self.backend.add_member(
                member.username,
                member.nickname,
                member.avatar_url,
                member.mac_address,
                member.game_id,
                member.game_name
            )

    def _create_backend(self) -> DirectoryBackend:
        credentials = self.settings.credentials()
        if self.backend_factory is None or not credentials.url:
            logging.info("No room directory configured, announcing is disabled")
            return NullBackend()

        return self.backend_factory(credentials)

    def _set_registered(self, registered: bool) -> None:
        with self._registered_lock:
            self._registered = registered

    def _map_port(self, port: int) -> None:
        with self._port_mapper_lock:
            try:
                if not self._port_mapper_ready:
                    self._port_mapper_ready = self.port_mapper.initialize()
                    if not self._port_mapper_ready:
                        logging.debug("Port mapper unavailable")
                        return

                if self.port_mapper.map_port(port, self.port_description):
                    self._mapped_port = port
                    external = self.port_mapper.get_external_address()
                    logging.info(f"Mapped port {port} -> external {external or '?'}")
                else:
                    logging.warning(f"Port mapping failed, forward port {port} manually")
            except Exception as e:
                logging.warning(f"Port mapping failed: {e}", exc_info=True)

    def _unmap_port(self) -> None:
        with self._port_mapper_lock:
            if self._mapped_port is not None:
                try:
                    if not self.port_mapper.unmap_port(self._mapped_port):
                        logging.warning(f"Failed to unmap port {self._mapped_port}")
                except Exception as e:
                    logging.warning(f"Failed to unmap port {self._mapped_port}: {e}", exc_info=True)
                self._mapped_port = None

            if self._port_mapper_ready:
                try:
                    self.port_mapper.shutdown()
                except Exception as e:
                    logging.warning(f"Port mapper shutdown failed: {e}", exc_info=True)
                self._port_mapper_ready = False
