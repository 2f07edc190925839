import dataclasses
import unittest

from roomcast_announce.AnnounceResult import AnnounceResult, ResultCode
from roomcast_announce.DirectoryBackend import DirectoryBackend, NullBackend
from roomcast_announce.PortMapper import NullPortMapper, PortMapper
from roomcast_announce.custom_types import (
    NETWORK_VERSION,
    Room,
    RoomSnapshot,
)
from tests.roomcast_announce.fakes import FakeBackend, FakeRoom


class TestRoomSnapshot(unittest.TestCase):
    def setUp(self):
        self.room = FakeRoom(port=6000)

    def test_capture(self):
        self.room.add_member("alice")
        self.room.password = True

        snapshot = RoomSnapshot.capture(self.room)

        self.assertEqual(snapshot.name, "Test Room")
        self.assertEqual(snapshot.port, 6000)
        self.assertEqual(snapshot.member_slots, 8)
        self.assertEqual(snapshot.net_version, NETWORK_VERSION)
        self.assertTrue(snapshot.has_password)
        self.assertEqual(snapshot.preferred_game, "Test Game")
        self.assertEqual([m.username for m in snapshot.members], ["alice"])

    def test_capture_is_not_affected_by_later_changes(self):
        snapshot = RoomSnapshot.capture(self.room, net_version=7)

        self.room.add_member("bob")
        self.room.information.port = 7000

        self.assertEqual(snapshot.members, ())
        self.assertEqual(snapshot.port, 6000)
        self.assertEqual(snapshot.net_version, 7)

    def test_snapshot_is_frozen(self):
        snapshot = RoomSnapshot.capture(self.room)

        with self.assertRaises(dataclasses.FrozenInstanceError):
            snapshot.port = 1234


class TestAnnounceResult(unittest.TestCase):
    def test_success(self):
        result = AnnounceResult.success("token")

        self.assertTrue(result.succeeded)
        self.assertFalse(result.expired)
        self.assertEqual(result.returned_data, "token")

    def test_failure(self):
        result = AnnounceResult.failure("Bad gateway")

        self.assertFalse(result.succeeded)
        self.assertEqual(result.code, ResultCode.BACKEND_FAILURE)
        self.assertEqual(result.message, "Bad gateway")

    def test_expired(self):
        result = AnnounceResult(ResultCode.REGISTRATION_EXPIRED, "404")

        self.assertFalse(result.succeeded)
        self.assertTrue(result.expired)


class TestNullImplementations(unittest.TestCase):
    def test_null_backend(self):
        backend = NullBackend()

        self.assertIsInstance(backend, DirectoryBackend)
        self.assertTrue(backend.register().succeeded)
        self.assertTrue(backend.update().succeeded)
        self.assertEqual(backend.get_room_list(), [])
        self.assertIsNone(backend.delete())

    def test_null_port_mapper(self):
        mapper = NullPortMapper()

        self.assertIsInstance(mapper, PortMapper)
        self.assertFalse(mapper.initialize())
        self.assertFalse(mapper.map_port(6000, "Room"))
        self.assertFalse(mapper.unmap_port(6000))
        self.assertEqual(mapper.get_external_address(), "")
        self.assertIsNone(mapper.shutdown())

    def test_fakes_satisfy_protocols(self):
        self.assertIsInstance(FakeRoom(), Room)
        self.assertIsInstance(FakeBackend(), DirectoryBackend)


if __name__ == "__main__":
    unittest.main()
