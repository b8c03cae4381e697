import unittest

from login_keyring.secrets.errors import ServiceError
from login_keyring.secrets.memory_backend import InMemoryBackend


class TestInMemoryBackend(unittest.TestCase):

    def test_seeded_state(self):
        backend = InMemoryBackend(names=["login", "work"], default="work")
        self.assertEqual(backend.get_default_keyring_name(), "work")
        self.assertEqual(backend.list_keyring_names(), ["login", "work"])

    def test_list_is_a_copy(self):
        backend = InMemoryBackend(names=["work"])
        backend.list_keyring_names().append("login")
        self.assertEqual(backend.names, ["work"])

    def test_duplicate_create_is_rejected(self):
        backend = InMemoryBackend(names=["login"])
        with self.assertRaises(ServiceError) as ctx:
            backend.create_keyring("login", "")
        self.assertEqual(ctx.exception.code, "AlreadyExists")

    def test_set_default_requires_existing_keyring(self):
        backend = InMemoryBackend()
        with self.assertRaises(ServiceError) as ctx:
            backend.set_default_keyring("login")
        self.assertEqual(ctx.exception.code, "NoSuchKeyring")
        self.assertIsNone(backend.default)

    def test_context_manager(self):
        with InMemoryBackend() as backend:
            backend.create_keyring("login", "")
            backend.set_default_keyring("login")
        self.assertEqual(backend.default, "login")


if __name__ == '__main__':
    unittest.main()
