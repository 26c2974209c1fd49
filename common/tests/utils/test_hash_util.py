import hashlib
from unittest import TestCase

from common.utils.hash_util import md5, salted_digest


class Test(TestCase):
    def test_md5(self):
        self.assertEqual("5ebe2294ecd0e0f08eab7690d2a6ee69", md5("secret"))
        self.assertEqual("d41d8cd98f00b204e9800998ecf8427e", md5(""))

    def test_salted_digest(self):
        self.assertEqual(hashlib.sha1(b"secretsalt").digest(), salted_digest("sha1", b"secret", b"salt"))
        self.assertEqual(hashlib.sha512(b"secret").digest(), salted_digest("sha512", b"secret", b""))
        self.assertEqual(64, len(salted_digest("sha512", b"secret", b"salt")))
