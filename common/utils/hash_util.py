import hashlib


def md5(data: str) -> str:
    """
    Calculates the MD5 hash of a string.

    @param data: The string to be hashed
    @return: The MD5 hash of the string, in lowercase hex
    """
    _md5 = hashlib.md5()
    _md5.update(data.encode())

    return _md5.hexdigest()


def salted_digest(algorithm: str, data: bytes, salt: bytes) -> bytes:
    """
    Calculates the raw digest of data followed by salt.

    b"secret", b"salt" with sha1 -> sha1(b"secretsalt")

    @param algorithm: hashlib algorithm name, e.g. "sha1", "sha512"
    @param data: The bytes to be hashed
    @param salt: The salt appended to data
    @return: The raw digest bytes
    """
    _hash = hashlib.new(algorithm)
    _hash.update(data)
    _hash.update(salt)

    return _hash.digest()
