"""
Helper to fingerprint the content of archive members.
"""

from __future__ import annotations

import hashlib as hl

from archive_fingerprint.errors import DigestUnavailable

DEFAULT_HASH_ALGORITHM = 'sha256'


def fixed_length_algorithms():
    """
    :return: Sorted names of the guaranteed `hashlib` algorithms with a fixed digest length.
    """
    return sorted(name for name in hl.algorithms_guaranteed if not name.startswith('shake'))


class ContentHasher:
    """
    Helper class to compute hash values of io streams.
    """

    def __init__(self, hash_algorithm: str = DEFAULT_HASH_ALGORITHM, hash_buffer_size=128 * 1024):
        """
        :param hash_algorithm: Hashing algorithm, must be supported by `hashlib` and produce a
            fixed-length digest.
        :param hash_buffer_size: Buffer size used to read the input streams.
        :raises DigestUnavailable: If the algorithm cannot be instantiated.
        """
        try:
            digest = hl.new(hash_algorithm)
        except (ValueError, TypeError) as error:
            raise DigestUnavailable(
                f'Hash algorithm {hash_algorithm!r} is not available: {error}') from error
        if digest.digest_size == 0:
            raise DigestUnavailable(
                f'Hash algorithm {hash_algorithm!r} has no fixed digest length.')

        self.hash_algorithm = hash_algorithm
        self.hash_buffer_size = hash_buffer_size

    def __repr__(self):
        return f'ContentHasher({self.hash_algorithm})'

    def compute_hash(self, input_io) -> str:
        """
        Computes the hash sum for an input io object.
        :param input_io: input io object
        :return: string with the lowercase hex representation of the hash
        """
        digest = hl.new(self.hash_algorithm)
        while True:
            data = input_io.read(self.hash_buffer_size)
            if not data:
                break
            digest.update(data)
        return digest.hexdigest()
