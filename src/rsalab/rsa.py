"""Provides the RSA block engine: per-block transform, multi-block orchestration and file streaming.

The per-block primitive raises the big-endian integer of a block to the key's exponent. Messages of arbitrary
length are split into chunks that fit the padding scheme, each chunk being padded and encrypted on its own, so
blocks are independent of each other. The `RSA` class bundles a key pair and its generator into one encryption
context.

Typical usage example:

    ctx = RSA(1024, PrimalityStrategy.MILLER_RABIN, 0.999)
    c = ctx.encrypt(b"Hi there!")
    r = ctx.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import pathlib

from rsalab import keygen
from rsalab.cryptomath import mod_pow
from rsalab.keys import RSAKey
from rsalab.padding import get_padding
from rsalab.padding import PaddingMode
from rsalab.primality import PrimalityStrategy

logger = logging.getLogger(__name__)

DEFAULT_KEY_SIZE: int = keygen.RSAKeySize.BITS_1024
# Number of blocks read per buffer when streaming files.
_BUFFER_BLOCKS: int = 64


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer, big-endian.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a fixed-length, zero-padded big-endian byte string.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        OverflowError: If the integer does not fit into `fixedlen` bytes.
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def _transform_block(data: bytes, key: RSAKey) -> bytes:
    if len(data) != key.bsize:
        raise ValueError(f"Block must be exactly {key.bsize} bytes, got {len(data)}.")
    value = bytes_to_integer(data)
    if value >= key.modulus:
        raise ValueError("Block representative must be in range [0, mod-1]")
    return integer_to_bytes(mod_pow(value, key.exponent, key.modulus), key.bsize)


def encrypt_block(data: bytes, key: RSAKey) -> bytes:
    """Encrypts a single, already padded block.

    Args:
        data: Block of exactly `key.bsize` bytes.
        key: The key to encrypt with, normally the public key.

    Returns:
        The encrypted block, `key.bsize` bytes.

    Raises:
        ValueError: If the block has the wrong length or is out of range for the key.
    """
    return _transform_block(data, key)


def decrypt_block(data: bytes, key: RSAKey) -> bytes:
    """Decrypts a single block, leaving the padding in place.

    Args:
        data: Block of exactly `key.bsize` bytes.
        key: The key to decrypt with, normally the private key.

    Returns:
        The decrypted block, `key.bsize` bytes.

    Raises:
        ValueError: If the block has the wrong length or is out of range for the key.
    """
    return _transform_block(data, key)


def encrypt(data: bytes, key: RSAKey, padding_mode: PaddingMode | str = PaddingMode.PKCS1) -> bytes:
    """Encrypts a message of any length.

    Args:
        data: The message.
        key: The key to encrypt with.
        padding_mode: The padding scheme applied to each chunk.

    Returns:
        The concatenated ciphertext blocks. Empty for an empty message.
    """
    pad = get_padding(padding_mode, key.bsize)
    step = pad.plaintext_block_size
    blocks = [encrypt_block(pad.apply(data[i:i + step]), key) for i in range(0, len(data), step)]
    logger.debug("Encrypted %d bytes into %d blocks.", len(data), len(blocks))
    return b"".join(blocks)


def decrypt(data: bytes, key: RSAKey, padding_mode: PaddingMode | str = PaddingMode.PKCS1) -> bytes:
    """Decrypts a ciphertext produced by `encrypt()`.

    Args:
        data: The concatenated ciphertext blocks.
        key: The key to decrypt with.
        padding_mode: The padding scheme used during encryption.

    Returns:
        The message.

    Raises:
        ValueError: If the ciphertext is not a whole number of blocks or a block carries invalid padding.
    """
    pad = get_padding(padding_mode, key.bsize)
    step = pad.ciphertext_block_size
    if len(data) % step:
        raise ValueError(f"Ciphertext length {len(data)} is not a multiple of the block size {step}.")
    return b"".join(pad.remove(decrypt_block(data[i:i + step], key)) for i in range(0, len(data), step))


def _stream(in_path: pathlib.Path, out_path: pathlib.Path, chunk: int, action) -> None:
    with open(in_path, "rb") as fin, open(out_path, "wb") as fout:
        while buffer := fin.read(chunk):
            fout.write(action(buffer))


def encrypt_file(in_path: pathlib.Path,
                 out_path: pathlib.Path,
                 key: RSAKey,
                 padding_mode: PaddingMode | str = PaddingMode.PKCS1) -> None:
    """Encrypts a file, reading it in fixed-size buffers.

    Args:
        in_path: The plaintext file.
        out_path: Destination of the ciphertext. Overwritten if it exists.
        key: The key to encrypt with.
        padding_mode: The padding scheme applied to each chunk.
    """
    chunk = get_padding(padding_mode, key.bsize).plaintext_block_size * _BUFFER_BLOCKS
    _stream(in_path, out_path, chunk, lambda buffer: encrypt(buffer, key, padding_mode))


def decrypt_file(in_path: pathlib.Path,
                 out_path: pathlib.Path,
                 key: RSAKey,
                 padding_mode: PaddingMode | str = PaddingMode.PKCS1) -> None:
    """Decrypts a file produced by `encrypt_file()`.

    Args:
        in_path: The ciphertext file.
        out_path: Destination of the plaintext. Overwritten if it exists.
        key: The key to decrypt with.
        padding_mode: The padding scheme used during encryption.

    Raises:
        ValueError: If the file is not a whole number of blocks or a block carries invalid padding.
    """
    chunk = get_padding(padding_mode, key.bsize).ciphertext_block_size * _BUFFER_BLOCKS
    _stream(in_path, out_path, chunk, lambda buffer: decrypt(buffer, key, padding_mode))


class RSA:
    """An RSA encryption context owning a key pair.

    Encryption uses the public key and decryption the private key unless a key is passed explicitly.

    Attributes:
        padding_mode: The padding scheme applied to every chunk.
    """

    def __init__(self,
                 key_size: int = DEFAULT_KEY_SIZE,
                 strategy: PrimalityStrategy | str = keygen.DEFAULT_STRATEGY,
                 target_probability: float = keygen.DEFAULT_TARGET_PROBABILITY,
                 padding_mode: PaddingMode | str = PaddingMode.PKCS1,
                 keys: tuple[RSAKey, RSAKey] | None = None) -> None:
        """Initialize the context, generating its first key pair unless one is given.

        Args:
            key_size: The key size, one of `RSAKeySize`.
            strategy: The primality test used during key generation.
            target_probability: Confidence for the primality oracle, in [0.5, 1).
            padding_mode: The padding scheme.
            keys: An existing (public, private) pair. Optional, if provided no generator is built and the
                generation parameters are ignored.

        Raises:
            ValueError: If the configuration is invalid or the moduli of `keys` differ.
        """
        self.padding_mode = PaddingMode(padding_mode)
        self._generator: keygen.RSAKeyGenerator | None = None
        if keys is None:
            self._generator = keygen.RSAKeyGenerator(keygen.validate_key_size(key_size), strategy, target_probability)
            keys = self._generator.generate_keys()
        public_key, private_key = keys
        if public_key.modulus != private_key.modulus:
            raise ValueError("Public and private key moduli differ.")
        self._public_key, self._private_key = public_key, private_key

    @classmethod
    def from_keys(cls,
                  public_key: RSAKey,
                  private_key: RSAKey,
                  padding_mode: PaddingMode | str = PaddingMode.PKCS1) -> "RSA":
        """Builds a context around an existing key pair, without a generator.

        Args:
            public_key: The public key.
            private_key: The private key. Must share the modulus of the public key.
            padding_mode: The padding scheme.

        Returns:
            A new context. `regenerate_keys()` is unavailable on it.

        Raises:
            ValueError: If the moduli differ.
        """
        return cls(padding_mode=padding_mode, keys=(public_key, private_key))

    @property
    def public_key(self) -> RSAKey:
        return self._public_key

    @property
    def private_key(self) -> RSAKey:
        return self._private_key

    def regenerate_keys(self) -> None:
        """Replaces the key pair with a freshly generated one.

        Raises:
            RuntimeError: If the context was built from existing keys.
        """
        if self._generator is None:
            raise RuntimeError("Context was built from existing keys and has no key generator.")
        self._public_key, self._private_key = self._generator.generate_keys()

    def encrypt_block(self, data: bytes, key: RSAKey | None = None) -> bytes:
        return encrypt_block(data, self._public_key if key is None else key)

    def decrypt_block(self, data: bytes, key: RSAKey | None = None) -> bytes:
        return decrypt_block(data, self._private_key if key is None else key)

    def encrypt(self, data: bytes) -> bytes:
        """Pads and encrypts a message of any length with the public key."""
        return encrypt(data, self._public_key, self.padding_mode)

    def decrypt(self, data: bytes) -> bytes:
        """Decrypts and unpads a ciphertext with the private key."""
        return decrypt(data, self._private_key, self.padding_mode)

    def encrypt_file(self, in_path: pathlib.Path, out_path: pathlib.Path) -> None:
        encrypt_file(in_path, out_path, self._public_key, self.padding_mode)

    def decrypt_file(self, in_path: pathlib.Path, out_path: pathlib.Path) -> None:
        decrypt_file(in_path, out_path, self._private_key, self.padding_mode)
