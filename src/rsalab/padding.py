"""Block padding schemes for RSA encryption.

Currently covers PKCS#1 v1.5 encryption padding (block type 2). A scheme is chosen through `get_padding()` and is
bound to a single key size, as its block sizes derive from the modulus length.

Typical usage example:

    pad = get_padding(PaddingMode.PKCS1, 128)
    block = pad.apply(b"Hi there!")
    message = pad.remove(block)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import abc
import enum
from secrets import token_bytes

# Header, terminator and the minimum eight bytes of padding string.
PKCS1_OVERHEAD: int = 11
_MINIMUM_PADDING: int = 8


class PaddingMode(enum.Enum):
    """Available RSA padding schemes."""
    PKCS1 = "pkcs1"


class RSAPadding(abc.ABC):
    """Template for padding schemes bound to a fixed modulus size.

    Attributes:
        key_size_bytes: Size of the modulus in bytes.
    """

    def __init__(self, key_size_bytes: int) -> None:
        self.key_size_bytes = key_size_bytes

    @property
    @abc.abstractmethod
    def plaintext_block_size(self) -> int:
        """Largest message chunk that fits into one padded block."""

    @property
    def ciphertext_block_size(self) -> int:
        """Size of a padded (and encrypted) block."""
        return self.key_size_bytes

    @abc.abstractmethod
    def apply(self, data: bytes) -> bytes:
        """Pads one message chunk into a full block."""

    @abc.abstractmethod
    def remove(self, data: bytes) -> bytes:
        """Strips the padding from one full block."""


class PKCS1Padding(RSAPadding):
    """PKCS#1 v1.5 encryption padding: 00 02 PS 00 M, with PS made of at least 8 random non-zero bytes."""

    def __init__(self, key_size_bytes: int) -> None:
        if key_size_bytes <= PKCS1_OVERHEAD:
            raise ValueError(f"PKCS#1 padding requires a modulus of more than {PKCS1_OVERHEAD} bytes.")
        super().__init__(key_size_bytes)

    @property
    def plaintext_block_size(self) -> int:
        return self.key_size_bytes - PKCS1_OVERHEAD

    def apply(self, data: bytes) -> bytes:
        """Pads the message according to PKCS#1 v1.5 block type 2.

        Args:
            data: The message chunk, at most `plaintext_block_size` bytes.

        Returns:
            The padded block of exactly `key_size_bytes` bytes.

        Raises:
            ValueError: If the message is too long.
        """
        if len(data) > self.plaintext_block_size:
            raise ValueError("Message too long for the current key.")
        ps = bytearray(token_bytes(self.key_size_bytes - len(data) - 3))
        for i, byt in enumerate(ps):
            while byt == 0:
                byt = token_bytes(1)[0]
            ps[i] = byt
        return b"\x00\x02" + bytes(ps) + b"\x00" + bytes(data)

    def remove(self, data: bytes) -> bytes:
        """Removes PKCS#1 v1.5 block type 2 padding.

        Args:
            data: The padded block.

        Returns:
            The message.

        Raises:
            ValueError: If the block length, header, padding string or terminator is invalid.
        """
        if len(data) != self.key_size_bytes:
            raise ValueError("Block does not match the key size.")
        if data[0:2] != b"\x00\x02":
            raise ValueError("Incorrect padding header.")
        try:
            terminator = data.index(b"\x00", 2)
        except ValueError:
            raise ValueError("Padding terminator not found.") from None
        if terminator - 2 < _MINIMUM_PADDING:
            raise ValueError("Padding string too short.")
        return bytes(data[terminator + 1:])


_PADDINGS: dict[PaddingMode, type[RSAPadding]] = {
    PaddingMode.PKCS1: PKCS1Padding,
}


def get_padding(mode: PaddingMode | str, key_size_bytes: int) -> RSAPadding:
    """Constructs the padding scheme for `mode`.

    Args:
        mode: A `PaddingMode` or its value.
        key_size_bytes: Size of the modulus in bytes.

    Returns:
        A new padding instance bound to the given size.

    Raises:
        ValueError: If the mode is unknown or the size too small.
    """
    return _PADDINGS[PaddingMode(mode)](key_size_bytes)
