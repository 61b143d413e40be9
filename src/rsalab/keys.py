"""The RSA key type and its persistence to and from PEM files.

Public keys are exported following PKCS#1 (`RSAPublicKey`), so other tools can read them. Private keys produced by
this package carry only the private exponent and the modulus, without the CRT components PKCS#1 and PKCS#8 require,
so they travel in a small purpose-made ASN.1 structure instead.

Typical usage example:

    pub.export_public("key.pub")
    priv.export_private("key", pub.exponent)
    pub, priv = RSAKey.import_private("key")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import pathlib
import typing

from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1.type import namedtype
from pyasn1.type import univ
from pyasn1_modules import rfc8017

PEM_TYPES = {
    "PKCS1_PUB": ("-----BEGIN RSA PUBLIC KEY-----", "-----END RSA PUBLIC KEY-----"),
    "EXPONENT_PRIV": ("-----BEGIN RSA PRIVATE EXPONENT-----", "-----END RSA PRIVATE EXPONENT-----"),
}


class RSAExponentKey(univ.Sequence):
    """A private key made of the bare exponents, as no standard structure exists for a CRT-less key."""
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("modulus", univ.Integer()),
        namedtype.NamedType("publicExponent", univ.Integer()),
        namedtype.NamedType("privateExponent", univ.Integer()),
    )


class RSAKey(typing.NamedTuple):
    """An immutable RSA key: one exponent and the shared modulus.

    The same type serves for both halves of a pair. The public key holds `e`, the private key holds `d`.

    Attributes:
        exponent: The public or private exponent.
        modulus: The modulus of the key pair.
    """
    exponent: int
    modulus: int

    @property
    def bsize(self) -> int:
        """Size of the modulus in bytes, i.e. the size of a ciphertext block."""
        return (self.modulus.bit_length() + 7) // 8

    def export_public(self, file: pathlib.Path) -> None:
        """Export this key as a PKCS#1 public key.

        Args:
            file: The file to export the public key to.
        """
        keydata = rfc8017.RSAPublicKey()
        keydata["modulus"] = self.modulus
        keydata["publicExponent"] = self.exponent
        write_pem(file, "PKCS1_PUB", encoder.encode(keydata))

    def export_private(self, file: pathlib.Path, public_exponent: int) -> None:
        """Export this key as a private exponent key.

        The public exponent is stored alongside so the whole pair can be restored from a single file.

        Args:
            file: The file to export the private key to.
            public_exponent: The exponent of the matching public key.
        """
        keydata = RSAExponentKey()
        keydata["modulus"] = self.modulus
        keydata["publicExponent"] = public_exponent
        keydata["privateExponent"] = self.exponent
        write_pem(file, "EXPONENT_PRIV", encoder.encode(keydata))

    @classmethod
    def import_public(cls, file: pathlib.Path) -> "RSAKey":
        """Import a PKCS#1 public key.

        Args:
            file: The file to import the public key from.

        Returns:
            The public key.
        """
        payload = read_pem(file, "PKCS1_PUB")
        keydata, _ = decoder.decode(payload, asn1Spec=rfc8017.RSAPublicKey())
        pykeyd = localize.encode(keydata)
        return cls(pykeyd["publicExponent"], pykeyd["modulus"])

    @classmethod
    def import_private(cls, file: pathlib.Path) -> tuple["RSAKey", "RSAKey"]:
        """Import a private exponent key.

        Args:
            file: The file to import.

        Returns:
            The (public, private) key pair.
        """
        payload = read_pem(file, "EXPONENT_PRIV")
        keydata, _ = decoder.decode(payload, asn1Spec=RSAExponentKey())
        pykeyd = localize.encode(keydata)
        mod = pykeyd["modulus"]
        return cls(pykeyd["publicExponent"], mod), cls(pykeyd["privateExponent"], mod)


def read_pem(file: pathlib.Path, subtype: str) -> bytes:
    """Reads a PEM encoded file.

    Args:
        file: The file to read.
        subtype: The subtype of PEM encoding to accept.

    Returns:
        The decoded PEM payload.

    Raises:
        IOError: If the file has invalid PEM armour.
    """
    header, footer = PEM_TYPES[subtype]
    with open(file, "r", encoding="ascii") as f:
        headline = f.readline().strip()
        if headline != header:
            raise IOError(f"PEM Headline {headline} does not match {header}")
        parcel = []
        while True:
            line = f.readline()
            if not line:
                raise IOError(f"PEM File does not contain footer: {footer}")
            line = line.strip()
            if line == footer:
                break
            parcel.append(line)
    return base64.b64decode("".join(parcel))


def write_pem(file: pathlib.Path, subtype: str, data: bytes) -> None:
    """Writes a PEM encoded file, wrapping the payload at 64 characters.

    Args:
        file: The file to write.
        subtype: The subtype of PEM encoding to write.
        data: The DER payload.
    """
    header, footer = PEM_TYPES[subtype]
    payload = base64.b64encode(data).decode()
    with open(file, "w", encoding="ascii") as f:
        f.write(header + "\n")
        for i in range(0, len(payload), 64):
            f.write(payload[i:i + 64] + "\n")
        f.write(footer + "\n")
