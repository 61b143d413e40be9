"""An educational RSA toolkit, from primality testing to Wiener's attack.

Provides RSA key generation over configurable probabilistic primality tests (Fermat, Miller-Rabin,
Solovay-Strassen), PKCS#1 v1.5 padded block encryption of messages and files, key import/export, and Wiener's
attack, which recovers a deliberately small private exponent from the public key.

Typical usage example:

    pub, priv = generate_keys(1024, PrimalityStrategy.MILLER_RABIN, 0.999)
    c = encrypt(b"Hi there!", pub)
    r = decrypt(c, priv)
    weak_pub, weak_priv = generate_weak_keys(1024)
    d = perform_wiener_attack(weak_pub)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsalab.keygen import generate_keys
from rsalab.keygen import generate_weak_keys
from rsalab.keygen import RSAKeyGenerator
from rsalab.keygen import RSAKeySize
from rsalab.keys import RSAKey
from rsalab.padding import PaddingMode
from rsalab.primality import get_primality_test
from rsalab.primality import PrimalityResult
from rsalab.primality import PrimalityStrategy
from rsalab.rsa import decrypt
from rsalab.rsa import decrypt_file
from rsalab.rsa import encrypt
from rsalab.rsa import encrypt_file
from rsalab.rsa import RSA
from rsalab.wiener import ExponentNotFoundError
from rsalab.wiener import perform_wiener_attack
from rsalab.wiener import WienersAttack

__version__ = "0.1.0"
__all__ = [
    "RSA",
    "RSAKey",
    "RSAKeyGenerator",
    "RSAKeySize",
    "PaddingMode",
    "PrimalityResult",
    "PrimalityStrategy",
    "ExponentNotFoundError",
    "WienersAttack",
    "get_primality_test",
    "generate_keys",
    "generate_weak_keys",
    "encrypt",
    "decrypt",
    "encrypt_file",
    "decrypt_file",
    "perform_wiener_attack",
]
