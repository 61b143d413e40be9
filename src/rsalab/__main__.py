"""The Command Line Interface for the toolkit.

Subcommands cover key generation (optionally deliberately weak keys), file encryption and decryption, and running
Wiener's attack against a public key file.

Typical usage example:

    rsalab keygen -p key.pub -P key --keysize 1024 --weak
    rsalab attack -p key.pub
    OR
    python -m rsalab encrypt -p key.pub -i plain.txt -o cipher.bin
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsalab
from rsalab import keygen
from rsalab import rsa
from rsalab import wiener
from rsalab.keys import RSAKey

logger = logging.getLogger("rsalab")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("File encryption utility."),
    "decrypt":
        HelpData("File decryption utility."),
    "attack":
        HelpData("Wiener's attack against a public key."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "input":
        HelpData(
            description="File to read the payload from.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="File to write the result to.",
            format=pathlib.Path,
        ),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            format=int,
            choices=[str(s.value) for s in keygen.RSAKeySize],
            default=str(int(rsa.DEFAULT_KEY_SIZE)),
        ),
    "strategy":
        HelpData(
            description="Primality test used while generating primes.",
            choices=[s.value for s in rsalab.PrimalityStrategy],
            default=keygen.DEFAULT_STRATEGY.value,
        ),
    "probability":
        HelpData(
            description="Target probability that generated primes are indeed prime, in [0.5, 1).",
            format=float,
            default=keygen.DEFAULT_TARGET_PROBABILITY,
        ),
    "weak":
        HelpData(description="Generate a key with a small private exponent, vulnerable to Wiener's attack."),
    "overwrite":
        HelpData(description="Overwrite specified destination files if they exist."),
    "log_level":
        HelpData(
            description="Verbosity of the log output.",
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            default="WARNING",
        ),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public-key",
                    "-p",
                    required=True,
                    type=help_dict["public_key"].format,
                    help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private-key",
                     "-P",
                     required=True,
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--input",
                      "-i",
                      required=True,
                      type=help_dict["input"].format,
                      help=help_dict["input"].description)
payloads.add_argument("--output",
                      "-o",
                      required=True,
                      type=help_dict["output"].format,
                      help=help_dict["output"].description)
corep = argparse.ArgumentParser(prog="rsalab")
corep.add_argument("--version", action="version", version=f"%(prog)s {rsalab.__version__}")
corep.add_argument("--log-level",
                   choices=help_dict["log_level"].choices,
                   default=help_dict["log_level"].default,
                   help=help_dict["log_level"].description)
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

keygen_cmd = commands.add_parser("keygen", parents=[pubkey, privkey], help=help_dict["keygen"].description)
keygen_cmd.add_argument("--keysize",
                        choices=help_dict["keysize"].choices,
                        default=help_dict["keysize"].default,
                        help=help_dict["keysize"].description)
keygen_cmd.add_argument("--strategy",
                        "-s",
                        choices=help_dict["strategy"].choices,
                        default=help_dict["strategy"].default,
                        help=help_dict["strategy"].description)
keygen_cmd.add_argument("--probability",
                        type=help_dict["probability"].format,
                        default=help_dict["probability"].default,
                        help=help_dict["probability"].description)
keygen_cmd.add_argument("--weak", "-w", action="store_true", help=help_dict["weak"].description)
keygen_cmd.add_argument("--overwrite", action="store_true", help=help_dict["overwrite"].description)

encrypt_cmd = commands.add_parser("encrypt", parents=[pubkey, payloads], help=help_dict["encrypt"].description)
decrypt_cmd = commands.add_parser("decrypt", parents=[privkey, payloads], help=help_dict["decrypt"].description)
attack_cmd = commands.add_parser("attack", parents=[pubkey], help=help_dict["attack"].description)


def configure_logging(level: str) -> None:
    """Sets up the root handler once for the whole CLI run."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def run_keygen(args: argparse.Namespace) -> int:
    if not args.overwrite and (args.private_key.exists() or args.public_key.exists()):
        print("Destination private or public key already exists!", file=sys.stderr)
        return 1
    size = help_dict["keysize"].format(args.keysize)
    if args.weak:
        pub, priv = keygen.generate_weak_keys(size, args.strategy, args.probability)
    else:
        pub, priv = keygen.generate_keys(size, args.strategy, args.probability)
    priv.export_private(args.private_key, pub.exponent)
    pub.export_public(args.public_key)
    print("Key pair generated!")
    return 0


def run_attack(args: argparse.Namespace) -> int:
    pub = RSAKey.import_public(args.public_key)
    try:
        d = wiener.perform_wiener_attack(pub)
    except wiener.ExponentNotFoundError:
        print("Private exponent not found, the key withstands Wiener's attack.")
        return 1
    print(d)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Core Command Line Interface."""
    args = corep.parse_args(argv)
    configure_logging(args.log_level)
    logger.debug("Running subcommand %s.", args.subcommand)
    match args.subcommand:
        case "keygen":
            return run_keygen(args)
        case "encrypt":
            pub = RSAKey.import_public(args.public_key)
            rsa.encrypt_file(args.input, args.output, pub)
        case "decrypt":
            _, priv = RSAKey.import_private(args.private_key)
            rsa.decrypt_file(args.input, args.output, priv)
        case "attack":
            return run_attack(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
