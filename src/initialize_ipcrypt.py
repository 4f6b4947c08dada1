#!/usr/bin/env python3
"""Command-line entry point for encrypting and decrypting IPv4 addresses.

Reads defaults from .env:
  IPCRYPT_KEY, IPCRYPT_DIFF_SAMPLES

Usage:
  python initialize_ipcrypt.py [--key KEY] encrypt ADDR [ADDR ...] [--int]
  python initialize_ipcrypt.py [--key KEY] decrypt ADDR [ADDR ...] [--int]
  python initialize_ipcrypt.py [--key KEY] anonymize [--decrypt] [--input PATH] [--output PATH]
  python initialize_ipcrypt.py keygen
  python initialize_ipcrypt.py [--key KEY] differential [--samples N] [--seed S]
"""

# Standard library
import argparse
import sys
from contextlib import ExitStack

# Utility Handlers
from utils.address_codec import decrypt_int, decrypt_ip, encrypt_int, encrypt_ip
from utils.anonymize_handler import FILE_ENCODING, FILE_ERRORS, anonymize_file, anonymize_lines
from utils.differential_handler import measure_differential
from utils.key_handler import generate_key, key_from_env, key_to_hex, load_key

# Configuration Logging
from config.logging_config import logger


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ipcrypt",
        description="Format-preserving encryption of IPv4 addresses",
    )
    p.add_argument("--key", help="32 hex digits or 16 raw characters (defaults to IPCRYPT_KEY)")
    sub = p.add_subparsers(dest="command", required=True)

    for name in ("encrypt", "decrypt"):
        cmd = sub.add_parser(name, help=f"{name.capitalize()} one or more addresses")
        cmd.add_argument("addresses", nargs="+", help="Dotted-decimal addresses")
        cmd.add_argument("--int", dest="as_int", action="store_true",
                         help="Treat addresses as 32-bit integers")

    anon = sub.add_parser("anonymize", help="Rewrite every address found in text")
    anon.add_argument("--decrypt", action="store_true", help="Undo a previous anonymization")
    anon.add_argument("--input", help="File to read (defaults to stdin)")
    anon.add_argument("--output", help="File to write (defaults to stdout)")

    sub.add_parser("keygen", help="Print a fresh random key as hex")

    diff = sub.add_parser("differential", help="Measure the known differential bias")
    diff.add_argument("--samples", type=int, help="Pairs to try (defaults to IPCRYPT_DIFF_SAMPLES)")
    diff.add_argument("--seed", type=int, help="Seed for a reproducible run")

    return p


def resolve_key(args) -> bytes:
    """Key from --key, falling back to IPCRYPT_KEY."""
    if args.key:
        return load_key(args.key)
    return key_from_env()


def run_convert(args, key: bytes):
    """Print the encryption or decryption of each address, one per line."""
    if args.as_int:
        operation = encrypt_int if args.command == "encrypt" else decrypt_int
        for value in args.addresses:
            print(operation(int(value, 0), key))
    else:
        operation = encrypt_ip if args.command == "encrypt" else decrypt_ip
        for addr in args.addresses:
            print(operation(addr, key))


def _pass_through(stream):
    """Let undecodable bytes on a standard stream through unchanged."""
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors=FILE_ERRORS)
    return stream


def run_anonymize(args, key: bytes):
    """Anonymize a file, or stream stdin to stdout."""
    if args.input and args.output:
        anonymize_file(args.input, args.output, key, decrypt=args.decrypt)
        return

    with ExitStack() as stack:
        if args.input:
            src = stack.enter_context(open(args.input, "r", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline=""))
        else:
            src = _pass_through(sys.stdin)
        if args.output:
            dst = stack.enter_context(open(args.output, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline=""))
        else:
            dst = _pass_through(sys.stdout)

        for line in anonymize_lines(src, key, decrypt=args.decrypt):
            dst.write(line)


def run_differential(args, key: bytes):
    """Print the differential hit count for the given key."""
    result = measure_differential(key, samples=args.samples, seed=args.seed)
    print(f"Found hits: {result.hits}/{result.total} = {result.ratio}")


def main(argv=None) -> int:
    """Main runner for the ipcrypt command line."""
    args = build_parser().parse_args(argv)

    if args.command == "keygen":
        print(key_to_hex(generate_key()))
        return 0

    try:
        key = resolve_key(args)

        if args.command in ("encrypt", "decrypt"):
            run_convert(args, key)
        elif args.command == "anonymize":
            run_anonymize(args, key)
        elif args.command == "differential":
            run_differential(args, key)
    except (ValueError, OSError) as e:
        logger.error(f"[ipcrypt] {args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
