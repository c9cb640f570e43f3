"""
SHACAL Vault - Main Entry Point

Batch mode:
    shacalvault encrypt <input> <output> [password]
    shacalvault decrypt <input> <output> [password]
    shacalvault hash <file> [--algorithm sha1]

Running without arguments starts the interactive menu.
"""

import argparse
import logging
import sys
from getpass import getpass
from typing import List, Optional

from . import config
from .errors import IoError
from .files.file_crypto import encrypt_file, decrypt_file
from .files.file_hash import compute_file_hash

TITLE = "SHACAL2-CBC File Encryptor/Decryptor"

PARAMETERS = (
    "Algorithm: SHACAL-2, mode: CBC\n"
    "Block size: 256 bits\n"
    "Key size: 256 bits (PBKDF2-HMAC-SHA256)\n"
    "IV size: 256 bits"
)

USAGE = f"""{TITLE}
{'=' * len(TITLE)}
{PARAMETERS}

USAGE:
  Interactive mode:
    shacalvault

  Batch mode:
    shacalvault encrypt <input> <output> [password]
    shacalvault decrypt <input> <output> [password]
    shacalvault hash <file> [--algorithm sha1]

EXAMPLES:
  Encrypt:
    shacalvault encrypt document.txt encrypted.bin MySecretPassword

  Decrypt:
    shacalvault decrypt encrypted.bin decrypted.txt MySecretPassword
"""


def print_help():
    """Print usage and algorithm parameters."""
    print(USAGE)


def run_operation(mode: str, input_path: str, output_path: str, password: str) -> bool:
    """
    Dispatch one encrypt/decrypt request and print the outcome.

    Returns:
        True on success
    """
    if mode == "encrypt":
        result = encrypt_file(input_path, output_path, password)
    elif mode == "decrypt":
        result = decrypt_file(input_path, output_path, password)
    else:
        print(f"Error: unknown mode '{mode}'. Use 'encrypt' or 'decrypt'",
              file=sys.stderr)
        return False

    if result.success:
        print(result.message)
        print("✓ Operation completed successfully!")
    else:
        print(result.message, file=sys.stderr)
        print("✗ Operation failed.", file=sys.stderr)
    return result.success


def interactive_mode():
    """Menu loop: 1 encrypt, 2 decrypt, 3 help, 0 exit."""
    print(f"=== {TITLE} ===")
    print(PARAMETERS)

    while True:
        print("\nChoose an operation:")
        print("1. Encrypt a file")
        print("2. Decrypt a file")
        print("3. Show help")
        print("0. Exit")

        try:
            choice = input("Your choice: ").strip()
        except EOFError:
            print()
            break

        if choice == "0":
            print("Exiting.")
            break
        if choice == "3":
            print_help()
            continue
        if choice not in ("1", "2"):
            print("Invalid choice! Please try again.")
            continue

        input_path = input("Input file path: ").strip()
        if not input_path:
            print("File path must not be empty!")
            continue

        output_path = input("Output file path: ").strip()
        if not output_path:
            print("Output file path must not be empty!")
            continue

        password = getpass("Password: ")
        if not password:
            print("Password must not be empty!")
            continue

        mode = "encrypt" if choice == "1" else "decrypt"
        print(f"\nStarting {mode}ion...")
        run_operation(mode, input_path, output_path, password)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shacalvault",
        description=TITLE,
        epilog="Run without arguments for the interactive menu.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for mode in ("encrypt", "decrypt"):
        p = sub.add_parser(mode, help=f"{mode} a file with a password")
        p.add_argument("input", help="input file path")
        p.add_argument("output", help="output file path")
        p.add_argument("password", nargs="?",
                       help="password (prompted for when omitted)")

    p = sub.add_parser("hash", help="print the hash of a file")
    p.add_argument("file", help="file to hash")
    p.add_argument("--algorithm", default=config.HASH_ALGORITHM,
                   help=f"hashlib algorithm name (default {config.HASH_ALGORITHM})")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for SHACAL Vault."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        interactive_mode()
        return 0
    if argv[0] in ("-h", "--help"):
        print_help()
        return 0

    args = build_parser().parse_args(argv)

    if args.command == "hash":
        try:
            digest = compute_file_hash(args.file, args.algorithm)
        except (IoError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(f"File: {args.file}")
        print(f"{args.algorithm.upper()}: {digest}")
        return 0

    password = args.password
    if password is None:
        password = getpass("Password: ")
    if not password:
        print("Error: password must not be empty", file=sys.stderr)
        return 1

    print(TITLE)
    print("=" * len(TITLE))
    print(f"Mode: {args.command}")
    return 0 if run_operation(args.command, args.input, args.output, password) else 1


if __name__ == "__main__":
    sys.exit(main())
