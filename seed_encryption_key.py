#!/usr/bin/env python3
"""
Generate the AES-256 key file used to seal stored target URLs.

This script follows this procedure to create a key:
- Step 1: Resolve the key file path (--key-file, else ENCRYPTION_KEY_FILE, else ./encryption.key)
- Step 2: Refuse to overwrite an existing key unless --force is given
- Step 3: Write 32 random bytes, base64-encoded, readable by the owner only

CLI usage:
    $ python seed_encryption_key.py
    $ python seed_encryption_key.py --key-file /etc/linkvault/encryption.key
    $ python seed_encryption_key.py --key-file encryption.key --force

Behavior:
    - Never prints the key to stdout.
    - Overwriting a key makes every record sealed with the old key unreadable
      (resolve fails with DecryptionError). Keep a backup before using --force.

Raises:
    SystemExit: with status 1 if the key file already exists and --force is missing.
"""

import argparse
import logging
import os
import sys

from linkvault.constants import ENV, Crypto
from linkvault.utils import generate_key_file, initialize_logging


logger = logging.getLogger('seed_encryption_key')


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='Generate the encryption key file for sealed URL payloads.')
    parser.add_argument(
        '--key-file',
        default=os.environ.get(ENV.Encryption.KEY_FILE, Crypto.DEFAULT_KEY_FILE),
        help='Where to write the key (default: $ENCRYPTION_KEY_FILE or ./encryption.key).',
    )
    parser.add_argument('--force', action='store_true', help='Overwrite an existing key file.')
    args = parser.parse_args(argv)

    initialize_logging()
    try:
        path = generate_key_file(args.key_file, overwrite=args.force)
    except FileExistsError as e:
        logger.error('%s Pass --force to replace it.', e)
        return 1

    logger.info('Wrote new encryption key file.', extra={'keyFile': str(path)})
    return 0


if __name__ == '__main__':
    sys.exit(main())
