"""Authenticated encryption of stored target URLs

Every stored payload starts with a one-byte format marker so sealed and plain
records can live side by side in the same store, e.g. after encryption was
switched on for an existing deployment:

    plain:  0x00 | utf-8 URL
    sealed: 0x01 | 12-byte nonce | AES-256-GCM ciphertext + 16-byte tag

Functions:
    load_key(path) -> bytes
        Read a base64-encoded 256-bit key from a key file.
    generate_key_file(path, overwrite=False) -> Path
        Write a fresh random key to a key file.

Classes:
    CryptoGuard(key=None)
        seal()/open() payloads. Without a key, seal() stores plain payloads.

Example:
    >>> guard = CryptoGuard(load_key('encryption.key'))
    >>> payload = guard.seal('https://example.com')
    >>> payload[0] == PayloadFormat.SEALED
    True
    >>> guard.open(payload)
    'https://example.com'
"""

import base64
import binascii
import os
import secrets
from pathlib import Path

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from linkvault.constants import Crypto, PayloadFormat
from linkvault.exceptions import DecryptionError, KeyLoadError


def load_key(path: str | Path) -> bytes:
    """Load a base64-encoded AES-256 key from disk

    Args:
        path (str | Path):
            Key file holding the base64 encoding of exactly 32 raw bytes.

    Returns:
        bytes: the raw key.

    Raises:
        KeyLoadError:
            If the file is missing, unreadable, not base64, or of the wrong length.
    """
    try:
        encoded = Path(path).read_text(encoding='ascii').strip()
    except (OSError, UnicodeDecodeError) as e:
        raise KeyLoadError(f"Can't read encryption key file {path}.") from e

    try:
        key = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise KeyLoadError(f'Encryption key file {path} is not valid base64.') from e

    if len(key) != Crypto.KEY_SIZE:
        raise KeyLoadError(f'Encryption key in {path} must be {Crypto.KEY_SIZE} bytes (given length: {len(key)}).')
    return key


def generate_key_file(path: str | Path, overwrite: bool = False) -> Path:
    """Write a new random AES-256 key, base64-encoded, readable by the owner only

    Raises:
        FileExistsError:
            If the key file exists and overwrite is False.
    """
    path = Path(path)
    if path.exists() and not overwrite:
        raise FileExistsError(f'Refusing to overwrite existing key file {path}.')

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(base64.b64encode(secrets.token_bytes(Crypto.KEY_SIZE)).decode('ascii'), encoding='ascii')
    os.chmod(path, 0o600)
    return path


class CryptoGuard:
    """Seal and open stored URL payloads.

    The key is immutable after construction, so one guard is safely shared by
    all worker threads.

    Args:
        key (bytes | None):
            Raw 32-byte AES key. None disables encryption: seal() writes plain
            payloads and open() rejects sealed ones.

    Raises:
        KeyLoadError:
            If the key has the wrong length.
    """

    def __init__(self, key: bytes | None = None):
        if key is not None and len(key) != Crypto.KEY_SIZE:
            raise KeyLoadError(f'Encryption key must be {Crypto.KEY_SIZE} bytes (given length: {len(key)}).')
        self._aead = AESGCM(key) if key is not None else None

    @classmethod
    def from_key_file(cls, path: str | Path) -> 'CryptoGuard':
        return cls(load_key(path))

    @classmethod
    def disabled(cls) -> 'CryptoGuard':
        return cls(None)

    @property
    def enabled(self) -> bool:
        return self._aead is not None

    def seal(self, plaintext: str) -> bytes:
        """Encode a URL as a stored payload, encrypted if a key is configured

        A fresh random nonce is drawn on every call, so sealing the same URL
        twice yields different payloads.
        """
        data = plaintext.encode('utf-8')
        if self._aead is None:
            return bytes([PayloadFormat.PLAIN]) + data

        nonce = secrets.token_bytes(Crypto.NONCE_SIZE)
        return bytes([PayloadFormat.SEALED]) + nonce + self._aead.encrypt(nonce, data, None)

    def open(self, payload: bytes) -> str:
        """Decode a stored payload back to the URL

        Raises:
            DecryptionError:
                If the payload is empty, has an unknown format marker, is sealed
                while encryption is disabled, fails authentication, or does not
                decode to UTF-8.
        """
        if not payload:
            raise DecryptionError('Stored payload is empty.')

        marker, body = payload[0], payload[1:]
        if marker == PayloadFormat.PLAIN:
            data = body
        elif marker == PayloadFormat.SEALED:
            data = self._decrypt(body)
        else:
            raise DecryptionError(f'Unknown payload format marker 0x{marker:02x}.')

        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecryptionError('Stored payload is not valid UTF-8.') from e

    def _decrypt(self, body: bytes) -> bytes:
        if self._aead is None:
            raise DecryptionError('Payload is sealed but encryption is disabled (no key loaded).')
        # 16 is the length of the GCM authentication tag
        if len(body) < Crypto.NONCE_SIZE + 16:
            raise DecryptionError('Sealed payload is too short.')

        nonce, ciphertext = body[: Crypto.NONCE_SIZE], body[Crypto.NONCE_SIZE :]
        try:
            return self._aead.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise DecryptionError('Sealed payload failed authentication.') from e
