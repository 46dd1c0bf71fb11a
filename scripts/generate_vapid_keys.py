"""Generate a VAPID key pair for Web Push and print it as ``.env`` lines."""

from __future__ import annotations

import argparse
import base64
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec


def _to_base64_url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def generate_vapid_keys() -> tuple[str, str]:
    """Return ``(public_key, private_key)`` encoded as unpadded base64url.

    The public key is the uncompressed P-256 point browsers expect as
    ``applicationServerKey``; the private key is the raw 32 byte scalar
    accepted by ``pywebpush``.
    """

    private_key = ec.generate_private_key(ec.SECP256R1())
    private_bytes = private_key.private_numbers().private_value.to_bytes(32, byteorder="big")
    public_bytes = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return _to_base64_url(public_bytes), _to_base64_url(private_bytes)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--subject", default="mailto:admin@booknex.com")
    parser.add_argument("--output", type=Path, help="Append the keys to this env file")
    args = parser.parse_args()

    public_key, private_key = generate_vapid_keys()
    lines = [
        f"VAPID_PUBLIC_KEY={public_key}",
        f"VAPID_PRIVATE_KEY={private_key}",
        f"VAPID_SUBJECT={args.subject}",
    ]
    if args.output:
        with args.output.open("a", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")
        print(f"Keys saved to {args.output}")
        return
    print("\n".join(lines))


if __name__ == "__main__":
    main()
