import base64


def tamper_payload(payload: str, byte: int = -1, bit: int = 0, truncate: bool = False) -> str:
    """Flip one bit of a base64 payload, or drop its last byte."""
    raw = bytearray(base64.b64decode(payload, validate=True))
    if not raw:
        raise ValueError("payload is empty")

    if truncate:
        return base64.b64encode(bytes(raw[:-1])).decode()

    if not 0 <= bit < 8:
        raise ValueError(f"bit must be in 0..7, got {bit}")

    raw[byte] ^= 1 << bit
    return base64.b64encode(bytes(raw)).decode()


if __name__ == "__main__":
    import argparse

    def parse_args():
        parser = argparse.ArgumentParser(
            description="Simulate ciphertext tampering on a base64 payload"
        )
        parser.add_argument("payload", type=str, help="Base64 payload to corrupt")
        parser.add_argument(
            "--byte",
            type=int,
            default=-1,
            help="Index of the byte to modify (default: last byte)",
        )
        parser.add_argument(
            "--bit", type=int, default=0, help="Bit to flip, 0..7 (default: 0)"
        )
        parser.add_argument(
            "--truncate",
            action="store_true",
            help="Drop the last byte instead of flipping a bit",
        )
        return parser.parse_args()

    args = parse_args()
    tampered = tamper_payload(args.payload, args.byte, args.bit, args.truncate)
    print(f"[✔] Tampered payload: {tampered}")
