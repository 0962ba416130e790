import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from usercrypt.core import DecryptionError, Decryptor, KeyDeriver
from usercrypt.models import EncryptedPayload
from usercrypt.shared import Config, Logger, apply_logging_config, load_config
from usercrypt.shared.config import DEFAULT_CONFIG_PATH

logger = Logger(__name__).get_logger()


# ================================================================================
#       Helpers
# ================================================================================
def read_input(value: str) -> str:
    """``-`` reads stdin, anything else is taken literally."""
    if value == "-":
        return sys.stdin.read().strip()
    return value


def read_file(value: str) -> str:
    if value == "-":
        return sys.stdin.read()
    return Path(value).read_text(encoding="utf-8")


def build_decryptor(config: Config, secret: str | None) -> Decryptor:
    key_deriver = KeyDeriver(
        secret if secret is not None else config.encryption.base_secret,
        cache_size=config.encryption.key_cache_size,
    )
    return Decryptor(key_deriver)


# ================================================================================
#       Commands
# ================================================================================
def cmd_derive_key(args, config: Config) -> int:
    decryptor = build_decryptor(config, args.secret)
    print(decryptor.key_deriver.derive(args.user_id).hex())
    return 0


def cmd_decrypt(args, config: Config) -> int:
    decryptor = build_decryptor(config, args.secret)
    plaintext = decryptor.decrypt(read_input(args.payload), args.user_id)

    if args.json:
        plaintext = json.dumps(json.loads(plaintext), indent=2, ensure_ascii=False)

    print(plaintext)
    return 0


def cmd_decrypt_envelope(args, config: Config) -> int:
    decryptor = build_decryptor(config, args.secret)
    envelope = EncryptedPayload.model_validate_json(read_file(args.file))
    if envelope.date:
        logger.info("Envelope date: %s", envelope.date)

    print(envelope.decrypt(decryptor, args.user_id))
    return 0


# ================================================================================
#       Command Line
# ================================================================================
def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="usercrypt",
        description="Decrypt per-user AES encrypted API payloads",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"TOML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--user-id", required=True, help="User id (Bearer token)")
    common.add_argument(
        "--secret",
        help="Base secret, overrides the configured one and ENCRYPTION_KEY",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    derive = subparsers.add_parser(
        "derive-key", parents=[common], help="Print the derived key as hex"
    )
    derive.set_defaults(handler=cmd_derive_key)

    decrypt = subparsers.add_parser(
        "decrypt", parents=[common], help="Decrypt a base64 payload"
    )
    decrypt.add_argument("payload", help="Base64 payload, or - to read stdin")
    decrypt.add_argument(
        "--json", action="store_true", help="Pretty-print the plaintext as JSON"
    )
    decrypt.set_defaults(handler=cmd_decrypt)

    envelope = subparsers.add_parser(
        "decrypt-envelope",
        parents=[common],
        help='Decrypt an {"encryptedData": ...} response body',
    )
    envelope.add_argument("file", help="JSON file, or - to read stdin")
    envelope.set_defaults(handler=cmd_decrypt_envelope)

    return parser.parse_args(argv)


def welcome(config: Config):
    for line in config.general.title.split("\n"):
        logger.debug(line)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)
    apply_logging_config(config)
    welcome(config)

    try:
        return args.handler(args, config)
    except DecryptionError as e:
        logger.debug("Command %s failed: %s (%s)", args.command, e, e.cause.value)
        print(f"error: {e}", file=sys.stderr)
    except json.JSONDecodeError as e:
        print(f"error: decrypted payload is not JSON: {e}", file=sys.stderr)
    except ValidationError as e:
        print(f"error: invalid envelope: {e}", file=sys.stderr)
    except UnicodeDecodeError:
        print("error: input file is not UTF-8 text", file=sys.stderr)
    except ValueError as e:
        # Configuration problems such as an empty --secret
        print(f"error: {e}", file=sys.stderr)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)

    return 1


if __name__ == "__main__":
    sys.exit(main())
