"""
Issue a self-signed certificate and key.
Usage: selfsign-gen --host example.test --ecdsa-curve P256
Produces:
  <out>/<name>.cert.pem
  <out>/<name>.key.pem
Unset options fall back to SELFSIGN_* environment variables (a .env file is
read if present), then to the built-in defaults.
"""
import argparse
import logging
import sys
from datetime import datetime

from pydantic import ValidationError

from selfsign.common.config import load_settings, request_from_env
from selfsign.common.errors import CertGenError
from selfsign.common.protocol import GenerationRequest
from selfsign.crypto.pki import validity_window
from selfsign.engine import generate
from selfsign.storage.artifacts import write_pair


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="selfsign-gen", description="Generate a self-signed TLS certificate.")
    p.add_argument("--host", dest="hostname", help="hostname to issue for (default: this machine)")
    p.add_argument("--start-date", dest="valid_from", type=datetime.fromisoformat,
                   help="ISO 8601 start of validity (default: now)")
    p.add_argument("--duration", dest="valid_for_days", type=int, help="days of validity (default: 365)")
    p.add_argument("--ca", dest="is_authority", action="store_true", default=None,
                   help="make the certificate its own certificate authority")
    p.add_argument("--rsa-bits", dest="rsa_bits", type=int, help="RSA key size (default: 2048)")
    p.add_argument("--ecdsa-curve", dest="curve", help="P224, P256, P384 or P521")
    p.add_argument("--ed25519", dest="use_ed25519", action="store_true", default=None,
                   help="generate an Ed25519 key")
    p.add_argument("--out", dest="out_dir", help="output directory")
    p.add_argument("--name", help="file name stem for the PEM files")
    p.add_argument("--env-file", help="dotenv file to load")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = load_settings(args.env_file)
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    overrides = {k: v for k, v in vars(args).items()
                 if k in GenerationRequest.model_fields and v is not None}
    try:
        request = request_from_env()
        request = GenerationRequest(**{**request.model_dump(exclude_none=True), **overrides})
    except ValidationError as e:
        print("invalid certificate options:", e)
        return 1

    try:
        issued = generate(request)
        cert_pem, key_pem = issued.pem()
    except CertGenError as e:
        print("certificate generation failed:", e)
        return 1

    cert_path, key_path = write_pair(cert_pem, key_pem,
                                     args.out_dir or settings.out_dir,
                                     args.name or settings.name)
    print(f"Generated {key_path} and {cert_path}")
    not_before, not_after = validity_window(issued.certificate)
    print(f"{issued.key_pair.family.value} key, valid {not_before:%Y-%m-%d %H:%M:%S} to "
          f"{not_after:%Y-%m-%d %H:%M:%S} UTC, sha256 {issued.fingerprint()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
