import logging
import os
from typing import Tuple

from selfsign.common.utils import sha256_hex

logger = logging.getLogger(__name__)


def write_pair(cert_pem: bytes, key_pem: bytes, out_dir: str = "certs",
               name: str = "server") -> Tuple[str, str]:
    os.makedirs(out_dir, exist_ok=True)
    cert_path = os.path.join(out_dir, f"{name}.cert.pem")
    key_path = os.path.join(out_dir, f"{name}.key.pem")
    with open(cert_path, "wb") as f:
        f.write(cert_pem)
    # private key is only readable by its owner
    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(key_pem)
    os.chmod(key_path, 0o600)
    logger.info("wrote %s and %s", cert_path, key_path)
    return cert_path, key_path


def sha256_of_file(path):
    with open(path, "rb") as f:
        return sha256_hex(f.read())
