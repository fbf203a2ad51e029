"""
Deterministic identities for fuzz harnesses.

A label (any str or bytes) is hashed with keccak256 to give a signing
secret, and the secret is turned into an address with the usual secp256k1
public key derivation. Nothing is stored: the same label gives the same
(address, secret) pair in every process.
"""
import rlp
from eth_keys.datatypes import PrivateKey
from eth_utils import to_canonical_address, to_checksum_address

from fuzzstd.exceptions import InvalidSecretRange
from fuzzstd.utils import SECP256K1_N, keccak256, to_bytes


def secret_from_label(label) -> int:
    return int.from_bytes(keccak256(to_bytes(label)), "big")


def _private_key(secret: int) -> PrivateKey:
    if isinstance(secret, bool) or not isinstance(secret, int) or not 0 < secret < SECP256K1_N:
        raise InvalidSecretRange(
            f"secret is outside the secp256k1 scalar range: {secret!r}",
            hint="valid secrets are in [1, SECP256K1_N - 1]",
        )
    return PrivateKey(secret.to_bytes(32, "big"))


def secret_to_identity(secret: int) -> str:
    return _private_key(secret).public_key.to_checksum_address()


def derive_identity_and_secret(label, host=None) -> tuple[str, int]:
    """
    Derive the (address, secret) pair for `label`.

    If `host` is given, its `addr` capability turns the secret into an
    address; otherwise the local secp256k1 derivation is used. Both reject
    a secret outside the curve order with `InvalidSecretRange`.
    """
    secret = secret_from_label(label)
    if host is None:
        identity = secret_to_identity(secret)
    else:
        identity = host.addr(secret)
    return identity, secret


def derive_identity(label, host=None) -> str:
    identity, _ = derive_identity_and_secret(label, host=host)
    return identity


def sign(secret: int, digest: bytes) -> tuple[int, int, int]:
    """
    Sign a 32-byte digest, returning (v, r, s) with v in {27, 28}.
    """
    digest = bytes(digest)
    if len(digest) != 32:
        raise ValueError(f"digest must be 32 bytes, got {len(digest)}")
    signature = _private_key(secret).sign_msg_hash(digest)
    return signature.v + 27, signature.r, signature.s


# address of a contract created by `deployer` with CREATE
def compute_create_address(deployer, nonce: int) -> str:
    sender = to_canonical_address(deployer)
    return to_checksum_address(keccak256(rlp.encode([sender, nonce]))[12:])


# address of a contract created by `deployer` with CREATE2
def compute_create2_address(deployer, salt: bytes, initcode: bytes) -> str:
    salt = bytes(salt)
    if len(salt) != 32:
        raise ValueError(f"salt must be 32 bytes, got {len(salt)}")
    prefix = b"\xff" + to_canonical_address(deployer) + salt
    return to_checksum_address(keccak256(prefix + keccak256(bytes(initcode)))[12:])
