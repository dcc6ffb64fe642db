"""Global constants for s3apt"""

from enum import Enum

APP_NAME = "s3apt"
LOG_FORMAT = "%(message)s"

# Configuration
CONFIG_FILE = ".s3apt.yaml"
DEFAULT_CODENAME = "stable"
DEFAULT_COMPONENT = "main"
DEFAULT_ARCHITECTURES = ["amd64"]
DEFAULT_GPG_BINARY = "gpg"
DEFAULT_VISIBILITY = "public"
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

# Object store key layout
DISTS_DIR = "dists"
POOL_DIR = "pool"
PACKAGES_FILE = "Packages"
PACKAGES_GZ_FILE = "Packages.gz"
RELEASE_FILE = "Release"
INRELEASE_FILE = "InRelease"
SIGNATURE_SUFFIX = ".gpg"
BY_HASH_DIR = "by-hash"

# Content types
CONTENT_TYPE_PACKAGE = "application/octet-stream; charset=binary"
CONTENT_TYPE_TEXT = "text/plain; charset=UTF-8"
CONTENT_TYPE_GZIP = "application/x-gzip; charset=binary"
CONTENT_TYPE_SIGNATURE = "application/pgp-signature; charset=UTF-8"

# Digest algorithms in release order, with their by-hash directory labels.
# MD5 is labelled "MD5Sum" while the others use the bare upper-case name.
HASH_ALGORITHMS = ["md5", "sha1", "sha256"]
BY_HASH_LABELS = {
    "md5": "MD5Sum",
    "sha1": "SHA1",
    "sha256": "SHA256",
}
RELEASE_CHECKSUM_FIELDS = {
    "md5": "MD5Sum",
    "sha1": "SHA1",
    "sha256": "SHA256",
}
# Hex digest length -> algorithm, used when reading Release checksum blocks
DIGEST_LENGTHS = {
    32: "md5",
    40: "sha1",
    64: "sha256",
}

RELEASE_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S UTC"


class StorageType(Enum):
    MEMORY = "memory"
    FILESYSTEM = "filesystem"
    S3 = "s3"


# Canned S3 ACLs by visibility name
S3_VISIBILITY_ACLS = {
    "public": "public-read",
    "private": "private",
    "authenticated": "authenticated-read",
    "bucket_owner": "bucket-owner-full-control",
}


class ErrorCode:
    PARSE_ERROR = "SA001"
    CONFIG_ERROR = "SA003"
    STORAGE_ERROR = "SA004"
    PACKAGE_NOT_FOUND = "SA010"
    ALREADY_EXISTS = "SA012"
    SIGNING_FAILED = "SA020"


# Environment variables
ENV_CONFIG_PATH = "S3APT_CONFIG"
ENV_SIGNING_KEY = "S3APT_SIGNING_KEY"
ENV_S3_ACCESS_KEY = "AWS_ACCESS_KEY_ID"
ENV_S3_SECRET_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_S3_REGION = "AWS_DEFAULT_REGION"
