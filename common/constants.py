"""Project-wide constants (byte units, chunking tiers, verification retry)."""

KIB: int = 1024
MIB: int = 1024 * KIB

# Files below this size are always cut into exactly two halves.
SMALL_FILE_THRESHOLD: int = 64 * KIB
SMALL_FILE_MIN_CHUNK_SIZE: int = 1 * KIB

MIN_CHUNK_COUNT: int = 2

# (exclusive upper bound, nominal chunk size), checked in order.
CHUNK_SIZE_TIERS: tuple[tuple[int, int], ...] = (
    (256 * KIB, 128 * KIB),
    (1 * MIB, 256 * KIB),
    (5 * MIB, 512 * KIB),
    (10 * MIB, 1 * MIB),
    (100 * MIB, 2 * MIB),
)
LARGEST_TIER_CHUNK_SIZE: int = 5 * MIB

CHECKSUM_READ_SIZE: int = 64 * KIB

VERIFY_MAX_ATTEMPTS: int = 3
VERIFY_SETTLE_DELAY_SECONDS: float = 0.1
VERIFY_RETRY_BACKOFF_SECONDS: float = 0.5

FILESYSTEM_PROVIDER_NAME: str = "FileSystem"
DATABASE_PROVIDER_NAME: str = "Database"

DEFAULT_CHUNK_STORAGE_PATH: str = "./data/chunks"
DEFAULT_BLOB_DATABASE_PATH: str = "./data/chunk_blobs.db"
DEFAULT_METADATA_DATABASE_PATH: str = "./data/metadata.db"
