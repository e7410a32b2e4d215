"""Global constants for bucket-cache"""

from enum import Enum
import re

APP_NAME = "bucket-cache"

LOG_FORMAT = "%(message)s"

# Compression negotiation
ZSTD_WITHOUT_LONG_VERSION = "1.3.2"  # zstd --long requires at least this release
PROBE_TIMEOUT = 10  # seconds
ZSTD_SIGNATURE = "zstd command line interface"
LZ4_SIGNATURE = "lz4 command line interface"
TOOL_VERSION_PATTERN = re.compile(r"v(\d+(?:\.\d+)*)")

# Cache objects
DEFAULT_KEY_FILE_NAME = "cache.tar"
METADATA_COMPRESSION_METHOD = "compression-method"
METADATA_SIDECAR_SUFFIX = ".meta.json"

DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB

# Action inputs and outputs
INPUT_BUCKET = "bucket"
INPUT_PATH = "path"
INPUT_KEY = "key"
INPUT_RESTORE_KEYS = "restore-keys"
INPUT_KEY_FILE_NAME = "key-file-name"
INPUT_COMPRESSION_METHOD = "compression-method"
INPUT_STORAGE_TYPE = "storage-type"
INPUT_ENDPOINT = "endpoint"
INPUT_REGION = "region"

OUTPUT_CACHE_HIT = "cache-hit"
OUTPUT_MATCHED_KEY = "cache-matched-key"


class StorageType(Enum):
    FILESYSTEM = "filesystem"
    BOS = "bos"
    S3 = "s3"


DEFAULT_STORAGE_TYPE = StorageType.S3.value


class ErrorCode:
    CONFIG_FORMAT_ERROR = "BC001"
    STORAGE_CONNECTION_FAILED = "BC004"
    CACHE_NOT_FOUND = "BC010"
    ARCHIVE_CREATION_FAILED = "BC020"
    ARCHIVE_EXTRACTION_FAILED = "BC021"
    UNKNOWN_COMPRESSION_METHOD = "BC022"


# Environment variables
ENV_GITHUB_OUTPUT = "GITHUB_OUTPUT"
ENV_RUNNER_TEMP = "RUNNER_TEMP"
ENV_BOS_ACCESS_KEY = "BOS_AK"
ENV_BOS_SECRET_KEY = "BOS_SK"
ENV_BOS_ENDPOINT = "BOS_ENDPOINT"
ENV_S3_ACCESS_KEY = "AWS_ACCESS_KEY_ID"
ENV_S3_SECRET_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_S3_REGION = "AWS_DEFAULT_REGION"
ENV_S3_ENDPOINT = "AWS_ENDPOINT_URL"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_INFO = "🔹"

MSG_USING_METHOD = f"{EMOJI_INFO} Using '{{method}}' compression method."
MSG_DETECTED_METHOD = f"{EMOJI_INFO} Detected '{{method}}' compression method from object metadata."
MSG_CACHE_SAVED = f"{EMOJI_SUCCESS} Cache saved with key: {{key}} ({{size}})"
MSG_CACHE_RESTORED = f"{EMOJI_SUCCESS} Cache restored from key: {{key}}"
MSG_CACHE_EXISTS = f"{EMOJI_WARNING} Cache already exists for key: {{key}}, skipping upload."
MSG_CACHE_MISS = f"{EMOJI_WARNING} Cache not found for key: {{key}}"
