"""Exception definitions for bucket-cache API"""

from ..constants import ErrorCode


class BucketCacheError(Exception):
    """Base exception for bucket-cache"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ArchiveError(BucketCacheError):
    """Tar invocation error carrying the tool's exit code and output"""

    def __init__(self, message: str, exit_code: int, output: str, error_code: str = None):
        if output:
            message = f"{message}\n{output}"
        super().__init__(message, error_code)
        self.exit_code = exit_code
        self.output = output


class ArchiveCreationError(ArchiveError):
    """Archive creation failed"""

    def __init__(self, exit_code: int, output: str = ""):
        super().__init__(
            f"tar failed to create archive (exit code {exit_code})",
            exit_code,
            output,
            ErrorCode.ARCHIVE_CREATION_FAILED
        )


class ArchiveExtractionError(ArchiveError):
    """Archive extraction failed"""

    def __init__(self, exit_code: int, output: str = ""):
        super().__init__(
            f"tar failed to extract archive (exit code {exit_code})",
            exit_code,
            output,
            ErrorCode.ARCHIVE_EXTRACTION_FAILED
        )


class UnknownCompressionMethodError(BucketCacheError):
    """Compression method tag is not one of the known literals"""

    def __init__(self, tag):
        super().__init__(
            f"Unrecognized compression method: {tag!r}",
            ErrorCode.UNKNOWN_COMPRESSION_METHOD
        )
        self.tag = tag


class ConfigError(BucketCacheError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class StorageError(BucketCacheError):
    """Storage operation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STORAGE_CONNECTION_FAILED)


class CacheNotFoundError(BucketCacheError):
    """No cache object matched the key or any restore key"""

    def __init__(self, key: str):
        super().__init__(f"Cache not found: {key}", ErrorCode.CACHE_NOT_FOUND)
        self.key = key
