"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..api.exceptions import ConfigError, UnknownCompressionMethodError
from ..constants import DEFAULT_KEY_FILE_NAME, DEFAULT_STORAGE_TYPE, StorageType
from ..core.compression.method import CompressionMethod


def _as_list(value, separator: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(separator)
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass
class CacheConfig:
    """Settings for one save or restore run"""

    bucket: str
    key: str
    paths: List[str] = field(default_factory=list)
    restore_keys: List[str] = field(default_factory=list)
    key_file_name: str = DEFAULT_KEY_FILE_NAME
    compression_method: Optional[CompressionMethod] = None
    working_dir: str = "."
    fail_on_cache_miss: bool = False

    # Storage
    storage_type: str = DEFAULT_STORAGE_TYPE
    endpoint: Optional[str] = None
    region: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None

    # Additional backend options
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration"""
        if not self.bucket:
            raise ConfigError("Input required and not supplied: bucket")
        if not self.key:
            raise ConfigError("Input required and not supplied: key")
        if not self.key_file_name:
            self.key_file_name = DEFAULT_KEY_FILE_NAME

        try:
            StorageType(self.storage_type)
        except ValueError:
            raise ConfigError(f"Invalid storage type: {self.storage_type}")

        if isinstance(self.compression_method, str):
            self.compression_method = self.parse_compression_preference(self.compression_method)

    @staticmethod
    def parse_compression_preference(value: Optional[str]) -> Optional[CompressionMethod]:
        """Parse a configured preference, empty means no preference"""
        if not value:
            return None
        try:
            return CompressionMethod.from_tag(value.strip())
        except UnknownCompressionMethodError:
            choices = ", ".join(m.value for m in CompressionMethod)
            raise ConfigError(f"Invalid compression method: {value!r} (expected one of: {choices})")

    @property
    def storage(self) -> StorageType:
        """Get StorageType enum"""
        return StorageType(self.storage_type)

    @property
    def object_key(self) -> str:
        """Object name of the archive for the primary key"""
        return self.object_key_for(self.key)

    def object_key_for(self, key: str) -> str:
        return f"{key}/{self.key_file_name}"

    def require_paths(self) -> List[str]:
        """Get the cached paths, raising if none are configured"""
        if not self.paths:
            raise ConfigError("Input required and not supplied: path")
        return self.paths

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CacheConfig':
        """Create from dictionary, accepting both ``restore-keys`` and ``restore_keys`` style names"""
        data = {k.replace("-", "_"): v for k, v in data.items() if v is not None}

        known = set(cls.__dataclass_fields__)
        # `path` is the action input name for `paths`
        if "path" in data and "paths" not in data:
            data["paths"] = data.pop("path")
        extra = {k: data.pop(k) for k in list(data) if k not in known}

        data["paths"] = _as_list(data.get("paths"), "\n")
        data["restore_keys"] = _as_list(data.get("restore_keys"), ",")
        if isinstance(data.get("fail_on_cache_miss"), str):
            data["fail_on_cache_miss"] = data["fail_on_cache_miss"].strip().lower() == "true"

        options = dict(data.get("options") or {})
        options.update(extra)
        data["options"] = options

        return cls(
            bucket=data.pop("bucket", ""),
            key=data.pop("key", ""),
            **data
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, without credentials"""
        return {
            "bucket": self.bucket,
            "key": self.key,
            "paths": list(self.paths),
            "restore_keys": list(self.restore_keys),
            "key_file_name": self.key_file_name,
            "compression_method": self.compression_method.value if self.compression_method else None,
            "working_dir": self.working_dir,
            "fail_on_cache_miss": self.fail_on_cache_miss,
            "storage_type": self.storage_type,
            "endpoint": self.endpoint,
            "region": self.region,
        }
