"""Operation result models"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.compression.method import CompressionMethod


@dataclass
class SaveResult:
    """Cache save result"""
    key: str
    object_key: str
    saved: bool
    compression_method: Optional[CompressionMethod] = None
    archive_size: int = 0
    duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "object_key": self.object_key,
            "saved": self.saved,
            "compression_method": self.compression_method.value if self.compression_method else None,
            "archive_size": self.archive_size,
            "duration": self.duration,
        }


@dataclass
class RestoreResult:
    """Cache restore result"""
    key: str
    matched_key: Optional[str] = None
    compression_method: Optional[CompressionMethod] = None
    archive_size: int = 0
    duration: float = 0.0

    @property
    def cache_hit(self) -> bool:
        """True only when the primary key itself matched"""
        return self.matched_key is not None and self.matched_key == self.key

    @property
    def restored(self) -> bool:
        """True when any key, including a restore key, matched"""
        return self.matched_key is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "matched_key": self.matched_key,
            "cache_hit": self.cache_hit,
            "compression_method": self.compression_method.value if self.compression_method else None,
            "archive_size": self.archive_size,
            "duration": self.duration,
        }
