"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .package import PackageRecord


@dataclass
class PublishResult:
    """Result of an upload or delete operation"""

    success: bool
    codename: str
    component: Optional[str] = None
    written_keys: List[str] = field(default_factory=list)
    added: List[PackageRecord] = field(default_factory=list)
    removed: List[PackageRecord] = field(default_factory=list)
    error: Optional[str] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def complete(self) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "success": self.success,
            "codename": self.codename,
            "component": self.component,
            "written_keys": self.written_keys,
            "added": [str(p) for p in self.added],
            "removed": [str(p) for p in self.removed],
            "error": self.error,
            "duration": self.duration,
        }


@dataclass
class MissingPackage:
    """A record whose pool file is absent from the store"""
    architecture: str
    record: PackageRecord


@dataclass
class VerifyResult:
    """Result of a repository verification"""

    codename: str
    component: str
    checked: int = 0
    missing: List[MissingPackage] = field(default_factory=list)
    fixed: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.missing
