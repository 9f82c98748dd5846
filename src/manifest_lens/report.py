from __future__ import annotations

from dataclasses import dataclass

from manifest_lens.licenses import LicenseWeights
from manifest_lens.models import DependencySource


@dataclass(frozen=True, slots=True)
class ScanReport:
    """
    单个项目的扫描结果（清单与 requirements.txt 合并后）。
    """

    path: str
    name: str | None
    dependencies: tuple[str, ...]
    licenses: LicenseWeights
    sources: tuple[DependencySource, ...]

    @property
    def has_dependency_info(self) -> bool:
        """
        是否至少有一个来源提供了依赖信息（可能为空集合）。
        """
        return bool(self.sources)
