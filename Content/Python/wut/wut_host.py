import abc
import logging
from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

# Called with (done, total) while the index is being built
ProgressSink = Callable[[int, int], None]

DEFAULT_PROGRESS_STEP_PERCENT = 10


class AssetHost(abc.ABC):
    """
    Capabilities the dependency index needs from the content host:
    - list every asset path
    - list an asset's forward dependencies
    - delete an asset
    """

    @abc.abstractmethod
    def list_all_assets(self) -> List[str]:
        ...

    @abc.abstractmethod
    def get_dependencies(self, asset_id: str, recursive: bool = False) -> List[str]:
        ...

    @abc.abstractmethod
    def delete_asset(self, asset_id: str) -> bool:
        ...


class LogProgress:
    """Progress sink that logs once every `step_percent` percent."""

    def __init__(self, label: str = "Building dependency index",
                 step_percent: int = DEFAULT_PROGRESS_STEP_PERCENT):
        self.label = label
        self.step_percent = max(1, step_percent)
        self._last_reported = -1

    def __call__(self, done: int, total: int):
        if total <= 0:
            return
        percent = int(done * 100 / total)
        bucket = percent - percent % self.step_percent
        if bucket <= self._last_reported:
            return
        self._last_reported = bucket
        logger.info(f"{self.label}: {bucket}% ({done}/{total})")

    def close(self):
        self._last_reported = -1


class InMemoryAssetHost(AssetHost):
    """
    Dict-backed host: asset path -> direct forward dependencies.
    Used to exercise sessions outside the editor.
    """

    def __init__(self, forward_deps: Dict[str, Iterable[str]],
                 fail_deletes: Optional[Iterable[str]] = None):
        self._forward: Dict[str, List[str]] = {
            asset: list(deps) for asset, deps in forward_deps.items()
        }
        self.fail_deletes: Set[str] = set(fail_deletes or ())
        self.deleted: List[str] = []

    def list_all_assets(self) -> List[str]:
        return list(self._forward)

    def get_dependencies(self, asset_id: str, recursive: bool = False) -> List[str]:
        direct = list(self._forward.get(asset_id, []))
        if not recursive:
            return direct

        seen = {asset_id}
        out = []
        queue = deque(direct)
        while queue:
            dep = queue.popleft()
            if dep in seen:
                continue
            seen.add(dep)
            out.append(dep)
            queue.extend(self._forward.get(dep, []))
        return out

    def delete_asset(self, asset_id: str) -> bool:
        if asset_id not in self._forward or asset_id in self.fail_deletes:
            return False

        del self._forward[asset_id]
        for deps in self._forward.values():
            deps[:] = [d for d in deps if d != asset_id]
        self.deleted.append(asset_id)
        return True
