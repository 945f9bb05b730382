import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from wut.wut_errors import UnknownAssetError
from wut.wut_host import AssetHost, ProgressSink

logger = logging.getLogger(__name__)

ForwardDeps = Union[Callable[[str], Iterable[str]], Mapping[str, Iterable[str]]]


def _as_lookup(forward_deps_of: ForwardDeps) -> Callable[[str], Iterable[str]]:
    if callable(forward_deps_of):
        return forward_deps_of
    return lambda asset: forward_deps_of.get(asset, ())


class DependencyIndex:
    """
    Reverse dependency map: asset path -> assets that directly reference it.

    Built once from a snapshot of the whole asset universe and afterwards only
    changed through on_asset_deleted().
    """

    def __init__(self, dependants: Optional[Dict[str, List[str]]] = None):
        self._dependants: Dict[str, List[str]] = dependants if dependants is not None else {}

    @classmethod
    def build(cls, all_assets: Iterable[str], forward_deps_of: ForwardDeps,
              progress: Optional[ProgressSink] = None) -> "DependencyIndex":
        lookup = _as_lookup(forward_deps_of)

        dependants: Dict[str, List[str]] = {}
        for asset in all_assets:
            dependants.setdefault(asset, [])

        scan_order = list(dependants)
        total = len(scan_order)

        for i, asset in enumerate(scan_order):
            if progress:
                progress(i, total)

            for dep in lookup(asset) or ():
                if dep == asset or dep not in dependants:
                    continue
                sources = dependants[dep]
                # hosts may report the same package as both hard and soft
                if sources and sources[-1] == asset:
                    continue
                sources.append(asset)

        if progress:
            progress(total, total)

        index = cls(dependants)
        logger.info(
            f"Dependency index built: Assets={len(index)} Edges={index.edge_count()}"
        )
        return index

    # -----------------------------
    # Lookups
    # -----------------------------

    def __contains__(self, asset_id: str) -> bool:
        return asset_id in self._dependants

    def __len__(self) -> int:
        return len(self._dependants)

    def assets(self) -> List[str]:
        return list(self._dependants)

    def edge_count(self) -> int:
        return sum(len(v) for v in self._dependants.values())

    def stats(self) -> Dict[str, int]:
        return {
            "asset_count": len(self._dependants),
            "edge_count": self.edge_count(),
            "unreferenced_count": sum(1 for v in self._dependants.values() if not v),
        }

    def get_all_dependants(self, asset_id: str) -> List[str]:
        """Direct dependants of `asset_id`; raises UnknownAssetError if not indexed."""
        try:
            return self._dependants[asset_id]
        except KeyError:
            raise UnknownAssetError(asset_id) from None

    def get_dependants_or_empty(self, asset_ids: Iterable[str]) -> Dict[str, List[str]]:
        """Batch lookup that tolerates unknown assets (bound to an empty list)."""
        results: Dict[str, List[str]] = {}
        for asset_id in asset_ids:
            if asset_id in self._dependants:
                results[asset_id] = self._dependants[asset_id]
            else:
                logger.warning(f"Not aware of asset at path {asset_id}")
                results[asset_id] = []
        return results

    # -----------------------------
    # Mutation
    # -----------------------------

    def on_asset_deleted(self, asset_id: str):
        self._dependants.pop(asset_id, None)
        for sources in self._dependants.values():
            if asset_id in sources:
                sources[:] = [s for s in sources if s != asset_id]


def build_index(host: AssetHost, progress: Optional[ProgressSink] = None) -> DependencyIndex:
    return DependencyIndex.build(
        host.list_all_assets(),
        lambda asset: host.get_dependencies(asset, recursive=False),
        progress=progress,
    )
