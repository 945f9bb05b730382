from collections import deque
from typing import Iterable, List

from wut.wut_index import DependencyIndex


def asset_display_name(asset_path: str) -> str:
    # /Game/Props/SM_Chair -> SM_Chair
    if not asset_path:
        return ""
    return asset_path.rstrip("/").rsplit("/", 1)[-1]


def sort_by_display_name(asset_paths: Iterable[str]) -> List[str]:
    # plain str ordering is ordinal; full path keeps equal names stable
    return sorted(asset_paths, key=lambda p: (asset_display_name(p), p))


def find_transitive_dependants(start_asset: str, index: DependencyIndex) -> List[str]:
    """
    Every asset that directly or indirectly depends on `start_asset`,
    including `start_asset` itself, ordered by display name.

    Raises UnknownAssetError if `start_asset` is not in the index.
    """
    visited = set()
    queued = {start_asset}
    queue = deque([start_asset])

    while queue:
        current = queue.popleft()
        visited.add(current)

        for dependant in index.get_all_dependants(current):
            if dependant in queued:
                continue
            queued.add(dependant)
            queue.append(dependant)

    return sort_by_display_name(visited)
