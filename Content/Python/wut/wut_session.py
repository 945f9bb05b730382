import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from wut import wut_closure, wut_index
from wut.wut_errors import AssetDeletionError
from wut.wut_host import AssetHost, LogProgress, ProgressSink

logger = logging.getLogger(__name__)


# -----------------------------
# Config
# -----------------------------

# Folders whose assets runtime code may load by path, so an empty
# dependant list does not prove they are unused.
DEFAULT_CODE_LOADABLE_MARKERS = (
    "/Resources/",
)


# -----------------------------
# Result models
# -----------------------------

@dataclass
class InvolvedAsset:
    asset_path: str
    is_checked: bool = False
    flags: List[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return wut_closure.asset_display_name(self.asset_path)

    @property
    def is_code_loadable(self) -> bool:
        return "code_loadable" in self.flags


@dataclass
class DeletionResult:
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


# -----------------------------
# Session
# -----------------------------

class WhatUsesThisSession:
    """
    State behind one "What Uses This" window.

    The dependency index is built on the first search and reused until the
    session is cleared (window closed, or the project changed in a way this
    session did not cause).
    """

    def __init__(self, host: AssetHost, progress: Optional[ProgressSink] = None,
                 code_loadable_markers: Iterable[str] = DEFAULT_CODE_LOADABLE_MARKERS):
        self.host = host
        self.progress = progress if progress is not None else LogProgress()
        self.code_loadable_markers = tuple(code_loadable_markers)

        self.index: Optional[wut_index.DependencyIndex] = None
        self.root_asset: Optional[str] = None
        self.involved_assets: List[InvolvedAsset] = []
        self.expected_project_changes = 0

    @property
    def is_waiting_for_project_changes(self) -> bool:
        return self.expected_project_changes > 0

    def ensure_index(self) -> wut_index.DependencyIndex:
        if self.index is None:
            try:
                self.index = wut_index.build_index(self.host, progress=self.progress)
            finally:
                # a failed build must not leave the progress sink open
                close = getattr(self.progress, "close", None)
                if close is not None:
                    close()
        return self.index

    def _flags_for(self, asset_path: str) -> List[str]:
        if any(marker in asset_path for marker in self.code_loadable_markers):
            return ["code_loadable"]
        return []

    def find_usages_of(self, asset_path: str) -> List[InvolvedAsset]:
        index = self.ensure_index()
        paths = wut_closure.find_transitive_dependants(asset_path, index)

        self.root_asset = asset_path
        self.involved_assets = [
            InvolvedAsset(asset_path=p, flags=self._flags_for(p)) for p in paths
        ]
        return self.involved_assets

    def select_all(self):
        check = any(not a.is_checked for a in self.involved_assets)
        for a in self.involved_assets:
            a.is_checked = check

    def checked_assets(self) -> List[str]:
        return [a.asset_path for a in self.involved_assets if a.is_checked]

    def delete_selected(self) -> DeletionResult:
        result = DeletionResult()

        for asset_path in self.checked_assets():
            try:
                ok = self.host.delete_asset(asset_path)
            except (AssetDeletionError, OSError) as e:
                logger.error(f"Failed to delete {asset_path}: {e}")
                result.failed.append(asset_path)
                continue

            if not ok:
                logger.error(f"Failed to delete {asset_path}")
                result.failed.append(asset_path)
                continue

            self.expected_project_changes += 1
            self._remove_deleted_asset(asset_path)
            logger.info(f"Deleted {asset_path}")
            result.deleted.append(asset_path)

        return result

    def _remove_deleted_asset(self, asset_path: str):
        self.involved_assets = [
            a for a in self.involved_assets if a.asset_path != asset_path
        ]
        if self.index is not None:
            self.index.on_asset_deleted(asset_path)

    def on_project_change(self):
        # Each deletion we made produces one project change notification
        if self.expected_project_changes > 0:
            self.expected_project_changes -= 1
            return

        logger.info("Unexpected project change, clearing dependency index")
        self.clear()

    def clear(self):
        self.index = None
        self.root_asset = None
        self.involved_assets = []
        self.expected_project_changes = 0
