import logging
from collections import deque
from typing import List, Optional

import unreal

from wut.wut_host import AssetHost

DEFAULT_CONTENT_ROOT = "/Game"

LOG_PREFIX = "[WUT]"

logger = logging.getLogger(__name__)


# -----------------------------
# Logging
# -----------------------------

class UnrealLogHandler(logging.Handler):
    """Forward `wut` log records to the editor Output Log."""

    def emit(self, record):
        try:
            msg = f"{LOG_PREFIX} {self.format(record)}"
        except Exception:
            self.handleError(record)
            return

        if record.levelno >= logging.ERROR:
            unreal.log_error(msg)
        elif record.levelno >= logging.WARNING:
            unreal.log_warning(msg)
        else:
            unreal.log(msg)


def install_unreal_logging(level=logging.INFO) -> logging.Logger:
    root = logging.getLogger("wut")
    if not any(isinstance(h, UnrealLogHandler) for h in root.handlers):
        root.addHandler(UnrealLogHandler())
    root.setLevel(level)
    # Output Log already shows everything we forward
    root.propagate = False
    return root


# -----------------------------
# Progress
# -----------------------------

class SlowTaskProgress:
    """
    Progress sink backed by an editor ScopedSlowTask dialog.
    The dialog opens on the first report and closes once done == total.
    """

    def __init__(self, label: str = "Building dependency index..."):
        self.label = label
        self._task = None
        self._done = 0

    def __call__(self, done: int, total: int):
        if self._task is None:
            self._task = unreal.ScopedSlowTask(max(total, 1), self.label)
            self._task.__enter__()
            self._task.make_dialog(False)

        step = done - self._done
        if step > 0:
            self._task.enter_progress_frame(step)
            self._done = done

        if done >= total:
            self.close()

    def close(self):
        if self._task is not None:
            self._task.__exit__(None, None, None)
        self._task = None
        self._done = 0


# -----------------------------
# Selection
# -----------------------------

def get_selected_package_name() -> Optional[str]:
    selected = unreal.EditorUtilityLibrary.get_selected_asset_data()
    if not selected:
        return None
    return str(selected[0].package_name)


# -----------------------------
# Host
# -----------------------------

class UnrealAssetHost(AssetHost):
    """Asset host backed by the editor Asset Registry. Identifiers are package names."""

    def __init__(self, content_root: str = DEFAULT_CONTENT_ROOT):
        self.content_root = content_root
        self.registry = unreal.AssetRegistryHelpers.get_asset_registry()
        self.dependency_options = unreal.AssetRegistryDependencyOptions(
            include_hard_package_references=True,
            include_soft_package_references=True,
            include_searchable_names=False,
            include_soft_management_references=False,
            include_hard_management_references=False,
        )

    def list_all_assets(self) -> List[str]:
        try:
            flt = unreal.ARFilter(
                package_paths=[self.content_root],
                recursive_paths=True
            )
            assets = self.registry.get_assets(flt) or []
            names = [str(a.package_name) for a in assets]
        except Exception as e:
            logger.warning(f"Asset Registry listing failed ({e}), using EditorAssetLibrary")
            paths = unreal.EditorAssetLibrary.list_assets(
                self.content_root, recursive=True, include_folder=False
            ) or []
            names = [str(p).split(".", 1)[0] for p in paths]

        # one package can hold several assets
        return list(dict.fromkeys(names))

    def _direct_dependencies(self, package_name: str) -> List[str]:
        deps = self.registry.get_dependencies(package_name, self.dependency_options) or []
        return [str(d) for d in deps]

    def get_dependencies(self, asset_id: str, recursive: bool = False) -> List[str]:
        direct = self._direct_dependencies(asset_id)
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
            queue.extend(self._direct_dependencies(dep))
        return out

    def delete_asset(self, asset_id: str) -> bool:
        return bool(unreal.EditorAssetLibrary.delete_asset(asset_id))
