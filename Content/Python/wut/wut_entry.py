import unreal
from wut import wut_report, wut_session, wut_unreal
from wut.wut_errors import UnknownAssetError

_session = None


def get_session(content_root: str = wut_unreal.DEFAULT_CONTENT_ROOT):
    global _session
    if _session is None:
        wut_unreal.install_unreal_logging()
        _session = wut_session.WhatUsesThisSession(
            host=wut_unreal.UnrealAssetHost(content_root),
            progress=wut_unreal.SlowTaskProgress(),
        )
    return _session


def _rows(involved):
    return [
        {
            "asset_path": a.asset_path,
            "name": a.display_name,
            "checked": a.is_checked,
            "flags": list(a.flags),
        }
        for a in involved
    ]


def find_usages_of(asset_path: str):
    session = get_session()

    try:
        involved = session.find_usages_of(asset_path)
    except UnknownAssetError as e:
        unreal.log_warning(f"[WUT] {e}")
        return {"error": str(e)}

    unreal.log(f"[WUT] Root asset: {asset_path}")
    unreal.log(f"[WUT] Involved assets: {len(involved)}")

    return {
        "root_package": asset_path,
        "involved": _rows(involved),
        "stats": session.index.stats(),
    }


def find_usages_of_selected():
    root = wut_unreal.get_selected_package_name()
    if not root:
        return {"error": "Select an object in the Content Browser for options."}
    return find_usages_of(root)


def set_checked(asset_path: str, checked: bool = True):
    for a in get_session().involved_assets:
        if a.asset_path == asset_path:
            a.is_checked = checked
            return True
    return False


def select_all():
    session = get_session()
    session.select_all()
    return _rows(session.involved_assets)


def delete_selected():
    result = get_session().delete_selected()
    if result.failed:
        unreal.log_warning(f"[WUT] {len(result.failed)} asset(s) could not be deleted")
    return {"deleted": result.deleted, "failed": result.failed}


def open_asset(asset_path: str):
    asset_obj = unreal.load_asset(asset_path)
    if not asset_obj:
        unreal.log_warning(f"[WUT] Could not load asset: {asset_path}")
        return False

    unreal.EditorAssetLibrary.sync_browser_to_objects([asset_path])
    return True


def on_project_change():
    if _session is not None:
        _session.on_project_change()


def close():
    global _session
    if _session is not None:
        _session.clear()
    _session = None


def get_report():
    session = get_session()
    if not session.root_asset:
        return ""
    stats = session.index.stats() if session.index is not None else None
    return wut_report.generate_summary(session.root_asset, session.involved_assets, stats)


def quick_test():
    r = find_usages_of_selected()
    if "error" in r:
        unreal.log_warning(f"[WUT] {r['error']}")
        return
    print(get_report())
