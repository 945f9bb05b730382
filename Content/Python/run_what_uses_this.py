import unreal
from wut import wut_entry

# Tune as needed
DELETE_ALL_DEPENDANTS = False

result = wut_entry.find_usages_of_selected()

if "error" in result:
    unreal.log_warning(f"[WUT] {result['error']}")
else:
    print(wut_entry.get_report())

    if DELETE_ALL_DEPENDANTS:
        wut_entry.select_all()
        deleted = wut_entry.delete_selected()
        unreal.log(f"[WUT] Deleted {len(deleted['deleted'])} asset(s)")
