from typing import Dict, List, Optional

from wut.wut_session import InvolvedAsset


def generate_summary(root_asset: str, involved: List[InvolvedAsset],
                     stats: Optional[Dict] = None) -> str:
    lines = []

    lines.append("# What Uses This Report")
    lines.append("")
    lines.append(f"**Root Asset:** `{root_asset}`")
    lines.append("")

    dependants = [a for a in involved if a.asset_path != root_asset]
    code_loadable = [a for a in involved if a.is_code_loadable]

    lines.append("## Summary")
    lines.append(f"- Assets depending on root (transitively): **{len(dependants)}**")
    lines.append(f"- Code-loadable assets involved: **{len(code_loadable)}**")
    if stats:
        lines.append(f"- Assets indexed: **{stats.get('asset_count', 0)}**")
        lines.append(f"- Dependency edges indexed: **{stats.get('edge_count', 0)}**")
    lines.append("")

    lines.append("## Involved Assets")
    if not involved:
        lines.append("- None")
    else:
        for a in involved:
            marker = " *(ROOT)*" if a.asset_path == root_asset else ""
            flags = f" (flags: {', '.join(a.flags)})" if a.flags else ""
            lines.append(f"- **{a.display_name}** `{a.asset_path}`{marker}{flags}")
    lines.append("")

    if code_loadable:
        lines.append("## Note")
        lines.append(
            "Code-loadable assets may be loaded by path at runtime; "
            "having no dependants does not make them safe to delete."
        )

    return "\n".join(lines)
