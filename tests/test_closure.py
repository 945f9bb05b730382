"""Tests for transitive dependant search and display-name ordering."""

import pytest

from wut.wut_closure import (
    asset_display_name,
    find_transitive_dependants,
    sort_by_display_name,
)
from wut.wut_errors import UnknownAssetError
from wut.wut_index import DependencyIndex


def _build(deps):
    return DependencyIndex.build(list(deps), deps)


CHAIN = {
    "/Game/A": [],
    "/Game/B": ["/Game/A"],
    "/Game/C": ["/Game/B"],
    "/Game/D": [],
}


class TestDisplayName:
    def test_final_component(self):
        assert asset_display_name("/Game/Props/SM_Chair") == "SM_Chair"

    def test_no_separator(self):
        assert asset_display_name("SM_Chair") == "SM_Chair"

    def test_file_extension_kept(self):
        assert asset_display_name("Assets/Materials/Red.mat") == "Red.mat"

    def test_empty(self):
        assert asset_display_name("") == ""

    def test_sort_is_ordinal(self):
        paths = ["/Game/b", "/Game/X/B", "/Game/a", "/Game/Y/A"]
        # uppercase sorts before lowercase by code point
        assert sort_by_display_name(paths) == ["/Game/Y/A", "/Game/X/B", "/Game/a", "/Game/b"]

    def test_sort_equal_names_by_path(self):
        paths = ["/Game/Z/Tex", "/Game/A/Tex"]
        assert sort_by_display_name(paths) == ["/Game/A/Tex", "/Game/Z/Tex"]


class TestFindTransitiveDependants:
    def test_chain_scenario(self):
        index = _build(CHAIN)
        assert find_transitive_dependants("/Game/A", index) == ["/Game/A", "/Game/B", "/Game/C"]

    def test_after_deletion(self):
        index = _build(CHAIN)
        index.on_asset_deleted("/Game/B")
        assert find_transitive_dependants("/Game/A", index) == ["/Game/A"]

    def test_leaf_returns_only_start(self):
        index = _build(CHAIN)
        assert find_transitive_dependants("/Game/D", index) == ["/Game/D"]

    def test_unknown_start_raises(self):
        index = _build(CHAIN)
        with pytest.raises(UnknownAssetError):
            find_transitive_dependants("/Game/Z", index)

    def test_idempotent(self):
        index = _build(CHAIN)
        first = find_transitive_dependants("/Game/A", index)
        assert find_transitive_dependants("/Game/A", index) == first

    def test_diamond_listed_once(self):
        deps = {
            "/Game/T_Base": [],
            "/Game/M_Left": ["/Game/T_Base"],
            "/Game/M_Right": ["/Game/T_Base"],
            "/Game/SM_Top": ["/Game/M_Left", "/Game/M_Right"],
        }
        result = find_transitive_dependants("/Game/T_Base", _build(deps))
        assert result == ["/Game/M_Left", "/Game/M_Right", "/Game/SM_Top", "/Game/T_Base"]

    def test_cycle_terminates(self):
        deps = {
            "/Game/A": ["/Game/C"],
            "/Game/B": ["/Game/A"],
            "/Game/C": ["/Game/B"],
        }
        result = find_transitive_dependants("/Game/A", _build(deps))
        assert result == ["/Game/A", "/Game/B", "/Game/C"]

    def test_ordered_by_display_name(self):
        deps = {
            "/Game/Textures/T_Wood": [],
            "/Game/Z/M_Wood": ["/Game/Textures/T_Wood"],
            "/Game/A/SM_Table": ["/Game/Z/M_Wood"],
            "/Game/Maps/Kitchen": ["/Game/A/SM_Table"],
        }
        result = find_transitive_dependants("/Game/Textures/T_Wood", _build(deps))
        names = [asset_display_name(p) for p in result]
        assert names == sorted(names)
        assert names == ["Kitchen", "M_Wood", "SM_Table", "T_Wood"]

    def test_nested_path_dependant_included(self):
        # a dependant whose path contains the start path is still a dependant
        deps = {
            "/Game/Level": [],
            "/Game/Level/Lighting": ["/Game/Level"],
        }
        result = find_transitive_dependants("/Game/Level", _build(deps))
        assert result == ["/Game/Level", "/Game/Level/Lighting"]
