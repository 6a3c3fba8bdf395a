"""Tests for export collection."""

from pathlib import Path

from impkit.collect_exports import collect_exports
from impkit.evaluate_unit import evaluate_unit, normalize_export_entry
from impkit.naming_rules import NamingRules

UNITS = {
    "features/audio.py": (
        "__exports__ = {\n"
        "    'nixos.role.desktop.services': {\n"
        "        'value': {'pipewire': {'enable': True}},\n"
        "        'strategy': 'merge',\n"
        "    },\n"
        "}\n"
    ),
    "features/wayland/__init__.py": (
        "__exports__ = {\n"
        "    'nixos.role.desktop.services': {\n"
        "        'value': {'greetd': {'enable': True}},\n"
        "        'strategy': 'merge',\n"
        "    },\n"
        "    'nixos.role.desktop.programs': {'sway': {'enable': True}},\n"
        "}\n"
    ),
    "features/wayland/extra.py": "__exports__ = {'never.collected': 1}\n",
    "features/packages.py": (
        "__exports__ = {'nixos.role.desktop.packages': "
        "{'value': ['htop', 'vim'], 'strategy': 'list-append'}}\n"
    ),
    "features/tools.py": (
        "__exports__ = {'nixos.role.desktop.packages': "
        "{'value': ['git', 'tmux'], 'strategy': 'list-append'}}\n"
    ),
    "hm/desktop.py": (
        "__exports__ = {'hm.role.desktop': {'value': {'gtk': True}}}\n"
        "\n"
        "def __call__(registry):\n"
        "    return {'imports': [registry.home.alice]}\n"
    ),
    "hm/deferred.py": "def __call__(registry):\n    return {'x': 1}\n",
    "broken.py": "raise RuntimeError('boom')\n",
    "bad_exports.py": "__exports__ = ['not', 'a', 'mapping']\n",
    "_ignored.py": "__exports__ = {'ignored.sink': 1}\n",
    "notes.txt": "__exports__ = {'text.sink': 1}\n",
}


def write_units(root: Path, units: dict[str, str]) -> Path:
    """Write unit files below ``root``."""
    for rel, text in units.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


def test_collect_finds_exports(tmp_path: Path) -> None:
    """Verify that every declared sink key is collected."""
    collected = collect_exports(write_units(tmp_path, UNITS))
    assert set(collected) == {
        "nixos.role.desktop.services",
        "nixos.role.desktop.programs",
        "nixos.role.desktop.packages",
        "hm.role.desktop",
    }


def test_collect_records_sources_and_strategies(tmp_path: Path) -> None:
    """Verify that records carry their source file and strategy."""
    collected = collect_exports(write_units(tmp_path, UNITS))
    services = collected["nixos.role.desktop.services"]
    assert [r.source for r in services] == [
        str(tmp_path / "features" / "audio.py"),
        str(tmp_path / "features" / "wayland" / "__init__.py"),
    ]
    assert all(r.strategy == "merge" for r in services)


def test_shorthand_entry_is_wrapped(tmp_path: Path) -> None:
    """Verify that a bare value becomes a record with no strategy."""
    collected = collect_exports(write_units(tmp_path, UNITS))
    (record,) = collected["nixos.role.desktop.programs"]
    assert record.value == {"sway": {"enable": True}}
    assert record.strategy is None


def test_marker_directory_collapses_to_marker_file(tmp_path: Path) -> None:
    """Verify that files beside the marker file are not collected."""
    collected = collect_exports(write_units(tmp_path, UNITS))
    assert "never.collected" not in collected


def test_self_describing_callable_exports(tmp_path: Path) -> None:
    """Verify that a module with __call__ and __exports__ contributes exports."""
    collected = collect_exports(write_units(tmp_path, UNITS))
    (record,) = collected["hm.role.desktop"]
    assert record.value == {"gtk": True}


def test_failing_units_are_skipped(tmp_path: Path) -> None:
    """Verify that broken, deferred, malformed and hidden units contribute nothing."""
    write_units(tmp_path, UNITS)
    assert evaluate_unit(tmp_path / "broken.py").skipped is not None
    assert evaluate_unit(tmp_path / "bad_exports.py").skipped is not None
    assert evaluate_unit(tmp_path / "hm" / "deferred.py").records == []
    collected = collect_exports(tmp_path)
    assert "ignored.sink" not in collected
    assert "text.sink" not in collected


def test_exiting_unit_does_not_abort_collection(tmp_path: Path) -> None:
    """Verify that a unit calling sys.exit is skipped like any other failure."""
    write_units(
        tmp_path,
        {
            "a.py": "import sys\nsys.exit(2)\n",
            "b.py": "__exports__ = {'k': 1}\n",
            "c.py": "import argparse\nargparse.ArgumentParser().parse_args(['-x'])\n",
        },
    )
    assert "SystemExit" in (evaluate_unit(tmp_path / "a.py").skipped or "")
    assert evaluate_unit(tmp_path / "c.py").skipped is not None
    assert list(collect_exports(tmp_path)) == ["k"]


def test_multiple_roots_keep_root_order(tmp_path: Path) -> None:
    """Verify that records are concatenated in the order roots are given."""
    write_units(tmp_path, UNITS)
    tools = tmp_path / "features" / "tools.py"
    packages = tmp_path / "features" / "packages.py"
    collected = collect_exports([tools, packages])
    values = [r.value for r in collected["nixos.role.desktop.packages"]]
    assert values == [["git", "tmux"], ["htop", "vim"]]


def test_single_file_path(tmp_path: Path) -> None:
    """Verify that a single file can be collected directly."""
    write_units(tmp_path, UNITS)
    collected = collect_exports(tmp_path / "features" / "packages.py")
    assert list(collected) == ["nixos.role.desktop.packages"]


def test_empty_directory(tmp_path: Path) -> None:
    """Verify that an empty directory yields no exports."""
    assert collect_exports(tmp_path) == {}


def test_missing_path_is_ignored(tmp_path: Path) -> None:
    """Verify that a path that does not exist contributes nothing."""
    assert collect_exports(tmp_path / "missing") == {}


def test_yaml_units(tmp_path: Path) -> None:
    """Verify that YAML documents are units when the suffix says so."""
    write_units(
        tmp_path,
        {
            "svc/web.yml": "__exports__:\n  services.web:\n    value: {port: 80}\n",
            "svc/list.yml": "- just\n- a list\n",
        },
    )
    rules = NamingRules(suffix=".yml")
    collected = collect_exports(tmp_path, rules)
    (record,) = collected["services.web"]
    assert record.value == {"port": 80}
    assert record.strategy is None
    assert evaluate_unit(tmp_path / "svc" / "list.yml").skipped is not None


def test_normalize_export_entry() -> None:
    """Verify entry normalization for full and shorthand forms."""
    assert normalize_export_entry({"value": 1, "strategy": "merge"}) == (1, "merge")
    assert normalize_export_entry({"value": [1]}) == ([1], None)
    assert normalize_export_entry({"enable": True}) == ({"enable": True}, None)
    assert normalize_export_entry(3) == (3, None)
