"""依赖闭包收集测试 — 目录级展开 / 去重 / 确定性"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sngcli.core.closure import ClosureCollector, list_unit_files
from sngcli.core.exceptions import SngUIError, UnknownComponentError

MakeTree = Callable[[Path, dict[str, str]], Path]


def _rel(root: Path, files: tuple[Path, ...]) -> list[str]:
    return [f.relative_to(root.resolve()).as_posix() for f in files]


class TestListUnitFiles:
    def test_skips_spec_and_stories(self, lib_root: Path) -> None:
        names = [p.name for p in list_unit_files(lib_root / "button")]
        assert names == ["index.ts", "sng-button.ts", "sng-button.types.ts"]

    def test_recursive(self, lib_root: Path, make_tree: MakeTree) -> None:
        make_tree(lib_root, {"alpha/nested/deep.ts": ""})
        rel = [p.relative_to(lib_root).as_posix() for p in list_unit_files(lib_root / "alpha")]
        assert rel == ["alpha/alpha.ts", "alpha/nested/deep.ts"]


class TestCollect:
    def test_unit_without_local_imports(self, lib_root: Path) -> None:
        closure = ClosureCollector(lib_root).collect("alpha")
        assert closure.unit == "alpha"
        assert _rel(lib_root, closure.files) == ["alpha/alpha.ts"]
        assert closure.external_packages == ("left-pad",)

    def test_local_import_pulls_other_unit(self, lib_root: Path) -> None:
        closure = ClosureCollector(lib_root).collect("beta")
        assert _rel(lib_root, closure.files) == ["alpha/alpha.ts", "beta/beta.ts"]
        assert closure.external_packages == ("left-pad", "right-pad")

    def test_self_reference_only(self, lib_root: Path) -> None:
        """组件内部互相引用不会死循环，也不会引入其他目录"""
        closure = ClosureCollector(lib_root).collect("button")
        assert _rel(lib_root, closure.files) == [
            "button/index.ts", "button/sng-button.ts", "button/sng-button.types.ts",
        ]
        assert closure.external_packages == ("clsx", "tailwind-merge")

    def test_spec_file_imports_never_followed(self, lib_root: Path) -> None:
        """button 的测试文件引用了 menu，但测试文件本身不参与遍历"""
        closure = ClosureCollector(lib_root).collect("button")
        assert not any("menu" in p for p in _rel(lib_root, closure.files))
        assert "jasmine-extras" not in closure.external_packages

    def test_directory_index_import(self, lib_root: Path) -> None:
        closure = ClosureCollector(lib_root).collect("menu")
        assert _rel(lib_root, closure.files) == [
            "button/index.ts",
            "button/sng-button.ts",
            "button/sng-button.types.ts",
            "menu/sng-menu.ts",
        ]
        assert closure.external_packages == ("@angular/cdk", "clsx", "tailwind-merge")

    def test_internal_unit_pulled_transitively(self, lib_root: Path) -> None:
        closure = ClosureCollector(lib_root).collect("sng-table")
        assert _rel(lib_root, closure.files) == [
            "sng-table-core/table-core.ts", "sng-table/sng-table.ts",
        ]
        assert closure.external_packages == ("@angular/cdk", "tailwind-merge")

    def test_mutual_imports_symmetric(self, tmp_path: Path, make_tree: MakeTree) -> None:
        root = make_tree(tmp_path / "lib", {
            "a/a.ts": "import { b } from '../b/b';\nimport 'pkg-a';\n",
            "b/b.ts": "import { a } from '../a/a';\nimport 'pkg-b';\n",
        })
        collector = ClosureCollector(root)
        ca, cb = collector.collect("a"), collector.collect("b")
        assert ca.files == cb.files
        assert _rel(root, ca.files) == ["a/a.ts", "b/b.ts"]
        assert ca.external_packages == cb.external_packages == ("pkg-a", "pkg-b")

    def test_diamond_expands_shared_folder_once(
        self, tmp_path: Path, make_tree: MakeTree, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        root = make_tree(tmp_path / "lib", {
            "a/a.ts": "import '../b/b';\nimport '../c/c';\n",
            "b/b.ts": "import '../d/d';\n",
            "c/c.ts": "import '../d/d';\n",
            "d/d.ts": "export const d = 1;\n",
            "d/extra.ts": "export const e = 1;\n",
        })
        import sngcli.core.closure as closure_mod

        expanded: list[str] = []
        real = closure_mod.list_unit_files

        def _spy(folder: str | Path) -> list[Path]:
            expanded.append(Path(folder).name)
            return real(folder)

        monkeypatch.setattr(closure_mod, "list_unit_files", _spy)
        closure = ClosureCollector(root).collect("a")
        assert expanded.count("d") == 1
        assert _rel(root, closure.files) == ["a/a.ts", "b/b.ts", "c/c.ts", "d/d.ts", "d/extra.ts"]

    def test_import_of_test_file_ignored(self, tmp_path: Path, make_tree: MakeTree) -> None:
        root = make_tree(tmp_path / "lib", {
            "a/a.ts": "import { helper } from '../b/b.spec';\n",
            "b/b.ts": "",
            "b/b.spec.ts": "",
        })
        closure = ClosureCollector(root).collect("a")
        assert _rel(root, closure.files) == ["a/a.ts"]

    def test_unresolvable_and_outside_imports_ignored(self, tmp_path: Path, make_tree: MakeTree) -> None:
        make_tree(tmp_path, {"app/main.ts": ""})
        root = make_tree(tmp_path / "lib", {
            "a/a.ts": "import './missing';\nimport '../../app/main';\n",
        })
        closure = ClosureCollector(root).collect("a")
        assert _rel(root, closure.files) == ["a/a.ts"]

    def test_file_directly_under_root(self, tmp_path: Path, make_tree: MakeTree) -> None:
        root = make_tree(tmp_path / "lib", {
            "utils.ts": "import 'shared-dep';\n",
            "a/a.ts": "import { u } from '../utils';\n",
        })
        closure = ClosureCollector(root).collect("a")
        assert _rel(root, closure.files) == ["a/a.ts", "utils.ts"]
        assert closure.external_packages == ("shared-dep",)

    def test_already_visited_folder_enqueues_single_file(
        self, tmp_path: Path, make_tree: MakeTree,
    ) -> None:
        """目录已展开后，后续引用同一目录内文件不会重复处理"""
        root = make_tree(tmp_path / "lib", {
            "a/a.ts": "import '../b/one';\nimport '../b/two';\nimport './a2';\n",
            "a/a2.ts": "import '../b/one';\n",
            "b/one.ts": "import './two';\n",
            "b/two.ts": "import 'dep-two';\n",
        })
        closure = ClosureCollector(root).collect("a")
        assert _rel(root, closure.files) == ["a/a.ts", "a/a2.ts", "b/one.ts", "b/two.ts"]
        assert closure.external_packages == ("dep-two",)

    def test_idempotent(self, lib_root: Path) -> None:
        collector = ClosureCollector(lib_root)
        assert collector.collect("menu") == collector.collect("menu")
        assert ClosureCollector(lib_root).collect("menu") == collector.collect("menu")

    @pytest.mark.parametrize("folder", ["", "nonexist", "styles/../nonexist"])
    def test_unknown_folder(self, lib_root: Path, folder: str) -> None:
        with pytest.raises(SngUIError, match="组件目录不存在") as exc_info:
            ClosureCollector(lib_root).collect(folder)
        assert not isinstance(exc_info.value, UnknownComponentError)
        assert f"'{folder}'" in str(exc_info.value)
        assert "可用组件" not in str(exc_info.value)

    def test_binary_asset_in_folder(self, lib_root: Path) -> None:
        """非 UTF-8 资源照常纳入闭包，不中断遍历"""
        (lib_root / "alpha" / "icon.png").write_bytes(b"\xff\xfe\x00")
        closure = ClosureCollector(lib_root).collect("alpha")
        assert _rel(lib_root, closure.files) == ["alpha/alpha.ts", "alpha/icon.png"]
        assert closure.external_packages == ("left-pad",)
