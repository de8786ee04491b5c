"""Tests for batch deletion."""

from pathlib import Path
from unittest.mock import patch

from nmclean.exclusions import ExcludedPaths
from nmclean.remover import NOT_ABSOLUTE, NOT_FOUND_OR_EXCLUDED, delete_path, remove


def make_node_modules(base: Path, size: int = 4) -> Path:
    node_modules = base / "node_modules"
    node_modules.mkdir(parents=True)
    (node_modules / "index.js").write_bytes(b"x" * size)
    return node_modules


class TestDeletePath:
    def test_deletes_directory(self, tmp_path):
        target = make_node_modules(tmp_path / "app", size=12)
        bytes_freed, error = delete_path(target)
        assert not target.exists()
        assert bytes_freed == 12
        assert error is None

    def test_deletes_file(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("Hello!")
        bytes_freed, error = delete_path(f)
        assert not f.exists()
        assert bytes_freed == 6
        assert error is None

    def test_symlink_removed_not_target(self, tmp_path):
        real = make_node_modules(tmp_path / "real")
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)

        _, error = delete_path(link)
        assert error is None
        assert not link.is_symlink()
        assert real.exists()

    def test_dry_run_does_not_delete(self, tmp_path):
        target = make_node_modules(tmp_path / "app", size=9)
        bytes_freed, error = delete_path(target, dry_run=True)
        assert target.exists()
        assert bytes_freed == 9
        assert error is None

    def test_reports_os_error(self, tmp_path):
        target = make_node_modules(tmp_path / "app")
        with patch("nmclean.remover.shutil.rmtree", side_effect=PermissionError("in use")):
            bytes_freed, error = delete_path(target)
        assert bytes_freed == 0
        assert "in use" in error
        assert target.exists()


class TestRemove:
    def test_empty_batch(self, no_excluded):
        assert remove([], no_excluded) == []

    def test_missing_path(self, tmp_path, no_excluded):
        missing = str(tmp_path / "missing" / "node_modules")
        outcomes = remove([missing], no_excluded)

        assert len(outcomes) == 1
        assert outcomes[0].path == missing
        assert not outcomes[0].success
        assert outcomes[0].message == NOT_FOUND_OR_EXCLUDED

    def test_deletes_directory(self, tmp_path, no_excluded):
        target = make_node_modules(tmp_path / "app", size=20)
        outcomes = remove([str(target)], no_excluded)

        assert outcomes[0].success
        assert outcomes[0].message == "Deleted successfully"
        assert outcomes[0].bytes_freed == 20
        assert not target.exists()
        assert (tmp_path / "app").exists()

    def test_excluded_path_untouched(self, tmp_path):
        target = make_node_modules(tmp_path / "vendor")
        excluded = ExcludedPaths((str(tmp_path / "VENDOR"),))

        outcomes = remove([str(target)], excluded)
        assert not outcomes[0].success
        assert outcomes[0].message == NOT_FOUND_OR_EXCLUDED
        assert target.exists()

    def test_relative_path_refused(self, tmp_path, no_excluded, monkeypatch):
        make_node_modules(tmp_path / "app")
        monkeypatch.chdir(tmp_path)

        outcomes = remove(["app/node_modules"], no_excluded)
        assert not outcomes[0].success
        assert outcomes[0].message == NOT_ABSOLUTE
        assert (tmp_path / "app" / "node_modules").exists()

    def test_one_outcome_per_path_in_order(self, tmp_path, no_excluded):
        first = make_node_modules(tmp_path / "one")
        second = make_node_modules(tmp_path / "two")
        missing = tmp_path / "three" / "node_modules"
        paths = [str(first), str(missing), str(second)]

        outcomes = remove(paths, no_excluded)
        assert [o.path for o in outcomes] == paths
        assert [o.success for o in outcomes] == [True, False, True]

    def test_duplicate_in_batch_fails_independently(self, tmp_path, no_excluded):
        target = make_node_modules(tmp_path / "app")
        outcomes = remove([str(target), str(target)], no_excluded)

        assert len(outcomes) == 2
        assert outcomes[0].success
        assert not outcomes[1].success
        assert outcomes[1].message == NOT_FOUND_OR_EXCLUDED

    def test_failure_does_not_stop_batch(self, tmp_path, no_excluded):
        stuck = make_node_modules(tmp_path / "stuck")
        free = make_node_modules(tmp_path / "free")

        import shutil

        real_rmtree = shutil.rmtree

        def flaky_rmtree(path, *args, **kwargs):
            if Path(path) == stuck:
                raise OSError("Device or resource busy")
            return real_rmtree(path, *args, **kwargs)

        with patch("nmclean.remover.shutil.rmtree", side_effect=flaky_rmtree):
            outcomes = remove([str(stuck), str(free)], no_excluded)

        assert not outcomes[0].success
        assert "busy" in outcomes[0].message
        assert outcomes[0].bytes_freed == 0
        assert outcomes[1].success
        assert stuck.exists()
        assert not free.exists()

    def test_dry_run(self, tmp_path, no_excluded):
        target = make_node_modules(tmp_path / "app", size=7)
        outcomes = remove([str(target)], no_excluded, dry_run=True)

        assert outcomes[0].success
        assert outcomes[0].dry_run
        assert outcomes[0].message == "Would delete"
        assert outcomes[0].bytes_freed == 7
        assert target.exists()

    def test_accepts_path_objects(self, tmp_path, no_excluded):
        target = make_node_modules(tmp_path / "app")
        outcomes = remove([target], no_excluded)
        assert outcomes[0].path == str(target)
        assert outcomes[0].success

    def test_scan_then_remove(self, project_tree, no_excluded):
        from nmclean.scanner import scan

        result = scan(project_tree, 3, no_excluded)
        outcomes = remove([f.path for f in result.findings], no_excluded)

        assert all(o.success for o in outcomes)
        assert sum(o.bytes_freed for o in outcomes) == result.total_size
        assert scan(project_tree, 3, no_excluded).count == 0
