"""Unit tests for FileSystemFileCollector."""

import logging
import sys
from pathlib import Path

import pytest

from filescope.core.config import CollectorConfig
from filescope.core.configuration import (
    ConfigurationResult,
    EngineConfiguration,
    LanguageExtensions,
    LocalConfiguration,
    RemoteConfiguration,
    load_local_configuration,
)
from filescope.core.errors import EnumerationError, FileCollectionError, PatternError
from filescope.core.file_collector import CollectionResult, FilesTarget, FileSystemFileCollector
from filescope.core.languages import Language
from filescope.core.patterns import FilePath, Glob, PathRegex
from filescope.core.tools import Tool
from tests.support.file_tree_strategies import write_files

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")

NO_LOCAL = ConfigurationResult.unavailable("No local configuration file")
NO_REMOTE = ConfigurationResult.unavailable("No remote configuration available")

SCALA_TOOL = Tool.create("scalastyle", ["Scala"], ["scalastyle_config.xml"])
PYTHON_TOOL = Tool.create("pylint", ["Python"], ["pylintrc", ".pylintrc"])


def local(**kwargs) -> ConfigurationResult[LocalConfiguration]:
    return ConfigurationResult.loaded(LocalConfiguration(**kwargs))


def remote(**kwargs) -> ConfigurationResult[RemoteConfiguration]:
    return ConfigurationResult.loaded(RemoteConfiguration(**kwargs))


@pytest.fixture
def collector():
    return FileSystemFileCollector()


class TestListFiles:
    def test_global_globs_and_vcs_directory(self, tmp_path, collector):
        write_files(tmp_path, ["src/Main.scala", ".git/config", "target/out.class", "README.md"])

        result = collector.list_files(
            tmp_path, local(exclude_paths=frozenset({Glob("target/**")})), NO_REMOTE
        )

        assert result.ok
        assert result.target.directory == tmp_path
        assert result.target.readable_files == {Path("src/Main.scala"), Path("README.md")}
        assert result.target.unreadable_files == frozenset()

    def test_globs_do_not_exclude_the_contents_of_matched_directories(self, tmp_path, collector):
        write_files(tmp_path, ["README.md", "src/a.py", "src/pkg/b.py", "target/out.class"])

        target = collector.list_files(
            tmp_path,
            local(exclude_paths=frozenset({Glob("*"), Glob("src/*"), Glob("target")})),
            NO_REMOTE,
        ).unwrap()

        assert target.readable_files == {Path("src/pkg/b.py"), Path("target/out.class")}

    @posix_only
    def test_unreadable_files_are_split_out(self, tmp_path, collector):
        write_files(tmp_path, ["src/Main.scala", "README.md"])
        (tmp_path / "README.md").chmod(0o640)

        target = collector.list_files(tmp_path, NO_LOCAL, NO_REMOTE).unwrap()

        assert target.readable_files == {Path("src/Main.scala")}
        assert target.unreadable_files == {Path("README.md")}

    def test_default_ignores_apply_without_local_configuration(self, tmp_path, collector):
        write_files(tmp_path, ["a.scala", "b.class"])

        target = collector.list_files(
            tmp_path, NO_LOCAL, remote(default_ignores=frozenset({PathRegex(r".*\.class")}))
        ).unwrap()

        assert target.readable_files == {Path("a.scala")}

    def test_default_ignores_are_skipped_with_local_configuration(self, tmp_path, collector):
        write_files(tmp_path, ["a.scala", "b.class"])
        (tmp_path / ".codacy.yml").write_text("", encoding="utf-8")
        (tmp_path / ".codacy.yml").chmod(0o644)
        local_configuration = load_local_configuration(tmp_path)

        target = collector.list_files(
            tmp_path,
            local_configuration,
            remote(default_ignores=frozenset({PathRegex(r".*\.class")})),
        ).unwrap()

        assert local_configuration.valid
        assert target.readable_files == {Path("a.scala"), Path("b.class"), Path(".codacy.yml")}

    def test_invalid_local_configuration_keeps_default_ignores(self, tmp_path, collector):
        write_files(tmp_path, ["a.scala", "b.class"])
        (tmp_path / ".codacy.yml").write_text("exclude_paths: 7\n", encoding="utf-8")
        (tmp_path / ".codacy.yml").chmod(0o644)

        target = collector.list_files(
            tmp_path,
            load_local_configuration(tmp_path),
            remote(default_ignores=frozenset({PathRegex(r".*\.class")})),
        ).unwrap()

        assert target.readable_files == {Path("a.scala"), Path(".codacy.yml")}

    def test_remote_ignored_paths(self, tmp_path, collector):
        write_files(tmp_path, ["vendor/lib.js", "vendorx/lib.js", "app.js"])

        target = collector.list_files(
            tmp_path, NO_LOCAL, remote(ignored_paths=frozenset({FilePath("vendor")}))
        ).unwrap()

        assert target.readable_files == {Path("vendorx/lib.js"), Path("app.js")}

    def test_ignored_paths_apply_with_local_configuration(self, tmp_path, collector):
        write_files(tmp_path, ["vendor/lib.js", "app.js"])

        target = collector.list_files(
            tmp_path, local(), remote(ignored_paths=frozenset({FilePath("vendor/")}))
        ).unwrap()

        assert target.readable_files == {Path("app.js")}

    def test_custom_vcs_directory(self, tmp_path):
        write_files(tmp_path, [".svn/entries", ".git/config"])

        target = FileSystemFileCollector.from_config(CollectorConfig(vcs_directory=".svn")).list_files(
            tmp_path, NO_LOCAL, NO_REMOTE
        ).unwrap()

        assert target.readable_files == {Path(".git/config")}

    def test_missing_root_is_a_failure(self, tmp_path, collector, caplog):
        with caplog.at_level(logging.ERROR):
            result = collector.list_files(tmp_path / "missing", NO_LOCAL, NO_REMOTE)

        assert not result.ok
        assert isinstance(result.error, EnumerationError)
        assert any("Failed to list files" in r.getMessage() for r in caplog.records)
        with pytest.raises(EnumerationError):
            result.unwrap()

    def test_malformed_default_ignore_is_a_failure(self, tmp_path, collector):
        write_files(tmp_path, ["a.scala"])

        result = collector.list_files(
            tmp_path, NO_LOCAL, remote(default_ignores=frozenset({PathRegex("[unclosed")}))
        )

        assert isinstance(result.error, PatternError)

    def test_malformed_default_ignore_fails_on_an_empty_root(self, tmp_path, collector):
        result = collector.list_files(
            tmp_path, NO_LOCAL, remote(default_ignores=frozenset({PathRegex("(")}))
        )

        assert isinstance(result.error, PatternError)

    def test_malformed_default_ignore_is_unused_with_local_configuration(self, tmp_path, collector):
        write_files(tmp_path, ["a.scala"])

        result = collector.list_files(
            tmp_path, local(), remote(default_ignores=frozenset({PathRegex("[unclosed")}))
        )

        assert result.ok

    def test_malformed_global_glob_is_a_failure(self, tmp_path, collector, caplog):
        write_files(tmp_path, ["a.scala"])

        with caplog.at_level(logging.ERROR):
            result = collector.list_files(
                tmp_path, local(exclude_paths=frozenset({Glob("\\")})), NO_REMOTE
            )

        assert not result.ok
        assert isinstance(result.error, PatternError)
        assert "Invalid glob pattern" in str(result.error)
        assert any("Failed to list files" in r.getMessage() for r in caplog.records)

    @posix_only
    def test_unreadable_files_are_logged_and_sent_to_sink(self, tmp_path, caplog):
        write_files(tmp_path, ["secret.py", "public.py"])
        (tmp_path / "secret.py").chmod(0o600)
        events = []
        collector = FileSystemFileCollector(diagnostics_sink=events.append)

        with caplog.at_level(logging.WARNING):
            collector.list_files(tmp_path, NO_LOCAL, NO_REMOTE)

        assert [event.path for event in events] == [Path("secret.py")]
        assert events[0].message == (
            f"Could not read file {tmp_path / 'secret.py'}, make sure it is readable by everybody."
        )
        assert any(r.getMessage() == events[0].message for r in caplog.records)

    @posix_only
    def test_per_call_sink_overrides_collector_sink(self, tmp_path):
        write_files(tmp_path, ["secret.py"], mode=0o600)
        default_events, call_events = [], []
        collector = FileSystemFileCollector(diagnostics_sink=default_events.append)

        collector.list_files(tmp_path, NO_LOCAL, NO_REMOTE, on_unreadable=call_events.append)

        assert default_events == []
        assert len(call_events) == 1


class TestFilterFiles:
    def test_custom_extensions_remote_wins(self, collector, tmp_path):
        target = FilesTarget(
            directory=tmp_path,
            readable_files=frozenset({Path("x.sc"), Path("x.py"), Path("x.scala")}),
        )
        local_configuration = local(language_custom_extensions={Language.SCALA: frozenset({".scala"})})
        remote_configuration = remote(
            project_extensions=(LanguageExtensions(Language.SCALA, frozenset({".scala", ".sc"})),)
        )

        result = collector.filter_files(SCALA_TOOL, target, local_configuration, remote_configuration)

        assert result.unwrap().readable_files == {Path("x.sc"), Path("x.scala")}

    def test_unknown_extension_without_custom_extensions(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("x.sc")}))

        result = collector.filter_files(SCALA_TOOL, target, NO_LOCAL, NO_REMOTE)

        assert result.unwrap().readable_files == frozenset()

    def test_local_custom_extensions(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("build.sc")}))

        result = collector.filter_files(
            SCALA_TOOL,
            target,
            local(language_custom_extensions={Language.SCALA: frozenset({".sc"})}),
            NO_REMOTE,
        )

        assert result.unwrap().readable_files == {Path("build.sc")}

    def test_tool_exclusions_only_apply_to_that_tool(self, collector, tmp_path):
        target = FilesTarget(
            directory=tmp_path,
            readable_files=frozenset({Path("src/app.py"), Path("tests/test_app.py")}),
        )
        local_configuration = local(
            engines={"pylint": EngineConfiguration(exclude_paths=frozenset({Glob("tests/**")}))}
        )
        bandit = Tool.create("bandit", ["Python"])

        pylint_files = collector.filter_files(PYTHON_TOOL, target, local_configuration, NO_REMOTE)
        bandit_files = collector.filter_files(bandit, target, local_configuration, NO_REMOTE)

        assert pylint_files.unwrap().readable_files == {Path("src/app.py")}
        assert bandit_files.unwrap().readable_files == target.readable_files

    def test_unreadable_files_pass_through_untouched(self, collector, tmp_path):
        target = FilesTarget(
            directory=tmp_path,
            readable_files=frozenset({Path("a.py"), Path("b.scala")}),
            unreadable_files=frozenset({Path("secret.md")}),
        )

        filtered = collector.filter_files(PYTHON_TOOL, target, NO_LOCAL, NO_REMOTE).unwrap()

        assert filtered.directory == tmp_path
        assert filtered.readable_files == {Path("a.py")}
        assert filtered.unreadable_files == {Path("secret.md")}

    def test_global_exclusions_are_not_reapplied(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("target/a.py")}))

        filtered = collector.filter_files(
            PYTHON_TOOL, target, local(exclude_paths=frozenset({Glob("target/**")})), NO_REMOTE
        ).unwrap()

        assert filtered.readable_files == {Path("target/a.py")}

    def test_malformed_tool_glob_is_a_failure(self, collector, tmp_path, caplog):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("a.py")}))
        local_configuration = local(
            engines={"pylint": EngineConfiguration(exclude_paths=frozenset({Glob("\\")}))}
        )

        with caplog.at_level(logging.ERROR):
            result = collector.filter_files(PYTHON_TOOL, target, local_configuration, NO_REMOTE)

        assert isinstance(result.error, PatternError)
        assert any("Failed to filter files for pylint" in r.getMessage() for r in caplog.records)

    def test_malformed_tool_glob_fails_on_an_empty_target(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path)
        local_configuration = local(
            engines={"pylint": EngineConfiguration(exclude_paths=frozenset({Glob("src/\\")}))}
        )

        result = collector.filter_files(PYTHON_TOOL, target, local_configuration, NO_REMOTE)

        assert isinstance(result.error, PatternError)


class TestHasConfigurationFiles:
    def test_matches_basename_at_any_depth(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("config/.pylintrc")}))

        assert collector.has_configuration_files(PYTHON_TOOL, target)

    def test_partial_name_does_not_match(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("config/my.pylintrc")}))

        assert not collector.has_configuration_files(PYTHON_TOOL, target)

    def test_unreadable_configuration_files_do_not_count(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, unreadable_files=frozenset({Path("pylintrc")}))

        assert not collector.has_configuration_files(PYTHON_TOOL, target)

    def test_tool_without_configuration_files(self, collector, tmp_path):
        target = FilesTarget(directory=tmp_path, readable_files=frozenset({Path("pylintrc")}))

        assert not collector.has_configuration_files(Tool.create("bare", ["Python"]), target)


class TestCollectionResult:
    def test_unwrap_success(self, tmp_path):
        target = FilesTarget(directory=tmp_path)

        assert CollectionResult.success(target).unwrap() is target

    def test_unwrap_failure_reraises(self):
        error = FileCollectionError("boom")

        with pytest.raises(FileCollectionError, match="boom"):
            CollectionResult.failure(error).unwrap()

    def test_empty_result_is_not_ok(self):
        result = CollectionResult()

        assert not result.ok
        with pytest.raises(FileCollectionError):
            result.unwrap()
