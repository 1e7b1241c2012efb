"""Tests for loading templates: variables, manifests and hooks."""

import json
import sys
from pathlib import Path

import pytest

from makemake.exceptions import CommandError, ManifestError
from makemake.maker.hooks import parse_command, resolve_program
from makemake.maker.loader import create_template, load_template
from makemake.maker.manifest import Manifest
from makemake.maker.variables import (
    detect_os,
    internal_variables,
    merge_caller_variables,
    resolve_variables,
)

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")


def make_template(root: Path, files: dict, manifest: dict = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    if manifest is not None:
        (root / "makemake.json").write_text(json.dumps(manifest))
    return root


class TestGreeting:
    """The basic hello-world template."""

    def test_without_manifest_copies_verbatim(self, tmp_path):
        src = make_template(tmp_path / "t", {"greeting.txt": "Hello, ${name ?? 'World'}!"})
        dest = tmp_path / "out"
        load_template(src, dest, {"name": "Rust"})
        assert (dest / "greeting.txt").read_text() == "Hello, ${name ?? 'World'}!"

    def test_make_with_name(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"greeting.txt": "Hello, ${name ?? 'World'}!"},
            {"files": {"greeting.txt": "Make"}},
        )
        dest = tmp_path / "out"
        load_template(src, dest, {"name": "Rust"})
        assert (dest / "greeting.txt").read_text() == "Hello, Rust!"
        assert not (dest / "makemake.json").exists()

    def test_make_without_name(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"greeting.txt": "Hello, ${name ?? 'World'}!"},
            {"files": {"greeting.txt": "Make"}},
        )
        dest = tmp_path / "out"
        load_template(src, dest)
        assert (dest / "greeting.txt").read_text() == "Hello, World!"

    def test_make_subtemplate(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {
                "main.txt": "${#make('sub/file.tmpl', greeting='Hi')}",
                "sub/file.tmpl": "${greeting} ${name}",
            },
            {"files": {"main.txt": "Make", "sub": "Ignore"}},
        )
        dest = tmp_path / "out"
        load_template(src, dest, {"name": "Ann"})
        assert (dest / "main.txt").read_text() == "Hi Ann"
        assert not (dest / "sub").exists()


class TestVariables:
    """Variable precedence and computed variables."""

    def test_manifest_defaults(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"a.txt": "${lang}"},
            {"files": {"a.txt": "Make"}, "vars": {"lang": "python"}},
        )
        load_template(src, tmp_path / "one")
        load_template(src, tmp_path / "two", {"lang": "rust"})
        assert (tmp_path / "one" / "a.txt").read_text() == "python"
        assert (tmp_path / "two" / "a.txt").read_text() == "rust"

    def test_pdir(self, tmp_path):
        src = make_template(
            tmp_path / "t", {"a.txt": "${_PDIR}"}, {"files": {"a.txt": "Make"}}
        )
        dest = tmp_path / "my-project"
        load_template(src, dest)
        assert (dest / "a.txt").read_text() == "my-project"

    def test_platform_flags(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"a.txt": "${_OS} ${_WINDOWS ? 'win' : 'other'}${_}"},
            {"files": {"a.txt": "Make"}},
        )
        load_template(src, tmp_path / "win", platform="win32")
        load_template(src, tmp_path / "lin", platform="linux")
        assert (tmp_path / "win" / "a.txt").read_text() == "windows win"
        assert (tmp_path / "lin" / "a.txt").read_text() == "linux other"

    def test_computed_variables_override_defaults(self, tmp_path):
        manifest = Manifest(vars={"_OS": "fake", "keep": "me"})
        vars = resolve_variables(manifest, {}, tmp_path, tmp_path, platform="linux")
        assert vars["_OS"] == "linux"
        assert vars["_LINUX"] == "true"
        assert vars["keep"] == "me"

    def test_caller_overrides_computed(self, tmp_path):
        vars = resolve_variables(
            Manifest(), {"_OS": "mine"}, tmp_path, tmp_path, platform="linux"
        )
        assert vars["_OS"] == "mine"

    def test_expand_variables(self, tmp_path):
        manifest = Manifest(
            vars={"full": "${first} ${last ?? 'Doe'}"}, expand_variables=True
        )
        vars = resolve_variables(manifest, {"first": "John"}, tmp_path, tmp_path)
        assert vars["full"] == "John Doe"

    def test_defaults_not_expanded_without_flag(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"a.txt": "${full}"},
            {"files": {"a.txt": "Make"}, "vars": {"full": "${first}"}},
        )
        load_template(src, tmp_path / "out", {"first": "John"})
        assert (tmp_path / "out" / "a.txt").read_text() == "${first}"

    def test_expanded_default_overridden_by_caller(self, tmp_path):
        manifest = Manifest(vars={"full": "${first}"}, expand_variables=True)
        vars = resolve_variables(
            manifest, {"first": "John", "full": "given"}, tmp_path, tmp_path
        )
        assert vars["full"] == "given"


@pytest.mark.parametrize(
    "platform, expected",
    [
        ("linux", "linux"),
        ("win32", "windows"),
        ("darwin", "macos"),
        ("freebsd14", "freebsd"),
        ("aix", "aix"),
    ],
)
def test_detect_os(platform, expected):
    assert detect_os(platform) == expected


def test_internal_variables_without_flag(tmp_path):
    vars = internal_variables(tmp_path, platform="aix")
    assert vars == {"_OS": "aix", "_": "", "_PDIR": tmp_path.resolve().name}


def test_merge_caller_variables():
    merged = merge_caller_variables({"a": "1", "b": "1"}, None, {"b": "2"})
    assert merged == {"a": "1", "b": "2"}


class TestManifestErrors:
    """Malformed manifests abort before anything is written."""

    def test_malformed_manifest(self, tmp_path):
        src = make_template(tmp_path / "t", {"a.txt": "x"})
        (src / "makemake.json").write_text("{\"files\": ")
        dest = tmp_path / "out"
        with pytest.raises(ManifestError):
            load_template(src, dest)
        assert not dest.exists()


class TestHooks:
    """preCommand and postCommand."""

    @posix_only
    def test_pre_and_post_commands(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"a.txt": "x"},
            {
                "preCommand": "sh -c 'if [ -e a.txt ]; then echo late; else echo early; fi > pre.txt'",
                "postCommand": "sh -c 'echo $name ${name} > post.txt'",
            },
        )
        dest = tmp_path / "out"
        load_template(src, dest, {"name": "Ann"})
        assert (dest / "pre.txt").read_text() == "early\n"
        assert (dest / "post.txt").read_text() == "Ann Ann\n"
        assert (dest / "a.txt").exists()

    @posix_only
    def test_failing_pre_command_aborts(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"a.txt": "x"},
            {"preCommand": "sh -c 'echo broken >&2; exit 3'"},
        )
        dest = tmp_path / "out"
        with pytest.raises(CommandError) as exc:
            load_template(src, dest)
        assert "exited with code 3" in str(exc.value)
        assert "broken" in str(exc.value)
        assert not (dest / "a.txt").exists()

    @posix_only
    def test_relative_program_runs_from_template(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"setup.sh": "#!/bin/sh\necho \"$1\" > hooked.txt\n"},
            {"postCommand": "./setup.sh ${name}", "files": {"setup.sh": "Ignore"}},
        )
        (src / "setup.sh").chmod(0o755)
        dest = tmp_path / "out"
        load_template(src, dest, {"name": "Ann"})
        assert (dest / "hooked.txt").read_text() == "Ann\n"
        assert not (dest / "setup.sh").exists()

    def test_missing_program(self, tmp_path):
        src = make_template(
            tmp_path / "t",
            {"a.txt": "x"},
            {"preCommand": "definitely-not-a-real-program-xyz"},
        )
        with pytest.raises(CommandError, match="failed to start"):
            load_template(src, tmp_path / "out")

    def test_python_hook(self, tmp_path):
        python = Path(sys.executable).as_posix()
        src = make_template(
            tmp_path / "t",
            {"a.txt": "x"},
            {"postCommand": f"'{python}' -c \"open('done.txt', 'w').write('ok')\""},
        )

        dest = tmp_path / "out"
        load_template(src, dest)
        assert (dest / "done.txt").read_text() == "ok"


def test_parse_command():
    assert parse_command("git init -q") == ["git", "init", "-q"]
    assert parse_command("echo 'a b'") == ["echo", "a b"]


@pytest.mark.parametrize("cmd", ["", "   "])
def test_parse_command_missing_program(cmd):
    with pytest.raises(CommandError, match="missing program"):
        parse_command(cmd)


def test_parse_command_unbalanced_quote():
    with pytest.raises(CommandError, match="cannot be parsed"):
        parse_command("echo 'oops")


def test_resolve_program(tmp_path):
    assert resolve_program("git", tmp_path) == "git"
    assert resolve_program("./run.sh", tmp_path) == str(tmp_path / "run.sh")
    assert resolve_program("bin/run", tmp_path) == str(tmp_path / "bin" / "run")


def test_create_template(tmp_path):
    src = make_template(tmp_path / "src", {"a.txt": "${x}", "b/c.txt": "c"})
    out = tmp_path / "store" / "demo"
    create_template(src, out)
    assert (out / "a.txt").read_text() == "${x}"
    assert (out / "b" / "c.txt").read_text() == "c"
