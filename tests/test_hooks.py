"""Unit tests for boxsh.shell.hooks and boxsh.shell.shellrc."""

import os
import shutil
import subprocess
import tempfile
from unittest.mock import patch

import pytest

from boxsh.errors import ShellrcError
from boxsh.models import ShellKind, ShellProfile
from boxsh.shell.hooks import write_shellrc
from boxsh.shell.shellrc import render_shellrc


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    """Create boxsh temp dirs under the test's tmp_path."""
    tmp = tmp_path / "tmp"
    tmp.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(tmp))
    return tmp


def _profile(shellrc_path, kind=ShellKind.BASH, plan="", user=""):
    return ShellProfile(
        kind=kind,
        bin_path="/bin/bash",
        user_shellrc_path=str(shellrc_path),
        plan_init_hook=plan,
        user_init_hook=user,
    )


class TestRenderShellrc:
    def test_all_fields_present(self):
        text = render_shellrc(
            original_init="echo hi",
            original_init_path="/home/u/.bashrc",
            user_hook="export X=1",
            plan_init_hook="echo plan",
        )
        assert "# Begin /home/u/.bashrc\n\necho hi\n\n# End /home/u/.bashrc" in text
        assert "export X=1" in text
        assert "echo plan" in text

    def test_original_runs_before_hooks(self):
        text = render_shellrc(
            original_init="echo original",
            original_init_path="/home/u/.bashrc",
            user_hook="echo user",
            plan_init_hook="echo plan",
        )
        assert text.index("echo original") < text.index("echo plan") < text.index("echo user")

    def test_empty_fields_are_omitted(self):
        text = render_shellrc(
            original_init="",
            original_init_path="/home/u/.bashrc",
            user_hook="",
            plan_init_hook="",
        )
        assert "/home/u/.bashrc" not in text
        assert "Plan Init Hook" not in text
        assert "User Init Hook" not in text

    def test_parent_path_is_appended(self):
        text = render_shellrc(
            original_init="",
            original_init_path="",
            user_hook="",
            plan_init_hook="",
        )
        assert 'export PATH="$PATH:$PARENT_PATH"' in text

    def test_prompt_prefix(self):
        text = render_shellrc(
            original_init="",
            original_init_path="",
            user_hook="",
            plan_init_hook="",
            prompt_prefix='(my "box")',
        )
        assert "PS1='(my \"box\") '\"$PS1\"" in text
        assert "export PS1" not in text

    def test_prompt_prefix_is_single_quoted(self):
        text = render_shellrc(
            original_init="",
            original_init_path="",
            user_hook="",
            plan_init_hook="",
            prompt_prefix="$(touch /tmp/x) `id` it's",
        )
        assert "PS1='$(touch /tmp/x) `id` it'\\''s '\"$PS1\"" in text

    @pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX sh")
    def test_prompt_prefix_is_not_expanded_by_shell(self, tmp_path):
        marker = tmp_path / "expanded"
        prefix = f"$(touch {marker}) `id` it's"
        text = render_shellrc(
            original_init="",
            original_init_path="",
            user_hook="",
            plan_init_hook="",
            prompt_prefix=prefix,
        )
        ps1_line = next(line for line in text.splitlines() if line.startswith("PS1="))

        result = subprocess.run(
            [shutil.which("sh"), "-c", f'{ps1_line}\nprintf %s "$PS1"'],
            capture_output=True,
            text=True,
            env={"PS1": "$ "},
            timeout=5,
        )

        assert result.stdout == f"{prefix} $ "
        assert not marker.exists()

    def test_no_prompt_prefix(self):
        text = render_shellrc(
            original_init="",
            original_init_path="",
            user_hook="",
            plan_init_hook="",
        )
        assert "PS1" not in text


class TestWriteShellrc:
    def test_combines_user_shellrc_and_hooks(self, tmp_path):
        user_rc = tmp_path / ".bashrc"
        user_rc.write_text("\n\n  echo hi  \n\n")

        path = write_shellrc(_profile(user_rc, user="  export X=1\n"))

        content = open(path).read()
        assert f"# Begin {user_rc}\n\necho hi\n\n# End {user_rc}" in content
        assert "# Begin User Init Hook\n\nexport X=1\n\n# End User Init Hook" in content
        assert "Plan Init Hook" not in content

    def test_plan_hook_is_trimmed(self, tmp_path):
        path = write_shellrc(_profile(tmp_path / ".bashrc", plan="\n  echo plan \n"))
        content = open(path).read()
        assert "# Begin Plan Init Hook\n\necho plan\n\n# End Plan Init Hook" in content

    def test_file_named_after_user_shellrc(self, tmp_path):
        path = write_shellrc(_profile(tmp_path / ".zshrc", kind=ShellKind.ZSH))
        assert os.path.basename(path) == ".zshrc"
        assert os.path.isabs(path)

    def test_each_call_gets_fresh_directory(self, tmp_path, isolated_tempdir):
        first = write_shellrc(_profile(tmp_path / ".bashrc"))
        second = write_shellrc(_profile(tmp_path / ".bashrc"))
        assert os.path.dirname(first) != os.path.dirname(second)
        assert os.path.dirname(first).startswith(str(isolated_tempdir))

    def test_directory_is_left_in_place(self, tmp_path):
        path = write_shellrc(_profile(tmp_path / ".bashrc"))
        assert os.path.isfile(path)

    def test_unreadable_user_shellrc_is_skipped(self, tmp_path):
        missing = tmp_path / "missing" / ".kshrc"
        path = write_shellrc(_profile(missing, kind=ShellKind.KSH, user="echo user"))
        content = open(path).read()
        assert str(missing) not in content
        assert "echo user" in content

    def test_relative_posix_shellrc(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = write_shellrc(_profile(".shinit", kind=ShellKind.POSIX))
        assert os.path.basename(path) == ".shinit"

    def test_empty_shellrc_path_is_a_bug(self):
        with pytest.raises(AssertionError):
            write_shellrc(_profile(""))

    @patch("boxsh.shell.hooks.tempfile.mkdtemp", side_effect=OSError("no space left"))
    def test_temp_dir_failure_raises(self, _mkdtemp, tmp_path):
        with pytest.raises(ShellrcError, match="no space left"):
            write_shellrc(_profile(tmp_path / ".bashrc"))

    def test_write_failure_raises(self, tmp_path):
        real_open = open

        def fake_open(file, mode="r", *args, **kwargs):
            if "w" in mode:
                raise PermissionError("read-only file system")
            return real_open(file, mode, *args, **kwargs)

        with patch("builtins.open", side_effect=fake_open):
            with pytest.raises(ShellrcError, match="read-only"):
                write_shellrc(_profile(tmp_path / ".bashrc"))
