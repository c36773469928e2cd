"""Tests for the command line interface."""

import pytest


def test_render_png(tmp_path, capsys):
    from avatarforge.__main__ import main
    output = tmp_path / "out" / "avatar.png"
    code = main(["render", "a@b.co", "--size", "64", "-o", str(output)])
    assert code == 0
    assert output.read_bytes()[:4] == b"\x89PNG"
    assert "Saved avatar (64x64)" in capsys.readouterr().out


def test_render_svg(tmp_path):
    from avatarforge.__main__ import main
    output = tmp_path / "avatar.svg"
    code = main(["render", "a@b.co", "--format", "vector", "--shape", "circle",
                 "--style", "cosmic", "-o", str(output)])
    assert code == 0
    assert output.read_text(encoding="utf-8").startswith("<svg")


def test_render_default_output_name(tmp_path, monkeypatch):
    from avatarforge.__main__ import main
    monkeypatch.chdir(tmp_path)
    assert main(["render", "a@b.co", "--size", "32",
                 "--image-format", "jpg"]) == 0
    assert (tmp_path / "avatar.jpg").exists()


def test_render_rejects_invalid_identity(capsys):
    from avatarforge.__main__ import main
    with pytest.raises(SystemExit) as excinfo:
        main(["render", "not an email"])
    assert excinfo.value.code == 2
    assert "--no-validate" in capsys.readouterr().err


def test_render_no_validate(tmp_path):
    from avatarforge.__main__ import main
    output = tmp_path / "x.png"
    code = main(["render", "just-a-name", "--no-validate", "--size", "32",
                 "-o", str(output)])
    assert code == 0
    assert output.exists()


def test_render_bad_quality_is_usage_error():
    from avatarforge.__main__ import main
    with pytest.raises(SystemExit) as excinfo:
        main(["render", "a@b.co", "--quality", "500"])
    assert excinfo.value.code == 2


def test_breakdown(capsys):
    from avatarforge.__main__ import main
    assert main(["breakdown", "a@b.co"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 6
    assert lines[0].startswith("A  triangle/1")
    assert "Double Dot" in lines[3]


def test_table(capsys):
    from avatarforge.__main__ import main
    assert main(["table", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "OK: 41 characters" in out


def test_table_reports_collision(capsys, monkeypatch):
    from avatarforge import __main__ as cli
    from avatarforge.shapes import UniquenessReport
    report = UniquenessReport(ok=False, colliding_pairs=(
        ("B", "A", ("circle", 1)),
    ))
    monkeypatch.setattr(cli, "verify_uniqueness", lambda: report)
    assert cli.main(["table"]) == 1
    assert "COLLISION: B and A share circle/1" in capsys.readouterr().err
