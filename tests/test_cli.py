import pytest
from PIL import Image as PILImage

from blockpic.cli import main
from blockpic.grid import PIXEL_CHAR


@pytest.fixture
def png(tmp_path):
    path = tmp_path / "test.png"
    PILImage.new("RGB", (4, 4), (255, 255, 255)).save(path)
    return path


def test_renders_to_stdout(png, capsys):
    main([str(png), "-W", "4", "-H", "2"])
    out = capsys.readouterr().out
    assert out.count(PIXEL_CHAR) == 8
    assert "\033[38;2;255;255;255m" in out


def test_fit_and_region(png, capsys):
    main([str(png), "-W", "6", "-H", "1", "--fit", "stretch", "--region", "0,0,2,2"])
    out = capsys.readouterr().out
    assert out.count(PIXEL_CHAR) == 6


def test_background_option(tmp_path, capsys):
    path = tmp_path / "clear.png"
    PILImage.new("RGBA", (2, 2), (0, 0, 0, 0)).save(path)
    main([str(path), "-W", "2", "-H", "1", "--bg", "#102030"])
    assert "\033[48;2;16;32;48m" in capsys.readouterr().out


def test_defaults_to_terminal_size(png, capsys):
    # Not a tty under capture: 80x24, minus one row
    main([str(png), "--fit", "stretch"])
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(lines) == 23


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main([str(tmp_path / "missing.png")])
    assert info.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_undecodable_file(tmp_path, capsys):
    path = tmp_path / "junk.png"
    path.write_bytes(b"junk")
    with pytest.raises(SystemExit) as info:
        main([str(path), "-W", "4", "-H", "2"])
    assert info.value.code == 1
    assert "error:" in capsys.readouterr().err


@pytest.mark.parametrize(
    "args",
    [
        ["--region", "1,2,3"],
        ["--region", "-1,0,1,1"],
        ["--bg", "xyz"],
        ["--fit", "crop"],
        ["-W", "-3", "-H", "2"],
        ["-W", "4", "-H", "-1"],
        ["--width", "wide"],
    ],
)
def test_bad_arguments(png, args):
    with pytest.raises(SystemExit) as info:
        main([str(png), *args])
    assert info.value.code == 2
