import json

from pixelgrid.cli import main


def test_prints_art(image_path, capsys):
    assert main([str(image_path), "-W", "8", "-H", "4"]) == 0
    out = capsys.readouterr().out
    assert out.strip().split("\n") == ["AAAABBBB"] * 4


def test_json_output(image_path, capsys):
    assert main([str(image_path), "--width", "4", "--json"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert len(result["art"].split("\n")) == 2
    assert result["palette"]["."] is None


def test_config_option_with_override(image_path, capsys):
    assert main([str(image_path), "--config", '{"width": 2, "height": 9}', "-H", "1", "--json"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["art"].split("\n") == [result["art"]]
    assert len(result["art"]) == 2


def test_colour_output(image_path, capsys):
    assert main([str(image_path), "-W", "8", "-H", "4", "--colour"]) == 0
    assert "\033[38;2;" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_undecodable_file(tmp_path, capsys):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not a png")
    assert main([str(path)]) == 1
    assert "Failed to load image data" in capsys.readouterr().err
