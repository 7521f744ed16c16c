"""Tests for the analyze_gcode command-line script."""


def test_demo_cube(load_script, capsys):
    assert load_script.main([]) == 0
    out = capsys.readouterr().out
    assert "calibration cube" in out
    assert "Layers:" in out
    assert "T0:" in out


def test_analyse_file_and_write(load_script, tmp_path, capsys):
    src = tmp_path / "in.gcode"
    src.write_text("G28\nG1 Z0.2 F300\nG1 X10 Y10 E1 F600\n")
    out_path = tmp_path / "out.gcode"
    assert load_script.main([str(src), "--write", str(out_path), "--numbered"]) == 0
    written = out_path.read_text().splitlines()
    assert len(written) == 3
    assert all(line.startswith(f"N{i} ") for i, line in enumerate(written, start=1))
    assert "Wrote 3 lines" in capsys.readouterr().out


def test_missing_file(load_script, tmp_path, capsys):
    assert load_script.main([str(tmp_path / "nope.gcode")]) == 1
    assert "error:" in capsys.readouterr().err


def test_bad_acceleration(load_script, capsys):
    assert load_script.main(["--acceleration", "-5"]) == 1
